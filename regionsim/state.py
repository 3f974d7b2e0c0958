# regionsim/state.py
from dataclasses import dataclass, field as dc_field, replace
from typing import Dict, Optional, Tuple

@dataclass
class CountryState:
    country: str
    year: int

    # --- Outcome Indicators (bounded) ---
    gdp_growth: float = 3.5
    unemployment: float = 5.0
    literacy_rate: float = 70.0
    life_expectancy: float = 65.0
    poverty_rate: float = 20.0
    co2_emissions: float = 2.0
    infant_mortality: float = 30.0
    population: float = 50_000_000.0

    # --- Policy Memory (last realized lever values) ---
    # None means "no prior value": the lever default is used instead.
    education_spending: Optional[float] = None
    health_expenditure: Optional[float] = None
    infrastructure_investment: Optional[float] = None
    agriculture_spending: Optional[float] = None
    manufacturing_spending: Optional[float] = None
    services_spending: Optional[float] = None
    energy_spending: Optional[float] = None
    technology_spending: Optional[float] = None
    tourism_spending: Optional[float] = None
    environment_spending: Optional[float] = None
    trade_liberalization: Optional[float] = None
    tariff_rate: Optional[float] = None

    # --- Structural Shares (% of GDP) ---
    agriculture_gdp_percent: float = 15.0
    manufacturing_gdp_percent: float = 20.0
    services_gdp_percent: float = 50.0

    # --- Derived KPIs ---
    tariff_revenue: float = 0.0
    consumer_welfare: float = 0.0

    def clone(self) -> 'CountryState':
        return replace(self)

@dataclass(frozen=True)
class PolicyDecision:
    id: str
    value: float
    min: float
    max: float

    def clamped(self) -> 'PolicyDecision':
        return replace(self, value=float(min(self.max, max(self.min, self.value))))

    def with_value(self, value: float) -> 'PolicyDecision':
        return replace(self, value=float(value)).clamped()

@dataclass(frozen=True)
class PolicySpillover:
    source_country: str
    target_country: str
    policy_type: str
    effect: float
    description: str
    magnitude: str
    timeframe: str
    sector: Optional[str] = None

@dataclass(frozen=True)
class DetailedSpillover:
    id: str
    source_country: str
    target_country: str
    policy_category: str
    effect_type: str
    magnitude: float
    description: str
    timeframe: str
    confidence: float
    trade_products: Tuple[str, ...] = ()
    sector: Optional[str] = None

@dataclass(frozen=True)
class TradeRelationship:
    source: str
    target: str
    trade_volume: float   # 0-100
    tariff_rate: float    # 0-50
    cooperation: float    # 0-100

@dataclass(frozen=True)
class RegionalEvent:
    id: str
    name: str
    description: str
    year: int
    effects: Dict[str, float] = dc_field(default_factory=dict)
    target_countries: Tuple[str, ...] = ()

@dataclass
class YearLog:
    year: int
    country: str
    gdp_growth: float; unemployment: float; literacy_rate: float
    life_expectancy: float; poverty_rate: float; co2_emissions: float
    infant_mortality: float; population: float
    tariff_revenue: float; consumer_welfare: float
    cooperation_index: float
    spillovers_in: int = 0
    spillover_effect: float = 0.0
    events: str = ""
    is_player: int = 0

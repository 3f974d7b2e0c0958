# regionsim/config.py
from __future__ import annotations
from dataclasses import dataclass, field as dc_field
from typing import Dict, List, Tuple, Optional

from .constants import (
    EDUCATION, HEALTH, CONNECTIVITY, AGRICULTURE, MANUFACTURING, SERVICES,
    ENERGY, TECHNOLOGY, TOURISM, ENVIRONMENT, TRADE, TARIFFS, NTBS, TRUST,
    TRADE_GDP, INFRA, ENV, MANUF, TECH, POWER,
    IMMEDIATE, SHORT_TERM, MEDIUM_TERM, LONG_TERM,
    SUMMIT_EVENT, TENSIONS_EVENT,
)
from .state import TradeRelationship

@dataclass(frozen=True)
class LeverEffect:
    target: str
    coefficient: float
    share_field: Optional[str] = None  # scale by state.<share_field> / 100
    multiplicative: bool = False       # target *= 1 + basis * coefficient

@dataclass(frozen=True)
class Lever:
    """One row of the lever response table.

    Delta levers respond to ``value - previous``; stance levers respond to
    ``(value - reference) / 100``. The reference of a stance lever is
    ``baseline`` when set, else the previously persisted value.
    """
    id: str
    memory_field: Optional[str]
    default: float
    minimum: float
    maximum: float
    effects: Tuple[LeverEffect, ...] = ()
    stance: bool = False
    baseline: Optional[float] = None

def default_levers() -> Tuple[Lever, ...]:
    E = LeverEffect
    return (
        # Human capital: slow, long-term investments
        Lever(EDUCATION, "education_spending", 4.0, 0.0, 10.0,
              (E("literacy_rate", 0.25), E("gdp_growth", 0.03))),
        Lever(HEALTH, "health_expenditure", 3.0, 0.0, 10.0,
              (E("life_expectancy", 0.08), E("infant_mortality", -0.3), E("gdp_growth", 0.02))),
        # Connectivity persists into infrastructure_investment
        Lever(CONNECTIVITY, "infrastructure_investment", 5.0, 0.0, 15.0,
              (E("gdp_growth", 0.05), E("unemployment", -0.1), E("poverty_rate", -0.15))),

        # Sector spending, scaled by the sector's share of GDP
        Lever(AGRICULTURE, "agriculture_spending", 3.5, 0.0, 10.0,
              (E("gdp_growth", 0.2, "agriculture_gdp_percent"),
               E("poverty_rate", -0.5, "agriculture_gdp_percent"))),
        Lever(MANUFACTURING, "manufacturing_spending", 2.0, 0.0, 10.0,
              (E("gdp_growth", 0.3, "manufacturing_gdp_percent"),
               E("unemployment", -0.4, "manufacturing_gdp_percent"))),
        Lever(SERVICES, "services_spending", 1.5, 0.0, 10.0,
              (E("gdp_growth", 0.2, "services_gdp_percent"),
               E("unemployment", -0.25, "services_gdp_percent"))),
        Lever(TOURISM, "tourism_spending", 0.8, 0.0, 5.0,
              (E("gdp_growth", 0.1, "services_gdp_percent"),
               E("unemployment", -0.1, "services_gdp_percent"))),
        Lever(ENERGY, "energy_spending", 4.0, 0.0, 10.0,
              (E("gdp_growth", 0.1), E("co2_emissions", 0.05))),
        Lever(TECHNOLOGY, "technology_spending", 1.0, 0.0, 10.0,
              (E("gdp_growth", 0.1), E("literacy_rate", 0.1))),
        # Environmental spending cuts emissions proportionally
        Lever(ENVIRONMENT, "environment_spending", 2.0, 0.0, 10.0,
              (E("co2_emissions", -0.02, multiplicative=True), E("gdp_growth", -0.02))),

        # Stances (absolute positions, not deltas)
        Lever(TARIFFS, "tariff_rate", 15.0, 0.0, 50.0,
              (E("gdp_growth", -0.12), E("unemployment", 0.09), E("poverty_rate", 0.18)),
              stance=True),
        Lever(NTBS, None, 60.0, 0.0, 100.0,
              (E("gdp_growth", -0.08),), stance=True, baseline=60.0),
        Lever(TRADE, "trade_liberalization", 50.0, 0.0, 100.0,
              (E("gdp_growth", 0.10),), stance=True, baseline=50.0),
        Lever(TRUST, None, 50.0, 0.0, 100.0,
              (E("gdp_growth", 0.06), E("infrastructure_investment", 0.3)), stance=True, baseline=50.0),
    )

@dataclass
class PolicyRates:
    levers: Tuple[Lever, ...] = dc_field(default_factory=default_levers)

    # Inbound spillover routing: policy_type -> ((field, share), ...)
    spillover_routing: Dict[str, Tuple[Tuple[str, float], ...]] = dc_field(default_factory=lambda: {
        TRADE_GDP: (("gdp_growth", 1.0),),
        INFRA:     (("infrastructure_investment", 1.0), ("gdp_growth", 0.1)),
        ENV:       (("co2_emissions", 1.0),),
        MANUF:     (("gdp_growth", 0.1), ("unemployment", -0.05)),
        TECH:      (("gdp_growth", 0.15), ("literacy_rate", 0.3)),
        POWER:     (("gdp_growth", 0.08),),
    })

    # Year-over-year noise on GDP growth (uniform, +/- pp)
    gdp_jitter: float = 0.25

    # Trade volume proxy = base - a*tariff - b*ntb + c*connectivity + d*trust
    proxy_base: float = 100.0
    proxy_tariff: float = 0.5
    proxy_ntb: float = 0.3
    proxy_connectivity: float = 2.0
    proxy_trust: float = 0.2
    revenue_base_share: float = 0.5

    # Consumer welfare proxy: lower tariffs/NTBs are better for consumers
    welfare_base: float = 100.0
    welfare_tariff: float = 0.8
    welfare_ntb: float = 0.3

    def lever(self, lever_id: str) -> Optional[Lever]:
        for lv in self.levers:
            if lv.id == lever_id: return lv
        return None

@dataclass(frozen=True)
class SpilloverRule:
    policy_type: str
    change_key: str
    coefficient: float
    use_intensity: bool
    use_cooperation: bool
    high: float
    medium: float
    timeframe: str
    description: str
    sector: Optional[str] = None
    energy_pairs_only: bool = False

def default_spillover_rules() -> Tuple[SpilloverRule, ...]:
    R = SpilloverRule
    return (
        R(TRADE_GDP, TRADE, 0.25, True, True, 0.10, 0.05, SHORT_TERM,
          "Trade spillover from {src}'s economic opening"),
        R(INFRA, CONNECTIVITY, 0.12, True, False, 0.08, 0.04, MEDIUM_TERM,
          "Cross-border infrastructure benefits from {src}"),
        # Keyed on source environment spending, not emissions: more spending, less partner pollution
        R(ENV, ENVIRONMENT, -0.08, False, False, 0.05, 0.02, LONG_TERM,
          "Environmental impact from {src}'s emissions"),
        R(MANUF, MANUFACTURING, 0.10, True, False, 0.06, 0.03, MEDIUM_TERM,
          "Manufacturing competitiveness impact from {src}", sector="manufacturing"),
        R(TECH, TECHNOLOGY, 0.15, False, True, 0.08, 0.04, LONG_TERM,
          "Technology transfer and innovation spillover from {src}", sector="technology"),
        R(POWER, ENERGY, 0.20, False, False, 0.10, 0.05, IMMEDIATE,
          "Energy security and pricing impact from {src}", sector="energy", energy_pairs_only=True),
    )

@dataclass
class SpilloverRates:
    rules: Tuple[SpilloverRule, ...] = dc_field(default_factory=default_spillover_rules)

    # Pairs with significant cross-border power trade (unordered)
    energy_pairs: Tuple[Tuple[str, str], ...] = (
        ("India", "Bhutan"),        # Hydroelectric power
        ("India", "Nepal"),         # Power trade
        ("Pakistan", "Afghanistan"),
        ("India", "Bangladesh"),    # Grid connectivity
    )

    # Product-group multipliers on (summed lever deltas) * volume/100
    product_coefficients: Dict[str, float] = dc_field(default_factory=lambda: {
        "textiles": 0.15, "pharma": 0.20, "machinery": 0.18, "agriculture": 0.25,
        "energy": 0.25, "tourism": 0.15, "construction": 0.20,
        "default": 0.20,  # trade-openness delta / 100
    })

    # General (no product match) spillovers, on delta * volume/100
    general_coefficients: Dict[str, float] = dc_field(default_factory=lambda: {
        "infrastructure": 0.03, "education": 0.015, "health": 0.01,
        "trade": 0.20, "environment": 0.02,
    })
    percent_scaled: Tuple[str, ...] = ("trade",)  # delta is on a 0-100 scale

    min_magnitude: float = 0.01     # below this a spillover is noise
    general_threshold: float = 0.1  # minimum |delta| for a general spillover
    product_confidence: float = 0.8
    general_confidence: float = 0.7

@dataclass(frozen=True)
class EventSpec:
    id: str
    name: str
    probability: float
    description: str
    effects: Dict[str, float]
    targets: Tuple[str, ...] = ()
    region_wide: bool = False
    unique: bool = False

def default_event_catalog() -> Tuple[EventSpec, ...]:
    E = EventSpec
    return (
        # --- Natural Disasters ---
        E("monsoon_floods", "Severe Monsoon Floods", 0.08,
          "Unusually heavy monsoon rains have caused widespread flooding, displacing thousands and damaging crops and infrastructure.",
          {"gdp_growth": -0.6, "poverty_rate": 1.5, "infrastructure_investment": -1.0},
          targets=("Bangladesh", "India", "Pakistan")),
        E("cyclone_bay_of_bengal", "Cyclone in Bay of Bengal", 0.06,
          "A powerful cyclone makes landfall, devastating coastal communities and disrupting port activities.",
          {"gdp_growth": -0.8, "population": -0.005, "infrastructure_investment": -1.5},
          targets=("Bangladesh", "India", "Sri Lanka")),
        E("drought", "Severe Drought", 0.05,
          "A prolonged drought has led to water shortages and crop failures, impacting food security.",
          {"gdp_growth": -0.5, "agriculture_gdp_percent": -1.0, "poverty_rate": 1.2},
          targets=("Pakistan", "India", "Afghanistan")),
        # --- Economic ---
        E("global_recession", "Global Economic Recession", 0.07,
          "A global economic downturn reduces demand for exports and slows foreign investment across the region.",
          {"gdp_growth": -1.0, "unemployment": 1.5}, region_wide=True),
        E("oil_price_shock", "Oil Price Shock", 0.08,
          "A sudden surge in global oil prices increases import costs and fuels inflation.",
          {"gdp_growth": -0.4, "co2_emissions": -0.1}, region_wide=True),
        E("fdi_boom", "Major Foreign Investment", 0.05,
          "A major multinational corporation announces significant investment in the tech and manufacturing sectors, boosting employment and growth.",
          {"gdp_growth": 0.8, "unemployment": -0.5, "technology_spending": 0.5},
          targets=("India", "Bangladesh"), unique=True),
        # --- Political / Social ---
        E(SUMMIT_EVENT, "Successful Regional Summit", 0.15,
          "A successful regional summit leads to new agreements on trade facilitation and cross-border projects.",
          {"trust": 10.0, "connectivity": 0.5}, region_wide=True),
        E(TENSIONS_EVENT, "Border Tensions Flare Up", 0.08,
          "Renewed tensions along the border lead to trade disruptions and decreased political trust.",
          {"trust": -15.0, "gdp_growth": -0.3}, targets=("India", "Pakistan")),
        E("health_breakthrough", "Public Health Breakthrough", 0.04,
          "A new vaccine program, shared between nations, dramatically reduces the incidence of a major disease.",
          {"life_expectancy": 0.5, "health_expenditure": 0.2},
          targets=("India", "Bangladesh", "Sri Lanka"), unique=True),
        E("himalayan_earthquake", "Major Himalayan Earthquake", 0.03,
          "A major earthquake has struck the Himalayan region, causing significant damage to infrastructure and requiring international aid.",
          {"gdp_growth": -1.2, "infrastructure_investment": -2.5, "poverty_rate": 2.0},
          targets=("Nepal", "Bhutan", "India"), unique=True),
    )

@dataclass
class EventRates:
    catalog: Tuple[EventSpec, ...] = dc_field(default_factory=default_event_catalog)
    check_probability: float = 0.4  # chance per year that the catalog is drawn at all
    # Events whose odds follow the cooperation index: +1 rises with it, -1 falls
    cooperation_scaled: Dict[str, int] = dc_field(default_factory=lambda: {
        SUMMIT_EVENT: +1, TENSIONS_EVENT: -1,
    })
    cooperation_norm: float = 50.0
    stability_interval: int = 3
    stability_effects: Dict[str, float] = dc_field(default_factory=lambda: {"gdp_growth": 0.1})

@dataclass
class TradeRates:
    openness_volume: float = 0.10  # volume *= 1 + openness/100 * k
    openness_tariff: float = 0.20  # tariff *= 1 - openness/100 * k
    infra_baseline: float = 5.0
    infra_volume: float = 0.02
    max_volume: float = 100.0
    max_tariff: float = 50.0
    max_cooperation: float = 100.0

@dataclass
class AIRates:
    # Threshold nudges for non-player countries
    gdp_floor: float = 2.0
    unemployment_ceiling: float = 8.0
    low_growth_nudges: Dict[str, float] = dc_field(default_factory=lambda: {CONNECTIVITY: 0.5, TARIFFS: -1.0})
    high_unemployment_nudges: Dict[str, float] = dc_field(default_factory=lambda: {CONNECTIVITY: 0.8})
    noise: float = 0.2  # uniform width

@dataclass
class Config:
    countries: List[str]
    player: Optional[str] = None
    T: int = 20
    start_year: int = 2023
    seed: int = 42
    policy: PolicyRates = dc_field(default_factory=PolicyRates)
    spill: SpilloverRates = dc_field(default_factory=SpilloverRates)
    events: EventRates = dc_field(default_factory=EventRates)
    trade: TradeRates = dc_field(default_factory=TradeRates)
    ai: AIRates = dc_field(default_factory=AIRates)
    initial_trade: List[TradeRelationship] = dc_field(default_factory=list)
    initial_cooperation: float = 65.0
    # Per-country offsets on the default decisions
    variations: Dict[str, Dict[str, float]] = dc_field(default_factory=dict)
    # Per-country initial state overrides (field -> value)
    initial_stats: Dict[str, Dict[str, float]] = dc_field(default_factory=dict)
    # Initial state fallbacks when no indicator value is available
    fallbacks: Dict[str, float] = dc_field(default_factory=lambda: {
        "gdp_growth": 3.5, "unemployment": 5.0, "literacy_rate": 70.0,
        "life_expectancy": 65.0, "poverty_rate": 20.0, "co2_emissions": 2.0,
        "population": 50_000_000.0, "infant_mortality": 30.0,
        "agriculture_gdp_percent": 15.0, "manufacturing_gdp_percent": 20.0,
        "services_gdp_percent": 50.0,
    })
    # State field -> indicator name in the reference table
    indicator_names: Dict[str, str] = dc_field(default_factory=lambda: {
        "gdp_growth": "GDP", "unemployment": "Unemployment", "literacy_rate": "Literacy",
        "life_expectancy": "Health", "poverty_rate": "Poverty", "co2_emissions": "CO2_Emissions",
        "population": "Population", "infant_mortality": "MortalityRate",
        "education_spending": "Education", "infrastructure_investment": "Infrastructure",
        "agriculture_gdp_percent": "Agriculture", "manufacturing_gdp_percent": "Manufacturing",
        "services_gdp_percent": "Services",
    })

    @property
    def end_year(self) -> int:
        return self.start_year + self.T

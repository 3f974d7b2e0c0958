# regionsim/engine.py
from __future__ import annotations
import dataclasses as dc
import logging
from typing import Callable, Dict, List, Optional

import numpy as np
import pandas as pd

from .catalog import IndicatorTable, TradeProductCatalog
from .config import Config
from .constants import CONNECTIVITY, TRADE, TRUST
from .events import generate_regional_events, merge_event_effects
from .policies import Decisions, cooperation_index, initial_decisions, policy_hold
from .policy_model import apply_policy_effects
from .scoring import calculate_score
from .spillovers import calculate_detailed_spillovers, simulate_regional_effects
from .state import (CountryState, DetailedSpillover, PolicyDecision, PolicySpillover,
                    RegionalEvent, YearLog)
from .trade import TradeGraph
from .utils import clamp_state, decision_map

logger = logging.getLogger(__name__)

Policy = Callable[[int, Dict[str, CountryState], Decisions, Config, np.random.Generator], Decisions]

_STATE_FIELDS = {f.name for f in dc.fields(CountryState)}

class RegionalSimulation:
    """
    Yearly loop over all countries.

    One call to ``step`` is one transaction: every component reads the
    year N-1 snapshot and the new states, trade graph and logs are only
    committed once every country has been updated.
    """

    def __init__(self, cfg: Config,
                 catalog: Optional[TradeProductCatalog] = None,
                 indicators: Optional[IndicatorTable] = None,
                 player_decisions: Optional[List[PolicyDecision]] = None):
        self.cfg = cfg
        self.rng = np.random.default_rng(cfg.seed)
        self.catalog = catalog
        self.indicators = indicators
        self.year = cfg.start_year

        self.state: Dict[str, CountryState] = {c: self.build_initial_state(c, cfg.start_year) for c in cfg.countries}
        self.initial_state: Dict[str, CountryState] = dict(self.state)
        self.trade = TradeGraph(cfg.initial_trade, cfg.countries)
        self.decisions: Decisions = initial_decisions(cfg, player_decisions)
        self.cooperation_index: float = cfg.initial_cooperation

        self.event_history: List[RegionalEvent] = []
        self.spillover_log: List[PolicySpillover] = []
        self.detailed_spillovers: List[DetailedSpillover] = []
        self.logs: List[YearLog] = []
        self.player_history: List[CountryState] = [self.state[cfg.player]] if cfg.player else []

    def build_initial_state(self, country: str, year: int) -> CountryState:
        cfg = self.cfg
        values: Dict[str, float] = dict(cfg.fallbacks)
        if self.indicators is not None:
            self.indicators.require_loaded()
            for field, name in cfg.indicator_names.items():
                val = self.indicators.lookup(name, country, year)
                if val is not None: values[field] = val
        values.update(cfg.initial_stats.get(country, {}))

        # Policy memory starts at the lever defaults unless data says otherwise
        kwargs = {lv.memory_field: lv.default for lv in cfg.policy.levers if lv.memory_field}
        for k, v in values.items():
            if k in _STATE_FIELDS and k not in ("country", "year"):
                kwargs[k] = float(v)
            else:
                logger.warning("Ignoring unknown initial field %r for %s", k, country)
        return clamp_state(CountryState(country=country, year=year, **kwargs))

    def _trade_changes(self, decisions: Decisions) -> Dict[str, Dict[str, float]]:
        p = self.cfg.policy
        out: Dict[str, Dict[str, float]] = {}
        for c, ds in decisions.items():
            vals = decision_map(ds)
            ch: Dict[str, float] = {}
            if CONNECTIVITY in vals: ch["infrastructure_investment"] = vals[CONNECTIVITY]
            if TRUST in vals: ch["cooperation_policy"] = vals[TRUST] - p.lever(TRUST).baseline
            if TRADE in vals: ch["trade_openness"] = vals[TRADE] - p.lever(TRADE).baseline
            out[c] = ch
        return out

    def step(self, policy: Optional[Policy] = None,
             player_decisions: Optional[List[PolicyDecision]] = None) -> List[RegionalEvent]:
        cfg = self.cfg
        year = self.year + 1
        snapshot = dict(self.state)

        # 1. Decisions for every country
        policy = policy or policy_hold
        decisions = policy(year, snapshot, self.decisions, cfg, self.rng)
        if cfg.player and player_decisions is not None:
            decisions[cfg.player] = [d.clamped() for d in player_decisions]

        # 2-3. Cooperation index and regional events
        coop = cooperation_index(decisions)
        events = generate_regional_events(year, coop, self.event_history, cfg.countries, self.rng, cfg.events)

        # 4-5. Spillovers (detailed only for the player)
        spill = simulate_regional_effects(snapshot, decisions, self.trade, cfg.policy, cfg.spill)
        detailed: List[DetailedSpillover] = []
        if cfg.player and self.catalog is not None:
            detailed = calculate_detailed_spillovers(
                cfg.player, decision_map(decisions.get(cfg.player, ())), self.trade,
                snapshot[cfg.player], self.catalog, cfg.policy, cfg.spill)

        # 6. Country updates, all from the year N-1 snapshot
        new_states: Dict[str, CountryState] = {}
        for c in cfg.countries:
            nxt = apply_policy_effects(
                snapshot[c], decisions.get(c, ()), spill.get(c, []),
                merge_event_effects(events, c), self.rng, cfg.policy)
            new_states[c] = dc.replace(nxt, year=year)

        # 7. Trade matrix
        new_trade = self.trade.updated(self._trade_changes(decisions), cfg.trade)

        # Commit
        self.state = new_states
        self.trade = new_trade
        self.decisions = decisions
        self.cooperation_index = coop
        self.event_history.extend(events)
        for sps in spill.values(): self.spillover_log.extend(sps)
        self.detailed_spillovers = detailed
        self.year = year
        if cfg.player: self.player_history.append(new_states[cfg.player])
        self._log(year, spill, events)

        logger.debug("Year %d: coop=%.1f events=%s spillovers=%d", year, coop,
                     [e.id for e in events], sum(len(v) for v in spill.values()))
        return events

    def _log(self, year: int, spill: Dict[str, List[PolicySpillover]], events: List[RegionalEvent]):
        for c, s in self.state.items():
            inbound = spill.get(c, [])
            self.logs.append(YearLog(
                year=year, country=c,
                gdp_growth=s.gdp_growth, unemployment=s.unemployment, literacy_rate=s.literacy_rate,
                life_expectancy=s.life_expectancy, poverty_rate=s.poverty_rate,
                co2_emissions=s.co2_emissions, infant_mortality=s.infant_mortality,
                population=s.population,
                tariff_revenue=s.tariff_revenue, consumer_welfare=s.consumer_welfare,
                cooperation_index=self.cooperation_index,
                spillovers_in=len(inbound),
                spillover_effect=float(sum(sp.effect for sp in inbound)),
                events=",".join(e.id for e in events if c in e.target_countries),
                is_player=int(c == self.cfg.player),
            ))

    def run(self, policy: Optional[Policy] = None, years: Optional[int] = None) -> pd.DataFrame:
        n = self.cfg.T if years is None else years
        logger.info("Running %d years from %d for %d countries", n, self.year, len(self.cfg.countries))
        for _ in range(n):
            self.step(policy=policy)
        return self.to_frame()

    def to_frame(self) -> pd.DataFrame:
        return pd.DataFrame([dc.asdict(l) for l in self.logs])

    def final_score(self) -> float:
        if not self.cfg.player:
            raise ValueError("No player country configured")
        p = self.cfg.player
        return calculate_score(self.state[p], self.initial_state[p])

# regionsim/policies.py
import numpy as np
from typing import Dict, List, Mapping, Optional

from .config import Config
from .state import CountryState, PolicyDecision
from .constants import TRUST
from .utils import canonical_lever

Decisions = Dict[str, List[PolicyDecision]]

def create_default_decisions(cfg: Config) -> List[PolicyDecision]:
    return [PolicyDecision(lv.id, lv.default, lv.minimum, lv.maximum) for lv in cfg.policy.levers]

def apply_country_variations(decisions: List[PolicyDecision], offsets: Mapping[str, float]) -> List[PolicyDecision]:
    offsets = {canonical_lever(k): v for k, v in (offsets or {}).items()}
    return [d.with_value(d.value + offsets.get(d.id, 0.0)) for d in decisions]

def initial_decisions(cfg: Config, player_decisions: Optional[List[PolicyDecision]] = None) -> Decisions:
    base = create_default_decisions(cfg)
    dec = {c: apply_country_variations(base, cfg.variations.get(c, {})) for c in cfg.countries}
    if cfg.player and player_decisions is not None:
        dec[cfg.player] = [d.clamped() for d in player_decisions]
    return dec

# --- Decision sources: policy(year, states, decisions, cfg, rng) -> Decisions ---

def policy_hold(year: int, states: Mapping[str, CountryState], decisions: Decisions,
                cfg: Config, rng: np.random.Generator) -> Decisions:
    return {c: list(decisions.get(c) or create_default_decisions(cfg)) for c in cfg.countries}

def policy_adaptive(year: int, states: Mapping[str, CountryState], decisions: Decisions,
                    cfg: Config, rng: np.random.Generator) -> Decisions:
    """Non-player countries nudge their levers from last year's outcomes; the player's are kept."""
    ai = cfg.ai
    dec: Decisions = {}
    for c in cfg.countries:
        current = list(decisions.get(c) or create_default_decisions(cfg))
        if c == cfg.player:
            dec[c] = current
            continue
        s = states[c]
        nudges: Dict[str, float] = {}
        if s.gdp_growth < ai.gdp_floor: nudges.update(ai.low_growth_nudges)
        # Later rules overwrite earlier nudges on the same lever
        if s.unemployment > ai.unemployment_ceiling: nudges.update(ai.high_unemployment_nudges)
        adjusted = []
        for d in current:
            step = nudges.get(d.id, 0.0) + float(rng.uniform(-ai.noise / 2.0, ai.noise / 2.0))
            adjusted.append(d.with_value(d.value + step))
        dec[c] = adjusted
    return dec

def cooperation_index(decisions: Decisions, default: float = 50.0) -> float:
    """Mean trust stance across countries."""
    vals = []
    for ds in decisions.values():
        trust = [d.value for d in ds if canonical_lever(d.id) == TRUST]
        vals.append(trust[-1] if trust else default)
    return float(np.mean(vals)) if vals else default

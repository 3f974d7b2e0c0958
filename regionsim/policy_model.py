# regionsim/policy_model.py
from __future__ import annotations
from dataclasses import fields, replace
from typing import Dict, Iterable, Mapping, Optional
import numpy as np

from .config import PolicyRates, Lever, LeverEffect
from .constants import TARIFFS, NTBS, CONNECTIVITY, TRUST
from .state import CountryState, PolicyDecision, PolicySpillover
from .utils import clamp_state, decision_map, is_number, previous_value

_DEFAULT_RATES = PolicyRates()
_IDENTITY = {"country", "year"}
_STATE_FIELDS = {f.name for f in fields(CountryState)} - _IDENTITY

def _field_default(rates: PolicyRates, name: str) -> float:
    for lv in rates.levers:
        if lv.memory_field == name: return lv.default
    return 0.0

def _read(s: CountryState, name: str, rates: PolicyRates) -> float:
    val = getattr(s, name)
    return float(val) if is_number(val) else _field_default(rates, name)

def _lever_basis(state: CountryState, lever: Lever, value: float) -> float:
    if lever.stance:
        ref = lever.baseline if lever.baseline is not None else previous_value(state, lever)
        return (value - ref) / 100.0
    return value - previous_value(state, lever)

def _apply_effect(new: CountryState, state: CountryState, eff: LeverEffect, basis: float, rates: PolicyRates):
    coef = eff.coefficient
    if eff.share_field:
        # Scaled by sector share of GDP
        coef *= float(getattr(state, eff.share_field)) / 100.0
    cur = _read(new, eff.target, rates)
    if eff.multiplicative:
        setattr(new, eff.target, cur * (1.0 + basis * coef))
    else:
        setattr(new, eff.target, cur + basis * coef)

def apply_policy_effects(
    state: CountryState,
    decisions: Iterable[PolicyDecision],
    spillovers: Iterable[PolicySpillover] = (),
    event_effects: Optional[Mapping[str, float]] = None,
    rng: Optional[np.random.Generator] = None,
    rates: Optional[PolicyRates] = None,
) -> CountryState:
    """
    Next-year state of one country.

    Pure with respect to its inputs: ``state`` is never mutated and the result
    shares nothing mutable with it. The only randomness is the GDP jitter drawn
    from ``rng``.
    """
    r = rates or _DEFAULT_RATES
    rng = rng if rng is not None else np.random.default_rng()
    new = state.clone()
    values = decision_map(decisions)

    # 1-2. Lever responses (deltas and stances)
    applied: Dict[str, float] = {}
    for lever in r.levers:
        if lever.id not in values: continue
        value = values[lever.id]
        basis = _lever_basis(state, lever, value)
        for eff in lever.effects:
            _apply_effect(new, state, eff, basis, r)
        if lever.memory_field is not None:
            applied[lever.memory_field] = value

    # 3. Derived KPIs
    tariff = values.get(TARIFFS, previous_value(state, r.lever(TARIFFS)))
    ntb = values.get(NTBS, r.lever(NTBS).default)
    connectivity = values.get(CONNECTIVITY, previous_value(state, r.lever(CONNECTIVITY)))
    trust = values.get(TRUST, r.lever(TRUST).default)
    volume_proxy = (r.proxy_base - r.proxy_tariff * tariff - r.proxy_ntb * ntb
                    + r.proxy_connectivity * connectivity + r.proxy_trust * trust)
    new.tariff_revenue = float((tariff / 100.0) * volume_proxy * r.revenue_base_share)
    new.consumer_welfare = float(r.welfare_base - r.welfare_tariff * tariff - r.welfare_ntb * ntb)

    # 4. Inbound spillovers
    for sp in spillovers or ():
        for target, share in r.spillover_routing.get(sp.policy_type, ()):
            setattr(new, target, _read(new, target, r) + sp.effect * share)

    # 5. Event effects; unknown or non-numeric fields are skipped
    for key, delta in (event_effects or {}).items():
        if key not in _STATE_FIELDS: continue
        cur = getattr(new, key)
        if is_number(cur) and is_number(delta):
            setattr(new, key, float(cur) + float(delta))

    # 6. Year-over-year noise
    new.gdp_growth += float(rng.uniform(-r.gdp_jitter, r.gdp_jitter))

    # 7-8. Bounds, then realized policy into memory
    new = clamp_state(new)
    return replace(new, **applied)

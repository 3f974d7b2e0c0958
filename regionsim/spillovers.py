# regionsim/spillovers.py
from __future__ import annotations
import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Mapping, Optional, Set

from .catalog import ReferenceDataError, TradeProductCatalog
from .config import PolicyRates, SpilloverRates, SpilloverRule
from .constants import (
    CATEGORY_LEVERS, TRADE,
    PRODUCT_RELEVANCE, PRODUCT_CATEGORY, PRODUCT_SECTOR, PRODUCT_EFFECT_TYPE,
    PRODUCT_TIMEFRAME, PRODUCT_GROUPS, POLICY_EFFECT_TYPE, POLICY_TIMEFRAME,
    PRODUCT_DESCRIPTIONS, PRODUCT_DESCRIPTION_DEFAULT,
    CATEGORY_DESCRIPTIONS, CATEGORY_DESCRIPTION_DEFAULT, SHORT_TERM,
)
from .state import CountryState, DetailedSpillover, PolicyDecision, PolicySpillover
from .trade import TradeGraph, has_energy_trade
from .utils import canonical_lever, decision_map, first_match, magnitude_bucket, previous_value

logger = logging.getLogger(__name__)

_DEFAULT_POLICY = PolicyRates()
_DEFAULT_SPILL = SpilloverRates()
_GROUP_LEVERS = {group: levers for group, _, levers in PRODUCT_GROUPS}

def policy_deltas(state: CountryState, values: Mapping[str, float],
                  rates: Optional[PolicyRates] = None) -> Dict[str, float]:
    """{lever: value - last realized value} for every known lever in ``values``."""
    r = rates or _DEFAULT_POLICY
    out: Dict[str, float] = {}
    for lever_id, value in values.items():
        lever = r.lever(lever_id)
        if lever is None: continue
        ref = lever.baseline if (lever.stance and lever.baseline is not None) else previous_value(state, lever)
        out[lever_id] = float(value) - ref
    return out

def memory_deltas(state: CountryState, values: Mapping[str, float],
                  rates: Optional[PolicyRates] = None) -> Dict[str, float]:
    """{lever: value - persisted value}; stance baselines are ignored."""
    r = rates or _DEFAULT_POLICY
    out: Dict[str, float] = {}
    for lever_id, value in values.items():
        lever = r.lever(lever_id)
        if lever is None: continue
        out[lever_id] = float(value) - previous_value(state, lever)
    return out

def extract_policy_changes(state: CountryState, decisions: Iterable[PolicyDecision],
                           rates: Optional[PolicyRates] = None) -> Dict[str, float]:
    return policy_deltas(state, decision_map(decisions), rates)

# --- Aggregate ---

def _rule_effect(rule: SpilloverRule, change: float, intensity: float, coop: float) -> float:
    effect = change * rule.coefficient
    if rule.use_intensity: effect *= intensity
    if rule.use_cooperation: effect *= coop
    return float(effect)

def calculate_trade_spillovers(source: str, policy_changes: Mapping[str, float], trade_graph: TradeGraph,
                               rates: Optional[SpilloverRates] = None) -> List[PolicySpillover]:
    r = rates or _DEFAULT_SPILL
    out: List[PolicySpillover] = []
    for rel in trade_graph.edges_touching(source):
        target = rel.target if rel.source == source else rel.source
        intensity = rel.trade_volume / 100.0
        coop = rel.cooperation / 100.0
        for rule in r.rules:
            change = policy_changes.get(rule.change_key)
            if not change: continue
            if rule.energy_pairs_only and not has_energy_trade(source, target, r.energy_pairs): continue
            effect = _rule_effect(rule, change, intensity, coop)
            out.append(PolicySpillover(
                source_country=source, target_country=target,
                policy_type=rule.policy_type, effect=effect,
                description=rule.description.format(src=source, dst=target),
                magnitude=magnitude_bucket(effect, rule.high, rule.medium),
                timeframe=rule.timeframe, sector=rule.sector,
            ))
    return out

def simulate_regional_effects(states: Mapping[str, CountryState],
                              decisions: Mapping[str, Iterable[PolicyDecision]],
                              trade_graph: TradeGraph,
                              policy_rates: Optional[PolicyRates] = None,
                              spill_rates: Optional[SpilloverRates] = None) -> Dict[str, List[PolicySpillover]]:
    """Inbound spillovers grouped by target country."""
    by_target: Dict[str, List[PolicySpillover]] = defaultdict(list)
    for source, state in states.items():
        changes = extract_policy_changes(state, decisions.get(source, ()), policy_rates)
        for sp in calculate_trade_spillovers(source, changes, trade_graph, spill_rates):
            by_target[sp.target_country].append(sp)
    return dict(by_target)

# --- Detailed (product-aware) ---

def relevant_categories(product: str) -> Set[str]:
    low = product.lower()
    cats: Set[str] = set()
    for key, policies in PRODUCT_RELEVANCE:
        if key in low: cats.update(policies)
    return cats

def is_policy_relevant(values: Mapping[str, float], product: str) -> bool:
    return any(CATEGORY_LEVERS.get(c) in values for c in relevant_categories(product))

def product_group(product: str) -> Optional[str]:
    low = product.lower()
    for group, keywords, _ in PRODUCT_GROUPS:
        if any(k in low for k in keywords): return group
    return None

def product_magnitude(deltas: Mapping[str, float], product: str, trade_volume: float,
                      rates: Optional[SpilloverRates] = None) -> float:
    r = rates or _DEFAULT_SPILL
    base = trade_volume / 100.0
    group = product_group(product)
    if group is None:
        return float(deltas.get(TRADE, 0.0) / 100.0 * base * r.product_coefficients["default"])
    change = sum(deltas.get(lv, 0.0) for lv in _GROUP_LEVERS[group])
    return float(change * base * r.product_coefficients[group])

def general_magnitude(category: str, delta: float, trade_volume: float,
                      rates: Optional[SpilloverRates] = None) -> float:
    r = rates or _DEFAULT_SPILL
    coef = r.general_coefficients.get(category)
    if coef is None: return 0.0
    scaled = delta / 100.0 if category in r.percent_scaled else delta
    return float(trade_volume / 100.0 * scaled * coef)

def describe_spillover(src: str, dst: str, category: str, product: Optional[str], positive: bool) -> str:
    if product:
        low = product.lower()
        for keywords, pos, neg in PRODUCT_DESCRIPTIONS:
            if any(k in low for k in keywords):
                return (pos if positive else neg).format(src=src, dst=dst, product=product)
        pos, neg = PRODUCT_DESCRIPTION_DEFAULT
        return (pos if positive else neg).format(src=src, dst=dst, product=product)
    templates = CATEGORY_DESCRIPTIONS.get(category)
    if templates is None:
        return CATEGORY_DESCRIPTION_DEFAULT.format(src=src, dst=dst, category=category)
    return (templates[0] if positive else templates[1]).format(src=src, dst=dst)

def calculate_detailed_spillovers(source: str, policy_changes: Mapping[str, float], trade_graph: TradeGraph,
                                  source_state: CountryState, catalog: Optional[TradeProductCatalog],
                                  policy_rates: Optional[PolicyRates] = None,
                                  spill_rates: Optional[SpilloverRates] = None) -> List[DetailedSpillover]:
    """
    Product-level spillovers of ``source``'s policy values onto each partner.

    ``policy_changes`` holds this year's lever values; magnitudes use the delta
    against ``source_state``'s persisted policy memory. Product keywords are
    matched in table order and the first hit decides group, category, sector
    and timeframe. Display data only: nothing here feeds back into state.
    """
    if catalog is None:
        raise ReferenceDataError("Detailed spillovers need a loaded trade-product catalog.")
    catalog.require_loaded()
    r = spill_rates or _DEFAULT_SPILL
    values = {canonical_lever(k): float(v) for k, v in policy_changes.items() if canonical_lever(k)}
    deltas = memory_deltas(source_state, values, policy_rates)

    out: List[DetailedSpillover] = []
    for rel in trade_graph.edges_touching(source):
        target = rel.target if rel.source == source else rel.source
        _, _, products = catalog.main_trade_products(source, target)
        matched: Set[str] = set()

        for product in products:
            if not is_policy_relevant(values, product): continue
            magnitude = product_magnitude(deltas, product, rel.trade_volume, r)
            if abs(magnitude) <= r.min_magnitude: continue
            category = first_match(product, PRODUCT_CATEGORY, "trade")
            matched.add(category)
            out.append(DetailedSpillover(
                id=f"{rel.source}-{rel.target}-{product}",
                source_country=source, target_country=target,
                policy_category=category,
                effect_type=first_match(product, PRODUCT_EFFECT_TYPE, "trade"),
                magnitude=magnitude,
                description=describe_spillover(source, target, category, product, magnitude > 0),
                timeframe=first_match(product, PRODUCT_TIMEFRAME, "long-term"),
                confidence=r.product_confidence,
                trade_products=(product,),
                sector=first_match(product, PRODUCT_SECTOR, "trade"),
            ))

        # General category spillovers where no product already covers the category
        for category in r.general_coefficients:
            lever = CATEGORY_LEVERS[category]
            if lever not in deltas or category in matched: continue
            delta = deltas[lever]
            if abs(delta) <= r.general_threshold: continue
            magnitude = general_magnitude(category, delta, rel.trade_volume, r)
            if abs(magnitude) <= r.min_magnitude: continue
            out.append(DetailedSpillover(
                id=f"{rel.source}-{rel.target}-{category}",
                source_country=source, target_country=target,
                policy_category=category,
                effect_type=POLICY_EFFECT_TYPE.get(category, "trade"),
                magnitude=magnitude,
                description=describe_spillover(source, target, category, None, magnitude > 0),
                timeframe=POLICY_TIMEFRAME.get(category, SHORT_TERM),
                confidence=r.general_confidence,
            ))

    logger.debug("%s: %d detailed spillovers", source, len(out))
    return out

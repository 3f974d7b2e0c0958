import pytest

from regionsim.catalog import ReferenceDataError, TradeProductCatalog
from regionsim.constants import HIGH, LOW, MEDIUM, POWER, PRODUCT_CATEGORY, TRADE_GDP
from regionsim.spillovers import (
    calculate_detailed_spillovers, calculate_trade_spillovers, extract_policy_changes,
    product_group, simulate_regional_effects,
)
from regionsim.state import CountryState, PolicyDecision, TradeRelationship
from regionsim.trade import TradeGraph
from regionsim.utils import first_match, magnitude_bucket

def test_trade_spillover_scales_with_intensity_and_cooperation(pair_graph):
    out = calculate_trade_spillovers("India", {"trade": 10.0}, pair_graph)
    assert len(out) == 1
    sp = out[0]
    assert sp.target_country == "Bangladesh" and sp.policy_type == TRADE_GDP
    assert sp.effect == pytest.approx(10.0 * 0.25 * 0.5 * 0.8)
    assert sp.magnitude == HIGH

def test_zero_cooperation_gives_zero_trade_effect():
    g = TradeGraph([TradeRelationship("India", "Pakistan", 40.0, 25.0, 0.0)])
    out = calculate_trade_spillovers("India", {"trade": 20.0, "technology": 3.0}, g)
    assert out and all(sp.effect == 0.0 for sp in out)

def test_incoming_edges_also_carry_spillovers(pair_graph):
    out = calculate_trade_spillovers("Bangladesh", {"connectivity": 2.0}, pair_graph)
    assert [sp.target_country for sp in out] == ["India"]
    assert out[0].effect == pytest.approx(2.0 * 0.12 * 0.5)

def test_energy_only_between_power_trading_pairs():
    g = TradeGraph([TradeRelationship("India", "Bhutan", 12.5, 0.0, 95.0),
                    TradeRelationship("India", "Pakistan", 2.1, 25.0, 35.0)])
    out = calculate_trade_spillovers("India", {"energy": 1.0}, g)
    assert [(sp.target_country, sp.policy_type) for sp in out] == [("Bhutan", POWER)]
    assert out[0].effect == pytest.approx(0.2)

def test_no_change_emits_nothing(pair_graph):
    assert calculate_trade_spillovers("India", {"trade": 0.0}, pair_graph) == []

def test_magnitude_buckets_are_strict():
    assert magnitude_bucket(0.10, 0.10, 0.05) == MEDIUM
    assert magnitude_bucket(-0.11, 0.10, 0.05) == HIGH
    assert magnitude_bucket(0.05, 0.10, 0.05) == LOW

def test_extract_policy_changes_uses_baselines_and_memory():
    s = CountryState(country="India", year=2023, tariff_rate=20.0, infrastructure_investment=7.0)
    ch = extract_policy_changes(s, [PolicyDecision("trade", 60, 0, 100), PolicyDecision("tariffs", 10, 0, 50),
                                    PolicyDecision("infrastructure", 9, 0, 15), PolicyDecision("bogus", 3, 0, 9)])
    assert ch == {"trade": 10.0, "tariffs": -10.0, "connectivity": 2.0}

def test_simulate_regional_effects_groups_by_target(pair_graph):
    states = {c: CountryState(country=c, year=2023) for c in ("India", "Bangladesh")}
    decisions = {"India": [PolicyDecision("trade", 70, 0, 100)], "Bangladesh": []}
    out = simulate_regional_effects(states, decisions, pair_graph)
    assert list(out) == ["Bangladesh"]
    assert out["Bangladesh"][0].effect == pytest.approx(20.0 * 0.25 * 0.5 * 0.8)

def _catalog(products):
    return TradeProductCatalog({"imports": {"India": {"Bangladesh": products}}, "exports": {}})

def test_detailed_requires_loaded_catalog(pair_graph, base_state):
    with pytest.raises(ReferenceDataError):
        calculate_detailed_spillovers("India", {"trade": 60}, pair_graph, base_state, None)
    with pytest.raises(ReferenceDataError):
        calculate_detailed_spillovers("India", {"trade": 60}, pair_graph, base_state, TradeProductCatalog())

def test_detailed_product_spillover(pair_graph, base_state):
    out = calculate_detailed_spillovers("India", {"manufacturing": 4.0}, pair_graph, base_state,
                                        _catalog(["Cotton textiles"]))
    assert len(out) == 1
    sp = out[0]
    assert sp.id == "India-Bangladesh-Cotton textiles"
    assert sp.policy_category == "manufacturing"
    assert sp.sector == "manufacturing"
    assert sp.timeframe == "short-term"
    assert sp.trade_products == ("Cotton textiles",)
    assert sp.magnitude == pytest.approx(2.0 * 0.5 * 0.15)
    assert sp.confidence == 0.8

def test_detailed_general_spillover_without_products(pair_graph, base_state):
    out = calculate_detailed_spillovers("India", {"connectivity": 8.0}, pair_graph, base_state, _catalog([]))
    assert [sp.id for sp in out] == ["India-Bangladesh-infrastructure"]
    assert out[0].magnitude == pytest.approx(0.5 * 3.0 * 0.03)
    assert out[0].effect_type == "investment"
    assert out[0].timeframe == "medium-term"
    assert out[0].confidence == 0.7

def test_detailed_skips_irrelevant_and_tiny(pair_graph, base_state):
    # Tea only moves with agriculture; a 0.5pp trade move is below the noise floor
    out = calculate_detailed_spillovers("India", {"manufacturing": 2.0, "trade": 50.5}, pair_graph, base_state,
                                        _catalog(["Tea"]))
    assert out == []

def test_first_match_wins_in_table_order():
    # "petroleum" precedes "fish" in the category table
    assert first_match("Fish and petroleum oil", PRODUCT_CATEGORY, "trade") == "energy"
    assert first_match("Gadgets", PRODUCT_CATEGORY, "trade") == "trade"
    assert product_group("Cement and steel") == "machinery"

def test_detailed_trade_delta_uses_persisted_liberalization(pair_graph):
    held = CountryState(country="India", year=2023, trade_liberalization=80.0)
    assert calculate_detailed_spillovers("India", {"trade": 80.0}, pair_graph, held, _catalog(["Raw jute"])) == []

    moved = CountryState(country="India", year=2023, trade_liberalization=60.0)
    out = calculate_detailed_spillovers("India", {"trade": 80.0}, pair_graph, moved, _catalog(["Raw jute"]))
    assert [sp.id for sp in out] == ["India-Bangladesh-Raw jute", "India-Bangladesh-trade"]
    assert [sp.magnitude for sp in out] == pytest.approx([20 / 100 * 0.5 * 0.2, 20 / 100 * 0.5 * 0.2])

def test_environment_spending_lowers_partner_pollution(pair_graph):
    out = calculate_trade_spillovers("India", {"environment": 1.0}, pair_graph)
    assert [sp.policy_type for sp in out] == ["environment"]
    assert out[0].effect == pytest.approx(-0.08)

import numpy as np
import pytest

from regionsim.config import PolicyRates
from regionsim.constants import BOUNDS, TECH
from regionsim.policy_model import apply_policy_effects
from regionsim.state import CountryState, PolicyDecision, PolicySpillover
from regionsim.utils import clamp_state

def D(lever, value, lo=0.0, hi=100.0):
    return PolicyDecision(lever, value, lo, hi)

def test_tariff_cut_scenario(base_state, rng, quiet_rates):
    new = apply_policy_effects(base_state, [D("tariffs", 5.0, 0, 50)], rng=rng, rates=quiet_rates)
    assert new.gdp_growth == pytest.approx(base_state.gdp_growth + 0.012)
    assert new.unemployment == pytest.approx(base_state.unemployment - 0.009)
    assert new.poverty_rate == pytest.approx(base_state.poverty_rate - 0.018)
    assert new.tariff_rate == 5.0
    # proxy = 100 - 0.5*5 - 0.3*60 + 2*5 + 0.2*50
    assert new.tariff_revenue == pytest.approx(0.05 * 99.5 * 0.5)
    assert new.consumer_welfare == pytest.approx(100 - 0.8 * 5 - 0.3 * 60)

def test_unchanged_levers_have_no_effect(base_state, rng, quiet_rates):
    new = apply_policy_effects(base_state, [D("education", 4.0, 0, 10), D("trust", 50.0)],
                               rng=rng, rates=quiet_rates)
    assert new.literacy_rate == pytest.approx(base_state.literacy_rate)
    assert new.gdp_growth == pytest.approx(base_state.gdp_growth)
    assert new.education_spending == 4.0

def test_delta_lever_against_memory(rng, quiet_rates):
    s = CountryState(country="Nepal", year=2023, education_spending=2.0)
    new = apply_policy_effects(s, [D("education", 6.0, 0, 10)], rng=rng, rates=quiet_rates)
    assert new.literacy_rate == pytest.approx(s.literacy_rate + 4.0 * 0.25)
    assert new.gdp_growth == pytest.approx(s.gdp_growth + 4.0 * 0.03)

def test_sector_share_scales_effect(rng, quiet_rates):
    s = CountryState(country="Nepal", year=2023, manufacturing_gdp_percent=50.0, manufacturing_spending=2.0)
    new = apply_policy_effects(s, [D("manufacturing", 4.0, 0, 10)], rng=rng, rates=quiet_rates)
    assert new.gdp_growth == pytest.approx(s.gdp_growth + 2.0 * 0.3 * 0.5)

def test_environment_is_multiplicative(rng, quiet_rates):
    s = CountryState(country="Nepal", year=2023, co2_emissions=2.0, environment_spending=2.0)
    new = apply_policy_effects(s, [D("environment", 7.0, 0, 10)], rng=rng, rates=quiet_rates)
    assert new.co2_emissions == pytest.approx(2.0 * (1 - 5.0 * 0.02))

def test_technology_spillover_routing(base_state, rng, quiet_rates):
    sp = PolicySpillover("India", "Nepal", TECH, 0.2, "", "high", "long-term", "technology")
    new = apply_policy_effects(base_state, [], spillovers=[sp], rng=rng, rates=quiet_rates)
    assert new.literacy_rate == pytest.approx(base_state.literacy_rate + 0.06)
    assert new.gdp_growth == pytest.approx(base_state.gdp_growth + 0.03)

def test_unknown_event_keys_are_ignored(base_state, rng, quiet_rates):
    new = apply_policy_effects(base_state, [], event_effects={"trust": 10.0, "connectivity": 0.5,
                                                              "gdp_growth": -0.5},
                               rng=rng, rates=quiet_rates)
    assert new.gdp_growth == pytest.approx(base_state.gdp_growth - 0.5)
    assert not hasattr(new, "trust")

def test_event_on_unset_memory_field_is_skipped(base_state, rng, quiet_rates):
    new = apply_policy_effects(base_state, [], event_effects={"technology_spending": 0.5},
                               rng=rng, rates=quiet_rates)
    assert new.technology_spending is None

def test_extreme_decisions_stay_in_bounds(rng):
    s = CountryState(country="Afghanistan", year=2023, gdp_growth=14.9, unemployment=0.6, poverty_rate=1.0)
    decisions = [D("education", 10, 0, 10), D("manufacturing", 10, 0, 10), D("services", 10, 0, 10),
                 D("connectivity", 15, 0, 15), D("tariffs", 0, 0, 50), D("trade", 100), D("trust", 100)]
    new = apply_policy_effects(s, decisions, event_effects={"gdp_growth": 50.0, "population": -1e12}, rng=rng)
    for field, (lo, hi) in BOUNDS.items():
        v = getattr(new, field)
        assert lo is None or v >= lo
        assert hi is None or v <= hi

def test_clamp_is_idempotent():
    s = CountryState(country="X", year=2023, gdp_growth=40.0, life_expectancy=10.0, co2_emissions=-3.0)
    once = clamp_state(s)
    assert clamp_state(once) == once
    assert once.gdp_growth == 15.0 and once.life_expectancy == 45.0 and once.co2_emissions == 0.0

def test_same_seed_same_result(base_state):
    decisions = [D("tariffs", 20.0, 0, 50), D("connectivity", 8.0, 0, 15)]
    a = apply_policy_effects(base_state, decisions, rng=np.random.default_rng(3))
    b = apply_policy_effects(base_state, decisions, rng=np.random.default_rng(3))
    assert a == b

def test_input_state_not_mutated(base_state, rng):
    before = base_state.clone()
    apply_policy_effects(base_state, [D("tariffs", 40.0, 0, 50), D("education", 9.0, 0, 10)],
                         event_effects={"gdp_growth": -1.0}, rng=rng)
    assert base_state == before

def test_trust_raises_infrastructure_unless_connectivity_decided(rng, quiet_rates):
    s = CountryState(country="Bhutan", year=2023, infrastructure_investment=5.0)
    only_trust = apply_policy_effects(s, [D("trust", 100.0)], rng=rng, rates=quiet_rates)
    assert only_trust.infrastructure_investment == pytest.approx(5.0 + 0.5 * 0.3)
    both = apply_policy_effects(s, [D("trust", 100.0), D("connectivity", 6.0, 0, 15)], rng=rng, rates=quiet_rates)
    assert both.infrastructure_investment == 6.0

def test_decision_aliases(base_state, rng, quiet_rates):
    new = apply_policy_effects(base_state, [D("tariff", 5.0, 0, 50)], rng=rng, rates=quiet_rates)
    assert new.tariff_rate == 5.0

def test_every_lever_persists_its_decision(base_state, rng):
    levers = PolicyRates().levers
    decisions = [D(lv.id, (lv.minimum + lv.maximum) / 2 + 0.25, lv.minimum, lv.maximum) for lv in levers]
    new = apply_policy_effects(base_state, decisions, rng=rng)
    for lv, d in zip(levers, decisions):
        if lv.memory_field is None: continue
        assert getattr(new, lv.memory_field) == d.value, lv.id

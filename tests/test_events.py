from collections import Counter

import numpy as np
import pytest

from regionsim.config import EventRates, default_event_catalog
from regionsim.constants import STABILITY_EVENT, SUMMIT_EVENT, TENSIONS_EVENT
from regionsim.events import (
    available_events, effective_probability, generate_regional_events, merge_event_effects,
)
from regionsim.state import RegionalEvent

ROSTER = ("India", "Bangladesh", "Pakistan", "Sri Lanka", "Nepal", "Bhutan", "Maldives", "Afghanistan")

def _event(event_id):
    return next(e for e in default_event_catalog() if e.id == event_id)

def test_cooperation_scales_summit_and_tensions():
    summit, tensions = _event(SUMMIT_EVENT), _event(TENSIONS_EVENT)
    assert effective_probability(summit, 100.0) == pytest.approx(0.30)
    assert effective_probability(summit, 0.0) == 0.0
    assert effective_probability(tensions, 0.0) == pytest.approx(0.16)
    assert effective_probability(tensions, 100.0) == 0.0
    assert effective_probability(_event("drought"), 100.0) == pytest.approx(0.05)

def test_gate_closed_means_no_events():
    rates = EventRates(check_probability=0.0)
    rng = np.random.default_rng(0)
    assert all(generate_regional_events(2024 + i, 65.0, [], ROSTER, rng, rates=rates) == [] for i in range(200))

def test_at_most_one_event_per_year():
    rng = np.random.default_rng(1)
    for year in range(2024, 2224):
        assert len(generate_regional_events(year, 65.0, [], ROSTER, rng)) <= 1

def test_unique_events_fire_once():
    rates = EventRates(check_probability=1.0)
    rng = np.random.default_rng(5)
    seen, counts = [], Counter()
    for i in range(10_000):
        for e in generate_regional_events(2024 + i, 65.0, seen, ROSTER, rng, rates):
            counts[e.id] += 1
            if e.id not in seen: seen.append(e.id)
    for ev in default_event_catalog():
        if ev.unique:
            assert counts[ev.id] <= 1
    assert counts["monsoon_floods"] > 1

def test_available_events_accepts_ids_or_events():
    ev = RegionalEvent("fdi_boom", "x", "", 2024)
    ids = {e.id for e in available_events([ev, "health_breakthrough"])}
    assert "fdi_boom" not in ids and "health_breakthrough" not in ids
    assert "monsoon_floods" in ids

def test_stability_event_every_third_year():
    rates = EventRates(catalog=(), check_probability=1.0)
    rng = np.random.default_rng(0)
    events = generate_regional_events(2025, 50.0, [], ROSTER, rng, rates)
    assert [e.id for e in events] == [STABILITY_EVENT]
    assert events[0].target_countries == ROSTER
    assert events[0].effects == {"gdp_growth": 0.1}
    assert generate_regional_events(2026, 50.0, [], ROSTER, rng, rates) == []

def test_region_wide_events_target_roster():
    rates = EventRates(catalog=(_event("global_recession"),), check_probability=1.0, stability_interval=0)
    rng = np.random.default_rng(2)
    fired = []
    for year in range(2024, 2324):
        fired.extend(generate_regional_events(year, 50.0, [], ROSTER, rng, rates))
    assert fired and all(e.target_countries == ROSTER for e in fired)

def test_same_seed_same_events():
    def draw(seed):
        rng = np.random.default_rng(seed)
        return [tuple(e.id for e in generate_regional_events(y, 60.0, [], ROSTER, rng)) for y in range(2024, 2124)]
    assert draw(9) == draw(9)

def test_merge_event_effects_only_for_targets():
    evs = [RegionalEvent("a", "A", "", 2024, {"gdp_growth": -0.5}, ("India", "Nepal")),
           RegionalEvent("b", "B", "", 2024, {"gdp_growth": 0.2, "poverty_rate": 1.0}, ("India",))]
    assert merge_event_effects(evs, "India") == pytest.approx({"gdp_growth": -0.3, "poverty_rate": 1.0})
    assert merge_event_effects(evs, "Nepal") == {"gdp_growth": -0.5}
    assert merge_event_effects(evs, "Bhutan") == {}

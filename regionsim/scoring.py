# regionsim/scoring.py
from typing import Dict

from .state import CountryState
from .utils import clip_to

# (field, weight); positive weight rewards an increase, negative a decrease
SCORE_WEIGHTS = (
    ("gdp_growth",       15.0),
    ("literacy_rate",     3.0),
    ("life_expectancy",   8.0),
    ("unemployment",     -5.0),
    ("poverty_rate",     -4.0),
    ("co2_emissions",   -15.0),
    ("infant_mortality", -2.0),
)
BASE_SCORE = 400.0
BALANCE_BONUS = 100.0      # every component above BALANCE_FLOOR
BALANCE_FLOOR = -50.0
EXTREME_PENALTY = -200.0   # any component below EXTREME_FLOOR
EXTREME_FLOOR = -100.0

def score_components(final: CountryState, initial: CountryState) -> Dict[str, float]:
    return {k: (getattr(final, k) - getattr(initial, k)) * w for k, w in SCORE_WEIGHTS}

def calculate_score(final: CountryState, initial: CountryState) -> float:
    parts = score_components(final, initial).values()
    total = sum(parts) + BASE_SCORE
    if all(v > BALANCE_FLOOR for v in parts): total += BALANCE_BONUS
    if any(v < EXTREME_FLOOR for v in parts): total += EXTREME_PENALTY
    return clip_to(total, 0.0, 1000.0)

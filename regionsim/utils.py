# regionsim/utils.py
from dataclasses import replace
from typing import Dict, Iterable, Optional, Sequence, Tuple, TypeVar
import numpy as np

from .constants import BOUNDS, DECISION_ALIASES, LOW, MEDIUM, HIGH

T = TypeVar("T")

def clip_to(x: float, lo: Optional[float], hi: Optional[float]) -> float:
    if lo is not None and x < lo: x = lo
    if hi is not None and x > hi: x = hi
    return float(x)

def clamp_state(state):
    """Returns a copy of ``state`` with every bounded field inside its interval."""
    return replace(state, **{k: clip_to(getattr(state, k), lo, hi) for k, (lo, hi) in BOUNDS.items()})

def mean_or0(seq) -> float:
    return float(np.mean(seq)) if seq else 0.0

def is_number(x) -> bool:
    return isinstance(x, (int, float, np.integer, np.floating)) and not isinstance(x, bool)

def first_match(text: str, table: Sequence[Tuple[str, T]], default: T) -> T:
    low = text.lower()
    for key, val in table:
        if key in low: return val
    return default

def magnitude_bucket(effect: float, high: float, medium: float) -> str:
    a = abs(effect)
    if a > high: return HIGH
    if a > medium: return MEDIUM
    return LOW

def canonical_lever(decision_id: Optional[str]) -> Optional[str]:
    if not decision_id: return None
    return DECISION_ALIASES.get(decision_id, decision_id)

def decision_map(decisions: Iterable) -> Dict[str, float]:
    """Flattens a decision list into {lever: value}; later duplicates win, id-less rows are skipped."""
    out: Dict[str, float] = {}
    for d in decisions or ():
        lever = canonical_lever(getattr(d, "id", None))
        if lever is None: continue
        out[lever] = float(d.value)
    return out

def previous_value(state, lever) -> float:
    """Last realized value of a lever, or its default when nothing was persisted."""
    if lever.memory_field is None: return lever.default
    prev = getattr(state, lever.memory_field, None)
    return float(prev) if is_number(prev) else lever.default

# regionsim/events.py
from __future__ import annotations
import logging
from typing import Dict, Iterable, List, Optional, Sequence
import numpy as np

from .config import EventRates, EventSpec
from .constants import STABILITY_EVENT
from .state import RegionalEvent
from .utils import clip_to

logger = logging.getLogger(__name__)

_DEFAULT_RATES = EventRates()

def effective_probability(event: EventSpec, cooperation_index: float, rates: Optional[EventRates] = None) -> float:
    r = rates or _DEFAULT_RATES
    p = event.probability
    direction = r.cooperation_scaled.get(event.id, 0)
    if direction > 0:
        p *= cooperation_index / r.cooperation_norm
    elif direction < 0:
        p *= (100.0 - cooperation_index) / r.cooperation_norm
    return clip_to(p, 0.0, 1.0)

def available_events(history: Iterable, rates: Optional[EventRates] = None) -> List[EventSpec]:
    """Catalog minus unique events already present in ``history`` (matched by id)."""
    r = rates or _DEFAULT_RATES
    seen = {getattr(e, "id", e) for e in history or ()}
    return [ev for ev in r.catalog if not (ev.unique and ev.id in seen)]

def _emit(event: EventSpec, year: int, roster: Sequence[str]) -> RegionalEvent:
    targets = tuple(roster) if event.region_wide else tuple(event.targets)
    return RegionalEvent(event.id, event.name, event.description, year, dict(event.effects), targets)

def stability_event(year: int, roster: Sequence[str], rates: Optional[EventRates] = None) -> RegionalEvent:
    r = rates or _DEFAULT_RATES
    return RegionalEvent(
        STABILITY_EVENT, "A Period of Stability",
        "The region experiences a period of relative stability, allowing governments to focus on domestic policy.",
        year, dict(r.stability_effects), tuple(roster),
    )

def generate_regional_events(year: int, cooperation_index: float, history: Iterable,
                             roster: Sequence[str], rng: np.random.Generator,
                             rates: Optional[EventRates] = None) -> List[RegionalEvent]:
    """Zero or one regional event for ``year``."""
    r = rates or _DEFAULT_RATES

    # Most years skip the catalog entirely
    if rng.random() >= r.check_probability:
        return []

    pool = available_events(history, r)
    order = rng.permutation(len(pool))
    for i in order:
        event = pool[int(i)]
        if rng.random() < effective_probability(event, cooperation_index, r):
            logger.info("Year %d: regional event %s", year, event.id)
            return [_emit(event, year, roster)]

    if r.stability_interval and year % r.stability_interval == 0:
        return [stability_event(year, roster, r)]
    return []

def merge_event_effects(events: Iterable[RegionalEvent], country: str) -> Dict[str, float]:
    """Summed effects of every event that targets ``country``."""
    out: Dict[str, float] = {}
    for ev in events:
        if country not in ev.target_countries: continue
        for key, delta in ev.effects.items():
            out[key] = out.get(key, 0.0) + float(delta)
    return out

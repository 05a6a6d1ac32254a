"""Turn candidates (and their travel estimates) into the fixed-size list of names we return.

Two request modes exist and are kept apart:

* time-budget mode (``minutes`` + ``travelMode`` given): filter by travel
  duration, sort ascending, pad with "Generic Spot N" placeholders;
* legacy mode (no budget): prefer places flagged open now, and answer with a
  fixed list of generic names when the search came back empty.
"""
from __future__ import annotations

from typing import List, Sequence, Tuple

from lunch_places.models import Candidate, TravelEstimate

PLACEHOLDER_TEMPLATE = "Generic Spot {n}"

DEFAULT_GENERIC_PLACES: Tuple[str, ...] = (
    "Local Diner",
    "Pizza Place",
    "Sandwich Shop",
    "Taco Stand",
    "Noodle Bar",
)


def backfill(names: Sequence[str], target_count: int) -> List[str]:
    """Truncate or pad ``names`` to exactly ``target_count`` entries.

    Placeholders are numbered by their 1-indexed position in the final list.
    """
    selected = list(names[:target_count])
    for position in range(len(selected) + 1, target_count + 1):
        selected.append(PLACEHOLDER_TEMPLATE.format(n=position))
    return selected


def select_within_budget(
    candidates: Sequence[Candidate],
    estimates: Sequence[TravelEstimate],
    budget_seconds: float,
    target_count: int,
) -> List[str]:
    if not candidates:
        return []

    by_index = {e.candidate_index: e.duration_seconds for e in estimates}
    reachable: List[Tuple[float, int, str]] = []
    for index, candidate in enumerate(candidates):
        duration = by_index.get(index)
        if duration is None or duration > budget_seconds:
            continue
        reachable.append((duration, index, candidate.name))

    reachable.sort(key=lambda item: (item[0], item[1]))
    return backfill([name for _, _, name in reachable], target_count)


def select_open_now(candidates: Sequence[Candidate], target_count: int) -> List[str]:
    if not candidates:
        return list(DEFAULT_GENERIC_PLACES)

    # Unknown opening hours do not count as open.
    open_now = [c for c in candidates if c.is_open_now is True]
    pool = open_now if len(open_now) >= target_count else list(candidates)
    return backfill([c.name for c in pool], target_count)

"""
Nearest-Neighbor Tour Construction
==================================

1. **Start**       -- the first located stop in input order opens the tour
   (or, when a depot is supplied, the walk begins at the depot).
2. **Greedy step** -- from the last stop of the tour, measure the
   Haversine distance to every unvisited stop and move to the closest.
3. **Tie-break**   -- on equal distances the stop that appears earliest in
   the input wins, so the same input always yields the same tour.

Complexity
----------
n located stops -> n(n-1)/2 distance evaluations, i.e. O(n²).  Routes hold
tens of stops, so this runs in well under a millisecond.

**Note:** Nearest-neighbor is a greedy approximation of the Travelling
Salesman Problem and does NOT guarantee the shortest tour.
"""

from __future__ import annotations

from typing import Iterable, Optional

from .distance import distance_between
from .entities import Location, Stop


def build_tour(
    stops: Iterable[Stop], start: Optional[Location] = None
) -> list[Stop]:
    """
    Order *stops* into a visiting sequence.

    Stops without coordinates are dropped.  With ``start=None`` the first
    located stop is the tour's opening stop; otherwise every stop is
    reached from the *start* location onwards.
    """
    # Kept in input order: ``min`` returns the first of equal keys,
    # which is the tie-break.
    unvisited = [s for s in stops if s.is_located]
    if not unvisited:
        return []

    tour: list[Stop] = []
    if start is None:
        tour.append(unvisited.pop(0))
        current = tour[0].location
    else:
        current = start

    while unvisited:
        best_idx = min(
            range(len(unvisited)),
            key=lambda idx: distance_between(current, unvisited[idx].location),
        )
        nearest = unvisited.pop(best_idx)
        tour.append(nearest)
        current = nearest.location

    return tour

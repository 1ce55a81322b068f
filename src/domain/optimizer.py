"""
Route Optimisation Engine  (Facade)
===================================

``optimize_route`` is the single entry point used by the API layer:

    raw stops -> filter located -> nearest-neighbor tour -> annotate + totals

Pure and synchronous: no I/O, no shared state, no caching.  Persisting or
displaying the result is the caller's job.
"""

from __future__ import annotations

import logging
from typing import Iterable, Optional

from .entities import Location, RouteResult, Stop
from .summary import summarize_route
from .timing import DEFAULT_TIME_MODEL, TimeModel
from .tour import build_tour

logger = logging.getLogger(__name__)


def partition_stops(stops: Iterable[Stop]) -> tuple[list[Stop], list[Stop]]:
    """Split *stops* into ``(located, unlocated)``, preserving input order."""
    located: list[Stop] = []
    unlocated: list[Stop] = []
    for stop in stops:
        (located if stop.is_located else unlocated).append(stop)
    return located, unlocated


def optimize_route(
    stops: Iterable[Stop],
    time_model: TimeModel = DEFAULT_TIME_MODEL,
    start: Optional[Location] = None,
) -> RouteResult:
    """
    Compute a visiting order for *stops* with per-stop and total estimates.

    Stops without coordinates never appear in the result.  An input with
    no located stops yields an empty ``RouteResult``.
    """
    located, unlocated = partition_stops(stops)
    if not located:
        logger.debug("No located stops (%d without coordinates)", len(unlocated))
        return RouteResult.empty()

    tour = build_tour(located, start=start)
    result = summarize_route(tour, time_model=time_model, start=start)
    logger.debug(
        "Optimised %d stops (%d skipped): %.2f km, %.0f min",
        len(result.ordered_stops),
        len(unlocated),
        result.total_distance,
        result.total_duration,
    )
    return result

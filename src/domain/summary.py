"""
Route summariser: annotates an ordered tour and aggregates route totals.

Totals are always the sums of the per-stop values emitted in
``ordered_stops``; they are never recomputed from the raw coordinates.
"""

from __future__ import annotations

from typing import Optional, Sequence

from .distance import distance_between
from .entities import Location, OrderedStop, RouteResult, Stop
from .timing import DEFAULT_TIME_MODEL, TimeModel


def summarize_route(
    tour: Sequence[Stop],
    time_model: TimeModel = DEFAULT_TIME_MODEL,
    start: Optional[Location] = None,
) -> RouteResult:
    """
    Turn an ordered *tour* into a ``RouteResult``.

    The first stop's leg is 0 km unless a *start* location (depot) is
    given, in which case it is measured from there.
    """
    ordered: list[OrderedStop] = []
    previous = start
    for index, stop in enumerate(tour):
        leg = 0.0 if previous is None else distance_between(previous, stop.location)
        ordered.append(
            OrderedStop(
                stop=stop,
                visit_order=index + 1,
                distance_from_previous=leg,
                estimated_duration=time_model.estimate(leg),
            )
        )
        previous = stop.location

    return RouteResult(
        ordered_stops=tuple(ordered),
        total_distance=sum((s.distance_from_previous for s in ordered), 0.0),
        total_duration=sum((s.estimated_duration for s in ordered), 0.0),
    )

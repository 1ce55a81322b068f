"""Conversion between API payloads, ORM rows and the domain ``RouteResult``."""

from __future__ import annotations

from typing import Any, Optional, Sequence

from src.api.schemas import OrderedStopOut, RouteSummaryOut, StopIn
from src.domain.entities import Location, RouteResult, Stop
from src.domain.timing import format_duration
from src.infrastructure.models import ClientModel


def _location(lat: Optional[float], lon: Optional[float]) -> Optional[Location]:
    # Half a coordinate pair is as good as none.
    if lat is None or lon is None:
        return None
    return Location(lat, lon)


def stop_from_request(stop: StopIn) -> Stop[dict]:
    return Stop(
        id=stop.id,
        location=_location(stop.lat, stop.lon),
        payload=dict(stop.model_extra or {}),
    )


def stop_from_client(client: ClientModel) -> Stop[dict]:
    return Stop(
        id=client.id,
        location=_location(client.latitude, client.longitude),
        payload={
            "name": client.name,
            "business_name": client.business_name,
            "address": client.address,
            "phone": client.phone,
        },
    )


def present_route(stops: Sequence[Stop], result: RouteResult) -> dict[str, Any]:
    """Field values shared by ``OptimizeResponse`` and its subclasses."""
    ordered = [
        OrderedStopOut(
            **{
                **(o.stop.payload or {}),
                "id": o.id,
                "lat": o.stop.location.latitude,
                "lon": o.stop.location.longitude,
                "visit_order": o.visit_order,
                "distance_from_previous": o.distance_from_previous,
                "estimated_duration": o.estimated_duration,
            }
        )
        for o in result.ordered_stops
    ]
    return {
        "ordered_stops": ordered,
        "total_distance": result.total_distance,
        "total_duration": result.total_duration,
        "located_stops": len(ordered),
        "total_stops": len(stops),
        "excluded_stop_ids": [s.id for s in stops if not s.is_located],
        "summary": RouteSummaryOut(
            distance_km=round(result.total_distance, 2),
            duration_minutes=int(round(result.total_duration)),
            duration_label=format_duration(result.total_duration),
        ),
    }

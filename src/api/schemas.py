"""Pydantic request / response schemas for the REST API."""

from __future__ import annotations

from datetime import datetime
from typing import Literal, Optional, Union

from pydantic import BaseModel, Field, field_validator, model_validator

from src.config import settings

StopId = Union[int, str]
ClientStatus = Literal["ACTIVE", "INACTIVE"]


# ── Requests ──────────────────────────────────────────────────────────


class Coordinates(BaseModel):
    lat: float = Field(..., ge=-90, le=90)
    lon: float = Field(..., ge=-180, le=180)


class StopIn(BaseModel):
    """A stop to order.  Any extra field is passed through unchanged."""

    id: StopId
    lat: Optional[float] = Field(None, ge=-90, le=90)
    lon: Optional[float] = Field(None, ge=-180, le=180)

    model_config = {"extra": "allow"}

    @property
    def is_located(self) -> bool:
        return self.lat is not None and self.lon is not None


class OptimizeRequest(BaseModel):
    stops: list[StopIn] = Field(..., max_length=settings.max_stops_per_request)
    depot: Optional[Coordinates] = Field(
        None,
        description="Optional starting point; the first leg is measured from here.",
    )

    @field_validator("stops")
    @classmethod
    def _unique_ids(cls, stops: list[StopIn]) -> list[StopIn]:
        seen: set = set()
        duplicates = []
        for stop in stops:
            if stop.id in seen:
                duplicates.append(stop.id)
            seen.add(stop.id)
        if duplicates:
            raise ValueError(f"Duplicate stop ids: {duplicates}")
        return stops


class ClientCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=160)
    address: str = Field(..., min_length=1, max_length=255)
    business_name: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=40)
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)


class ClientUpdateRequest(BaseModel):
    """Partial update; only the fields present in the body are changed.

    Coordinates travel as a pair.  Sending both as ``null`` clears the
    client's location.
    """

    name: Optional[str] = Field(None, min_length=1, max_length=160)
    address: Optional[str] = Field(None, min_length=1, max_length=255)
    business_name: Optional[str] = Field(None, max_length=200)
    phone: Optional[str] = Field(None, max_length=40)
    status: Optional[ClientStatus] = None
    latitude: Optional[float] = Field(None, ge=-90, le=90)
    longitude: Optional[float] = Field(None, ge=-180, le=180)

    @model_validator(mode="after")
    def _coordinates_as_pair(self) -> "ClientUpdateRequest":
        sent = {"latitude", "longitude"} & self.model_fields_set
        if len(sent) == 1:
            raise ValueError("latitude and longitude must be sent together")
        if sent and (self.latitude is None) != (self.longitude is None):
            raise ValueError("latitude and longitude must both be set or both null")
        for name in ("name", "address", "status"):
            if name in self.model_fields_set and getattr(self, name) is None:
                raise ValueError(f"{name} cannot be null")
        return self


class RouteCreateRequest(BaseModel):
    name: str = Field(..., min_length=1, max_length=120)


class RouteClientsRequest(BaseModel):
    client_ids: list[int] = Field(
        ...,
        description="Clients in assignment order; the first one opens the tour.",
    )

    @field_validator("client_ids")
    @classmethod
    def _no_repeats(cls, client_ids: list[int]) -> list[int]:
        if len(set(client_ids)) != len(client_ids):
            raise ValueError("client_ids must not repeat")
        return client_ids


# ── Responses ─────────────────────────────────────────────────────────


class OrderedStopOut(BaseModel):
    id: StopId
    lat: float
    lon: float
    visit_order: int
    distance_from_previous: float
    estimated_duration: float

    model_config = {"extra": "allow"}


class RouteSummaryOut(BaseModel):
    distance_km: float
    duration_minutes: int
    duration_label: str


class OptimizeResponse(BaseModel):
    ordered_stops: list[OrderedStopOut]
    total_distance: float
    total_duration: float
    located_stops: int
    total_stops: int
    excluded_stop_ids: list[StopId] = []
    summary: RouteSummaryOut


class ClientResponse(BaseModel):
    id: int
    name: str
    business_name: Optional[str] = None
    address: str
    phone: Optional[str] = None
    status: str
    latitude: Optional[float] = None
    longitude: Optional[float] = None

    model_config = {"from_attributes": True}


class RouteResponse(BaseModel):
    id: int
    name: str
    created_at: Optional[datetime] = None
    clients: list[ClientResponse] = []

    model_config = {"from_attributes": True}


class OptimizedRouteResponse(OptimizeResponse):
    route_id: int
    route_name: str


class HealthResponse(BaseModel):
    status: str = "ok"


class ErrorResponse(BaseModel):
    detail: str

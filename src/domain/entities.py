"""
Value objects flowing through the route ordering engine.

All of them are immutable and created fresh for every optimisation call.
``Stop.payload`` is opaque: the engine only ever reads ``id`` and
``location``, whatever the caller attaches (a client record, a dict, an
ORM row) is carried through untouched.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Generic, Hashable, Optional, TypeVar

P = TypeVar("P")


# ── Value Objects ─────────────────────────────────────────────────────


@dataclass(frozen=True)
class Location:
    latitude: float
    longitude: float


@dataclass(frozen=True)
class Stop(Generic[P]):
    id: Hashable
    location: Optional[Location] = None
    payload: Optional[P] = None

    @property
    def is_located(self) -> bool:
        return self.location is not None


@dataclass(frozen=True)
class OrderedStop(Generic[P]):
    stop: Stop[P]
    visit_order: int
    distance_from_previous: float
    estimated_duration: float

    @property
    def id(self) -> Hashable:
        return self.stop.id


@dataclass(frozen=True)
class RouteResult(Generic[P]):
    ordered_stops: tuple[OrderedStop[P], ...] = ()
    total_distance: float = 0.0
    total_duration: float = 0.0

    @classmethod
    def empty(cls) -> "RouteResult[P]":
        return cls()

    @property
    def visit_sequence(self) -> list[Hashable]:
        """Stop ids in visiting order."""
        return [s.id for s in self.ordered_stops]

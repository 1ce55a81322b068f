"""
Travel-Time Estimation  (Strategy Pattern)
==========================================

Formula
-------
Duration = Distance_From_Previous x Minutes_Per_KM + Dwell_Minutes

* **Minutes_Per_KM** = 2.0 (~30 km/h effective urban speed)
* **Dwell_Minutes**  = 15.0 flat service time per stop

The first stop of a tour has no travel leg, so it costs the dwell time
only (15 min).

Complexity: O(1) per estimate.
"""

from __future__ import annotations

from abc import ABC, abstractmethod


# ── Strategy hierarchy ────────────────────────────────────────────────


class TimeModel(ABC):
    @abstractmethod
    def estimate(self, distance_km: float) -> float: ...


class LinearTimeModel(TimeModel):
    """Fixed travel pace plus a flat dwell time per visited stop."""

    def __init__(self, minutes_per_km: float = 2.0, dwell_minutes: float = 15.0):
        self.minutes_per_km = minutes_per_km
        self.dwell_minutes = dwell_minutes

    def estimate(self, distance_km: float) -> float:
        return distance_km * self.minutes_per_km + self.dwell_minutes

    def __repr__(self) -> str:
        return (
            f"LinearTimeModel(minutes_per_km={self.minutes_per_km}, "
            f"dwell_minutes={self.dwell_minutes})"
        )


DEFAULT_TIME_MODEL = LinearTimeModel()


def format_duration(minutes: float) -> str:
    """Render a minute count as ``"3h 57m"`` (rounded to whole minutes)."""
    total = int(round(minutes))
    hours, mins = divmod(total, 60)
    return f"{hours}h {mins}m"

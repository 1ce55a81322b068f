"""
Stateless optimisation endpoint
===============================

POST /api/v1/optimize -- order an ad-hoc list of stops
"""

from fastapi import APIRouter, Depends, Request

from src.api.dependencies import get_time_model
from src.api.middleware import limiter
from src.api.presenters import present_route, stop_from_request
from src.api.schemas import OptimizeRequest, OptimizeResponse
from src.config import settings
from src.domain.entities import Location
from src.domain.optimizer import optimize_route
from src.domain.timing import TimeModel

router = APIRouter(tags=["optimize"])


@router.post(
    "/optimize",
    response_model=OptimizeResponse,
    summary="Order a list of stops into a short visiting sequence",
    description=(
        "Stops without both `lat` and `lon` are skipped and reported in "
        "`excluded_stop_ids`. Extra fields on each stop are echoed back."
    ),
)
@limiter.limit(settings.rate_limit)
async def optimize(
    request: Request,
    body: OptimizeRequest,
    time_model: TimeModel = Depends(get_time_model),
):
    stops = [stop_from_request(s) for s in body.stops]
    start = Location(body.depot.lat, body.depot.lon) if body.depot else None
    result = optimize_route(stops, time_model=time_model, start=start)
    return OptimizeResponse(**present_route(stops, result))

"""
Delivery route endpoints
========================

POST /api/v1/routes                      -- create a named route
GET  /api/v1/routes/{route_id}           -- route with its assigned clients
PUT  /api/v1/routes/{route_id}/clients   -- replace the client assignment
GET  /api/v1/routes/{route_id}/optimized -- optimised visiting order
"""

import logging

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_cache, get_db, get_time_model
from src.api.middleware import limiter
from src.api.presenters import present_route, stop_from_client
from src.api.schemas import (
    ClientResponse,
    OptimizedRouteResponse,
    RouteClientsRequest,
    RouteCreateRequest,
    RouteResponse,
)
from src.config import settings
from src.domain.entities import Location
from src.domain.optimizer import optimize_route
from src.domain.timing import TimeModel
from src.infrastructure.cache import RouteResultCache
from src.infrastructure.repositories import ClientRepository, RouteRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/routes", tags=["routes"])


async def _route_response(repo, route) -> RouteResponse:
    clients = await repo.get_assigned_clients(route.id)
    return RouteResponse(
        id=route.id,
        name=route.name,
        created_at=route.created_at,
        clients=[ClientResponse.model_validate(c) for c in clients],
    )


@router.post(
    "",
    status_code=201,
    response_model=RouteResponse,
    summary="Create a delivery route",
)
@limiter.limit(settings.rate_limit)
async def create_route(
    request: Request,
    body: RouteCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    repo = RouteRepository(db)
    if await repo.get_by_name(body.name):
        raise HTTPException(
            status_code=409, detail=f"Route {body.name!r} already exists"
        )
    route = await repo.create_route(name=body.name)
    logger.info("Route %s (%s) created", route.id, route.name)
    return RouteResponse(id=route.id, name=route.name, created_at=route.created_at)


@router.get(
    "/{route_id}",
    response_model=RouteResponse,
    summary="Get a route and its assigned clients",
)
@limiter.limit(settings.rate_limit)
async def get_route(
    request: Request,
    route_id: int,
    db: AsyncSession = Depends(get_db),
):
    repo = RouteRepository(db)
    route = await repo.get_by_id(route_id)
    if not route:
        raise HTTPException(status_code=404, detail="Route not found")
    return await _route_response(repo, route)


@router.put(
    "/{route_id}/clients",
    response_model=RouteResponse,
    summary="Assign clients to a route",
    description=(
        "Replaces the current assignment. The list order is kept and the "
        "first located client opens the optimised tour."
    ),
)
@limiter.limit(settings.rate_limit)
async def assign_clients(
    request: Request,
    route_id: int,
    body: RouteClientsRequest,
    db: AsyncSession = Depends(get_db),
    cache: RouteResultCache = Depends(get_cache),
):
    repo = RouteRepository(db)
    route = await repo.get_by_id(route_id)
    if not route:
        raise HTTPException(status_code=404, detail="Route not found")

    found = await ClientRepository(db).get_many(body.client_ids)
    missing = sorted(set(body.client_ids) - {c.id for c in found})
    if missing:
        raise HTTPException(status_code=404, detail=f"Unknown clients: {missing}")

    await repo.replace_clients(route_id, body.client_ids)
    # Readers repopulate the cache from committed rows only.
    await db.commit()
    await cache.invalidate(route_id)
    logger.info("Route %s: %d clients assigned", route_id, len(body.client_ids))
    return await _route_response(repo, route)


@router.get(
    "/{route_id}/optimized",
    response_model=OptimizedRouteResponse,
    summary="Optimised visiting order for a route",
    description=(
        "Nearest-neighbor ordering of the route's active, located clients, "
        "starting from the first assigned one or from the depot given by "
        "`depot_lat` / `depot_lon`. Clients without coordinates are listed in "
        "`excluded_stop_ids`; inactive clients are left out. Only depot-less "
        "results are cached."
    ),
)
@limiter.limit(settings.rate_limit)
async def get_optimized_route(
    request: Request,
    route_id: int,
    depot_lat: Optional[float] = Query(None, ge=-90, le=90),
    depot_lon: Optional[float] = Query(None, ge=-180, le=180),
    db: AsyncSession = Depends(get_db),
    cache: RouteResultCache = Depends(get_cache),
    time_model: TimeModel = Depends(get_time_model),
):
    repo = RouteRepository(db)
    route = await repo.get_by_id(route_id)
    if not route:
        raise HTTPException(status_code=404, detail="Route not found")

    if (depot_lat is None) != (depot_lon is None):
        raise HTTPException(
            status_code=422, detail="depot_lat and depot_lon must be given together"
        )
    start = Location(depot_lat, depot_lon) if depot_lat is not None else None

    if start is None:
        cached = await cache.get(route_id)
        if cached:
            logger.debug("Route %s served from cache", route_id)
            return OptimizedRouteResponse.model_validate_json(cached)

    clients = await repo.get_assigned_clients(route_id, active_only=True)
    stops = [stop_from_client(c) for c in clients]
    result = optimize_route(stops, time_model=time_model, start=start)

    response = OptimizedRouteResponse(
        route_id=route.id,
        route_name=route.name,
        **present_route(stops, result),
    )
    if start is None:
        await cache.set(route_id, response.model_dump_json())
    return response

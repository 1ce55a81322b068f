"""
Client endpoints
================

POST  /api/v1/clients             -- register a delivery client
GET   /api/v1/clients/{client_id} -- fetch a client
PATCH /api/v1/clients/{client_id} -- update a client (geocode, deactivate, ...)
"""

import logging

from fastapi import APIRouter, Depends, HTTPException, Request
from sqlalchemy.ext.asyncio import AsyncSession

from src.api.dependencies import get_cache, get_db
from src.api.middleware import limiter
from src.api.schemas import ClientCreateRequest, ClientResponse, ClientUpdateRequest
from src.config import settings
from src.infrastructure.cache import RouteResultCache
from src.infrastructure.repositories import ClientRepository, RouteRepository

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/clients", tags=["clients"])


@router.post(
    "",
    status_code=201,
    response_model=ClientResponse,
    summary="Register a client",
)
@limiter.limit(settings.rate_limit)
async def create_client(
    request: Request,
    body: ClientCreateRequest,
    db: AsyncSession = Depends(get_db),
):
    client = await ClientRepository(db).create_client(
        name=body.name,
        address=body.address,
        business_name=body.business_name,
        phone=body.phone,
        latitude=body.latitude,
        longitude=body.longitude,
    )
    if client.latitude is None:
        logger.info("Client %s registered without coordinates", client.id)
    return client


@router.get(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Get a client",
)
@limiter.limit(settings.rate_limit)
async def get_client(
    request: Request,
    client_id: int,
    db: AsyncSession = Depends(get_db),
):
    client = await ClientRepository(db).get_by_id(client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")
    return client


@router.patch(
    "/{client_id}",
    response_model=ClientResponse,
    summary="Update a client",
    description=(
        "Only the fields present in the body change. `latitude` and "
        "`longitude` must be sent together. Cached optimisations of every "
        "route holding the client are dropped."
    ),
)
@limiter.limit(settings.rate_limit)
async def update_client(
    request: Request,
    client_id: int,
    body: ClientUpdateRequest,
    db: AsyncSession = Depends(get_db),
    cache: RouteResultCache = Depends(get_cache),
):
    repo = ClientRepository(db)
    client = await repo.get_by_id(client_id)
    if not client:
        raise HTTPException(status_code=404, detail="Client not found")

    changes = body.model_dump(exclude_unset=True)
    client = await repo.update_client(client, **changes)
    route_ids = await RouteRepository(db).get_route_ids_for_client(client_id)

    # Readers repopulate the cache from committed rows only.
    await db.commit()
    for route_id in route_ids:
        await cache.invalidate(route_id)

    logger.info(
        "Client %s updated (%s); %d routes invalidated",
        client_id,
        ", ".join(sorted(changes)) or "no changes",
        len(route_ids),
    )
    return client

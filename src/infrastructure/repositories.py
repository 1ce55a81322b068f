"""
Repository Pattern -- abstracts DB access so domain logic stays DB-agnostic.

Each repository receives an ``AsyncSession`` (unit-of-work) and exposes
domain-relevant queries only.
"""

from __future__ import annotations

from typing import Optional, Sequence

from sqlalchemy import delete, select
from sqlalchemy.ext.asyncio import AsyncSession

from .models import ClientModel, RouteClientModel, RouteModel


class ClientRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_client(
        self,
        *,
        name: str,
        address: str,
        business_name: str | None = None,
        phone: str | None = None,
        status: str = "ACTIVE",
        latitude: float | None = None,
        longitude: float | None = None,
    ) -> ClientModel:
        """Create a client; the PostGIS point is set only when located."""
        from geoalchemy2.functions import ST_MakePoint, ST_SetSRID

        located = latitude is not None and longitude is not None
        client = ClientModel(
            name=name,
            business_name=business_name,
            address=address,
            phone=phone,
            status=status,
            latitude=latitude if located else None,
            longitude=longitude if located else None,
            location=(
                ST_SetSRID(ST_MakePoint(longitude, latitude), 4326)
                if located
                else None
            ),
        )
        self.session.add(client)
        await self.session.flush()
        return client

    async def get_by_id(self, client_id: int) -> Optional[ClientModel]:
        return await self.session.get(ClientModel, client_id)

    async def get_many(self, client_ids: Sequence[int]) -> list[ClientModel]:
        if not client_ids:
            return []
        result = await self.session.execute(
            select(ClientModel).where(ClientModel.id.in_(client_ids))
        )
        return list(result.scalars().all())

    async def update_client(self, client: ClientModel, **fields) -> ClientModel:
        """Apply *fields* to *client*, keeping the PostGIS point in sync."""
        from geoalchemy2.functions import ST_MakePoint, ST_SetSRID

        for name, value in fields.items():
            setattr(client, name, value)
        if "latitude" in fields or "longitude" in fields:
            located = client.latitude is not None and client.longitude is not None
            client.location = (
                ST_SetSRID(ST_MakePoint(client.longitude, client.latitude), 4326)
                if located
                else None
            )
        await self.session.flush()
        return client


class RouteRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_route(self, *, name: str) -> RouteModel:
        route = RouteModel(name=name)
        self.session.add(route)
        await self.session.flush()
        # Load server-side created_at
        await self.session.refresh(route)
        return route

    async def get_by_id(self, route_id: int) -> Optional[RouteModel]:
        return await self.session.get(RouteModel, route_id)

    async def get_by_name(self, name: str) -> Optional[RouteModel]:
        result = await self.session.execute(
            select(RouteModel).where(RouteModel.name == name)
        )
        return result.scalar_one_or_none()

    async def get_assigned_clients(
        self, route_id: int, *, active_only: bool = False
    ) -> list[ClientModel]:
        """Clients of *route_id* in assignment order."""
        stmt = (
            select(ClientModel)
            .join(RouteClientModel, RouteClientModel.client_id == ClientModel.id)
            .where(RouteClientModel.route_id == route_id)
            .order_by(RouteClientModel.position)
        )
        if active_only:
            stmt = stmt.where(ClientModel.status == "ACTIVE")
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_route_ids_for_client(self, client_id: int) -> list[int]:
        result = await self.session.execute(
            select(RouteClientModel.route_id).where(
                RouteClientModel.client_id == client_id
            )
        )
        return list(result.scalars().all())

    async def replace_clients(
        self, route_id: int, client_ids: Sequence[int]
    ) -> None:
        """Replace the route's assignment; list order becomes visit input order."""
        await self.session.execute(
            delete(RouteClientModel).where(RouteClientModel.route_id == route_id)
        )
        for position, client_id in enumerate(client_ids):
            self.session.add(
                RouteClientModel(
                    route_id=route_id, client_id=client_id, position=position
                )
            )
        await self.session.flush()

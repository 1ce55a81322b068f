"""
Shared test fixtures.

Uses an in-memory SQLite database (via aiosqlite) so tests run without
Docker / PostgreSQL / Redis.  PostGIS-specific features (Geometry columns)
are mocked by using plain String columns in the test models, and the
Redis-backed result cache is replaced by a dict.
"""

from __future__ import annotations

from typing import Optional, Sequence
from unittest.mock import patch

import pytest
import pytest_asyncio
from httpx import ASGITransport, AsyncClient
from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    delete,
    func,
    select,
)
from sqlalchemy.ext.asyncio import (
    AsyncSession,
    async_sessionmaker,
    create_async_engine,
)
from sqlalchemy.orm import DeclarativeBase
from sqlalchemy.pool import StaticPool

from src.domain.entities import Location, Stop


# ── Test DB (SQLite in-memory) ────────────────────────────────────────

TEST_DB_URL = "sqlite+aiosqlite:///:memory:"


class TestBase(DeclarativeBase):
    pass


# Mirror the production models but without PostGIS Geometry columns
# (SQLite doesn't support them).

class TestClientModel(TestBase):
    __tablename__ = "clients"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(160), nullable=False)
    business_name = Column(String(200), nullable=True)
    address = Column(String(255), nullable=False)
    phone = Column(String(40), nullable=True)
    status = Column(String(20), default="ACTIVE", nullable=False)
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    location = Column(String, nullable=True)  # stub for Geometry
    created_at = Column(DateTime, server_default=func.now())


class TestRouteModel(TestBase):
    __tablename__ = "routes"
    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), unique=True, nullable=False)
    created_at = Column(DateTime, server_default=func.now())


class TestRouteClientModel(TestBase):
    __tablename__ = "route_clients"
    id = Column(Integer, primary_key=True, autoincrement=True)
    route_id = Column(Integer, ForeignKey("routes.id"), nullable=False)
    client_id = Column(Integer, ForeignKey("clients.id"), nullable=False)
    position = Column(Integer, nullable=False)


# ── Repositories over the test models ─────────────────────────────────


class _TestClientRepository:
    """Mirrors ``ClientRepository`` but uses SQLite-friendly test models."""

    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_client(self, *, name, address, business_name=None,
                            phone=None, status="ACTIVE", latitude=None,
                            longitude=None):
        located = latitude is not None and longitude is not None
        client = TestClientModel(
            name=name, address=address, business_name=business_name,
            phone=phone, status=status,
            latitude=latitude if located else None,
            longitude=longitude if located else None,
            location=f"POINT({longitude} {latitude})" if located else None,
        )
        self.session.add(client)
        await self.session.flush()
        return client

    async def get_by_id(self, client_id: int) -> Optional[TestClientModel]:
        return await self.session.get(TestClientModel, client_id)

    async def get_many(self, client_ids: Sequence[int]):
        if not client_ids:
            return []
        result = await self.session.execute(
            select(TestClientModel).where(TestClientModel.id.in_(client_ids))
        )
        return list(result.scalars().all())

    async def update_client(self, client, **fields):
        for name, value in fields.items():
            setattr(client, name, value)
        if "latitude" in fields or "longitude" in fields:
            located = client.latitude is not None and client.longitude is not None
            client.location = (
                f"POINT({client.longitude} {client.latitude})" if located else None
            )
        await self.session.flush()
        return client


class _TestRouteRepository:
    def __init__(self, session: AsyncSession):
        self.session = session

    async def create_route(self, *, name: str):
        route = TestRouteModel(name=name)
        self.session.add(route)
        await self.session.flush()
        await self.session.refresh(route)
        return route

    async def get_by_id(self, route_id: int):
        return await self.session.get(TestRouteModel, route_id)

    async def get_by_name(self, name: str):
        result = await self.session.execute(
            select(TestRouteModel).where(TestRouteModel.name == name)
        )
        return result.scalar_one_or_none()

    async def get_assigned_clients(self, route_id: int, *, active_only=False):
        stmt = (
            select(TestClientModel)
            .join(
                TestRouteClientModel,
                TestRouteClientModel.client_id == TestClientModel.id,
            )
            .where(TestRouteClientModel.route_id == route_id)
            .order_by(TestRouteClientModel.position)
        )
        if active_only:
            stmt = stmt.where(TestClientModel.status == "ACTIVE")
        result = await self.session.execute(stmt)
        return list(result.scalars().all())

    async def get_route_ids_for_client(self, client_id: int):
        result = await self.session.execute(
            select(TestRouteClientModel.route_id).where(
                TestRouteClientModel.client_id == client_id
            )
        )
        return list(result.scalars().all())

    async def replace_clients(self, route_id: int, client_ids: Sequence[int]):
        await self.session.execute(
            delete(TestRouteClientModel).where(
                TestRouteClientModel.route_id == route_id
            )
        )
        for position, client_id in enumerate(client_ids):
            self.session.add(
                TestRouteClientModel(
                    route_id=route_id, client_id=client_id, position=position
                )
            )
        await self.session.flush()


class FakeRouteResultCache:
    """In-process stand-in for ``RouteResultCache``."""

    def __init__(self):
        self.store: dict[int, str] = {}
        self.invalidated: list[int] = []

    async def get(self, route_id: int):
        return self.store.get(route_id)

    async def set(self, route_id: int, payload: str) -> None:
        self.store[route_id] = payload

    async def invalidate(self, route_id: int) -> None:
        self.invalidated.append(route_id)
        self.store.pop(route_id, None)


# ── Fixtures ──────────────────────────────────────────────────────────


def _make_stop(stop_id, lat=None, lng=None, **payload) -> Stop:
    location = None if lat is None or lng is None else Location(lat, lng)
    return Stop(id=stop_id, location=location, payload=payload or None)


@pytest.fixture
def buenos_aires_stops() -> list[Stop]:
    """Six clients around Buenos Aires, one of them not geocoded."""
    return [
        _make_stop(1, -34.6037, -58.3816, name="Obelisco"),
        _make_stop(2, -34.5601, -58.4560, name="Belgrano"),
        _make_stop(3, -34.6090, -58.3780, name="Plaza de Mayo"),
        _make_stop(4, None, None, name="Sin coordenadas"),
        _make_stop(5, -34.6450, -58.3830, name="Barracas"),
        _make_stop(6, -34.5620, -58.4510, name="Juramento"),
    ]


@pytest.fixture
def cache() -> FakeRouteResultCache:
    return FakeRouteResultCache()


@pytest_asyncio.fixture
async def session_factory():
    """Create tables on a fresh in-memory DB, yield a session factory, drop."""
    engine = create_async_engine(TEST_DB_URL, echo=False, poolclass=StaticPool)
    async with engine.begin() as conn:
        await conn.run_sync(TestBase.metadata.create_all)

    yield async_sessionmaker(engine, class_=AsyncSession, expire_on_commit=False)

    async with engine.begin() as conn:
        await conn.run_sync(TestBase.metadata.drop_all)
    await engine.dispose()


@pytest_asyncio.fixture
async def client(session_factory, cache):
    """AsyncClient backed by SQLite + test models + in-memory cache."""
    with (
        patch("src.api.routes.clients.ClientRepository", _TestClientRepository),
        patch("src.api.routes.clients.RouteRepository", _TestRouteRepository),
        patch(
            "src.api.routes.delivery_routes.ClientRepository",
            _TestClientRepository,
        ),
        patch(
            "src.api.routes.delivery_routes.RouteRepository",
            _TestRouteRepository,
        ),
    ):
        # DB session dependency
        async def _test_db():
            async with session_factory() as session:
                try:
                    yield session
                    await session.commit()
                except Exception:
                    await session.rollback()
                    raise

        from src.api.app import create_app
        from src.api.dependencies import get_cache, get_db

        app = create_app()
        app.dependency_overrides[get_db] = _test_db
        app.dependency_overrides[get_cache] = lambda: cache

        transport = ASGITransport(app=app)
        async with AsyncClient(transport=transport, base_url="http://test") as ac:
            yield ac

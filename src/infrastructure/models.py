"""
SQLAlchemy ORM models  (maps to PostgreSQL + PostGIS).

Tables
------
* ``clients``        -- delivery points; coordinates are optional
* ``routes``         -- named delivery routes
* ``route_clients``  -- ordered assignment of clients to a route

Indexes
-------
* **GIST** on ``clients.location`` for spatial queries.
* **B-Tree** on ``clients.status`` and ``route_clients.route_id`` for the
  look-ups used when loading a route for optimisation.
"""

from sqlalchemy import (
    Column,
    DateTime,
    Float,
    ForeignKey,
    Index,
    Integer,
    String,
    UniqueConstraint,
    func,
)
from geoalchemy2 import Geometry

from .database import Base


class ClientModel(Base):
    __tablename__ = "clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(160), nullable=False)
    business_name = Column(String(200), nullable=True)
    address = Column(String(255), nullable=False)
    phone = Column(String(40), nullable=True)
    status = Column(String(20), default="ACTIVE", nullable=False)

    # Plain floats for fast reads; NULL means "no known location"
    latitude = Column(Float, nullable=True)
    longitude = Column(Float, nullable=True)
    # PostGIS mirror of (latitude, longitude) for spatial indexing
    location = Column(Geometry("POINT", srid=4326), nullable=True)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index("idx_clients_location", "location", postgresql_using="gist"),
        Index("idx_clients_status", "status"),
    )


class RouteModel(Base):
    __tablename__ = "routes"

    id = Column(Integer, primary_key=True, autoincrement=True)
    name = Column(String(120), unique=True, nullable=False)
    created_at = Column(DateTime(timezone=True), server_default=func.now())


class RouteClientModel(Base):
    __tablename__ = "route_clients"

    id = Column(Integer, primary_key=True, autoincrement=True)
    route_id = Column(
        Integer, ForeignKey("routes.id", ondelete="CASCADE"), nullable=False
    )
    client_id = Column(
        Integer, ForeignKey("clients.id", ondelete="CASCADE"), nullable=False
    )
    # Assignment order; the optimiser starts from position 0
    position = Column(Integer, nullable=False)

    __table_args__ = (
        UniqueConstraint("route_id", "client_id", name="uq_route_client"),
        Index("idx_route_clients_route", "route_id"),
    )

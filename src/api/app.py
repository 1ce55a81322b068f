"""
FastAPI application factory.

* Registers routes for optimisation, clients, delivery routes and admin.
* Closes the Redis connection pool via lifespan events.
* Applies rate-limiting middleware.
* Swagger / OpenAPI UI available at ``/docs``.
"""

from contextlib import asynccontextmanager
import logging

from fastapi import FastAPI
from slowapi import _rate_limit_exceeded_handler
from slowapi.errors import RateLimitExceeded

from src.api.middleware import limiter
from src.api.routes import admin, clients, delivery_routes, optimize
from src.infrastructure import redis_client

logging.basicConfig(level=logging.INFO)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Release pooled Redis connections on shutdown."""
    yield
    await redis_client.close_pool()


def create_app() -> FastAPI:
    app = FastAPI(
        title="Delivery Route Ordering API",
        description=(
            "Orders delivery stops into a short visiting sequence using a "
            "nearest-neighbor heuristic over great-circle distances, with "
            "per-stop distance and time estimates and route totals."
        ),
        version="1.0.0",
        lifespan=lifespan,
    )

    # Rate limiter
    app.state.limiter = limiter
    app.add_exception_handler(RateLimitExceeded, _rate_limit_exceeded_handler)

    # Routers
    app.include_router(optimize.router, prefix="/api/v1")
    app.include_router(clients.router, prefix="/api/v1")
    app.include_router(delivery_routes.router, prefix="/api/v1")
    app.include_router(admin.router, prefix="/api/v1")

    return app

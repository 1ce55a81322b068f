"""
Seed script -- populates the database with sample data for reviewers.

Run after migrations:
    python seed.py

Creates:
  - 12 sample clients around Buenos Aires (2 without coordinates)
  - 3 sample routes (Norte, Centro, Sur) with clients assigned
"""

import asyncio

from sqlalchemy import text

from src.infrastructure.database import async_session_factory, engine
from src.infrastructure.repositories import ClientRepository, RouteRepository


CLIENTS = [
    # Norte
    {"name": "Almacén Don Pedro", "address": "Av. Cabildo 2150", "phone": "011-4781-2233", "lat": -34.5601, "lng": -58.4560},
    {"name": "Kiosco Belgrano", "address": "Juramento 1800", "phone": "011-4783-1100", "lat": -34.5620, "lng": -58.4510},
    {"name": "Panadería La Espiga", "address": "Av. Congreso 2400", "phone": None, "lat": -34.5540, "lng": -58.4650},
    {"name": "Mercado Núñez", "address": "Av. del Libertador 7000", "phone": "011-4701-5522", "lat": -34.5465, "lng": -58.4600},
    # Centro
    {"name": "Distribuidora Obelisco", "address": "Av. Corrientes 1000", "phone": "011-4322-9090", "lat": -34.6037, "lng": -58.3816},
    {"name": "Farmacia Plaza", "address": "Av. de Mayo 800", "phone": "011-4342-1212", "lat": -34.6090, "lng": -58.3780},
    {"name": "Librería Florida", "address": "Florida 500", "phone": None, "lat": -34.6010, "lng": -58.3760},
    {"name": "Bar San Telmo", "address": "Defensa 900", "phone": "011-4361-0011", "lat": -34.6200, "lng": -58.3720},
    # Sur
    {"name": "Ferretería Barracas", "address": "Av. Montes de Oca 1500", "phone": "011-4301-7788", "lat": -34.6450, "lng": -58.3830},
    {"name": "Autoservicio Pompeya", "address": "Av. Sáenz 900", "phone": "011-4911-3344", "lat": -34.6500, "lng": -58.4170},
    # Not geocoded yet
    {"name": "Verdulería El Sol", "address": "Calle sin número", "phone": "011-4000-0000", "lat": None, "lng": None},
    {"name": "Depósito Avellaneda", "address": "Av. Mitre 3000", "phone": None, "lat": None, "lng": None},
]

ROUTES = {
    "Norte": [0, 1, 2, 3, 10],
    "Centro": [4, 5, 6, 7],
    "Sur": [8, 9, 11],
}


async def seed():
    async with async_session_factory() as session:
        # Check if already seeded
        result = await session.execute(text("SELECT count(*) FROM clients"))
        if result.scalar() > 0:
            print("Database already seeded. Skipping.")
            return

        # ── Clients ───────────────────────────────────────────────────
        client_repo = ClientRepository(session)
        client_models = []
        for c in CLIENTS:
            m = await client_repo.create_client(
                name=c["name"],
                address=c["address"],
                phone=c["phone"],
                latitude=c["lat"],
                longitude=c["lng"],
            )
            client_models.append(m)
        print(f"  Created {len(client_models)} clients")

        # ── Routes ────────────────────────────────────────────────────
        route_repo = RouteRepository(session)
        for name, indexes in ROUTES.items():
            route = await route_repo.create_route(name=name)
            await route_repo.replace_clients(
                route.id, [client_models[i].id for i in indexes]
            )
        print(f"  Created {len(ROUTES)} routes")

        await session.commit()
        print("\nSeed complete!")


async def main():
    print("Seeding database...")
    await seed()
    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(main())

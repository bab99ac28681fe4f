"""
Create all tables and seed the lookup catalogs for development.
Run: python -m scripts.init_db  (from backend/)
"""

import asyncio

from resume_intake.db.models import Base
from resume_intake.db.session import async_session, engine
from resume_intake.repositories.catalogs import seed_catalogs

SEED_CATALOGS = {
    "tipo_identificacion": [
        "Cédula de Ciudadanía",
        "Cédula de Extranjería",
        "Pasaporte",
        "Permiso por Protección Temporal",
        "Tarjeta de Identidad",
    ],
    "eps": [
        "Compensar",
        "Coosalud",
        "Famisanar",
        "Nueva EPS",
        "Salud Total",
        "Sanitas",
        "Sura",
    ],
    "pension": [
        "Colfondos",
        "Colpensiones",
        "Porvenir",
        "Protección",
        "Skandia",
    ],
    "departamentos": {
        "Antioquia": ["Bello", "Envigado", "Itagüí", "Medellín", "Rionegro"],
        "Atlántico": ["Barranquilla", "Malambo", "Soledad"],
        "Bogotá D.C.": ["Bogotá"],
        "Cundinamarca": ["Chía", "Funza", "Madrid", "Mosquera", "Soacha"],
        "Valle del Cauca": ["Buenaventura", "Cali", "Palmira", "Yumbo"],
    },
}


async def init_db():
    """Create tables, then insert missing catalog rows."""
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)
    print("Tables created.")

    async with async_session() as session:
        inserted = await seed_catalogs(session, SEED_CATALOGS)
        await session.commit()
    for catalog, count in inserted.items():
        print(f"  {catalog}: {count} new rows")

    await engine.dispose()


if __name__ == "__main__":
    asyncio.run(init_db())

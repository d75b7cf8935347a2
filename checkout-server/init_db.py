"""
Create the trade tables for local development.
Production deployments run ``alembic upgrade head`` instead.
"""
import asyncio

from paygate.infrastructure.database import dispose_engine, init_db


async def create_tables():
    await init_db()
    await dispose_engine()
    print("Database tables created")


if __name__ == "__main__":
    asyncio.run(create_tables())

"""
Initialize the database: create all tables and seed the sample alerts.
Run with: python -m scripts.init_db
"""

import asyncio
from app.database import dispose_engine, get_session_factory, init_models
from app.seed import seed_sample_alerts


async def init():
    print("Creating database tables...")
    await init_models()
    async with get_session_factory()() as session:
        created = await seed_sample_alerts(session)
    print(f"All tables created successfully ({created} sample alerts added).")
    await dispose_engine()


if __name__ == "__main__":
    asyncio.run(init())

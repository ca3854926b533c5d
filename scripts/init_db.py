import asyncio
from dotenv import load_dotenv

load_dotenv()

from app.core.db import create_db_and_tables, dispose_engine, engine  # noqa: E402


async def main() -> None:
    await create_db_and_tables()
    await dispose_engine()
    print(f"Ensured table 'bookings' exists on {engine.url.render_as_string(hide_password=True)}")


asyncio.run(main())

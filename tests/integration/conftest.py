# tests/integration/conftest.py
import pytest_asyncio

from accounts.infrastructure.db.pool import close_pool, open_pool


@pytest_asyncio.fixture
async def pool():
    p = await open_pool()
    try:
        async with p.connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute("TRUNCATE users RESTART IDENTITY;")
            await conn.commit()
        yield p
    finally:
        await close_pool()

"""Redis client factory — used for the published line board only.

NOT used for balances or wagers (those go through the relational ledger).
The client is created in the application lifespan and closed at shutdown.
"""

import redis.asyncio as aioredis


def create_redis(url: str) -> aioredis.Redis:
    """Create a Redis client backed by its own connection pool."""
    return aioredis.from_url(url, decode_responses=True)


async def close_redis(client: aioredis.Redis) -> None:
    """Close the client and release its pool."""
    await client.aclose()

"""KeyValueStore check: connect to Redis and issue ``INFO server``."""

from __future__ import annotations

import logging

import redis.asyncio as redis
from redis.exceptions import ConnectionError as RedisConnectionError
from redis.exceptions import RedisError
from redis.exceptions import TimeoutError as RedisTimeoutError

from Health_Check.checks._common import deadline_detail, error_text
from Health_Check.models.targets import KeyValueStoreTarget
from Health_Check.utils.exceptions import (
    CheckConnectionError,
    CheckTimeoutError,
    ProtocolError,
)

logger = logging.getLogger(__name__)


async def check_redis(target: KeyValueStoreTarget, timeout: float) -> None:
    """Succeed iff ``INFO server`` returns without error.

    Uses a single dedicated connection, closed after the attempt.
    """
    client = redis.Redis.from_url(
        target.url,
        socket_connect_timeout=timeout,
        socket_timeout=timeout,
        single_connection_client=True,
    )
    try:
        info = await client.info("server")
    except RedisTimeoutError as exc:
        raise CheckTimeoutError(
            deadline_detail(timeout), target=target.name, kind=target.kind
        ) from exc
    except RedisConnectionError as exc:
        raise CheckConnectionError(
            error_text(exc), target=target.name, kind=target.kind
        ) from exc
    except RedisError as exc:
        raise ProtocolError(error_text(exc), target=target.name, kind=target.kind) from exc
    finally:
        await client.aclose()

    logger.debug("%s: redis_version=%s", target.name, info.get("redis_version", "?"))

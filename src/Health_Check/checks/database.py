"""RelationalDatabase check: connect to PostgreSQL and run ``SELECT 1``."""

from __future__ import annotations

import logging
from typing import Final

import asyncpg

from Health_Check.checks._common import deadline_detail, error_text
from Health_Check.models.targets import RelationalDatabaseTarget
from Health_Check.utils.exceptions import (
    CheckConnectionError,
    CheckTimeoutError,
    ProtocolError,
)

logger = logging.getLogger(__name__)

PROBE_QUERY: Final[str] = "SELECT 1"
EXPECTED_SCALAR: Final[int] = 1


async def _close_quietly(conn: asyncpg.Connection, target: RelationalDatabaseTarget) -> None:
    """Close the connection without letting a close failure replace the check result."""
    try:
        await conn.close()
    except (OSError, TimeoutError, asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
        logger.warning("%s: error closing connection: %s", target.name, error_text(exc))


async def check_postgres(target: RelationalDatabaseTarget, timeout: float) -> None:
    """Succeed iff ``SELECT 1`` returns exactly one row holding ``1``.

    The connection is closed after the attempt regardless of outcome.
    """
    try:
        conn = await asyncpg.connect(dsn=target.url, timeout=timeout)
    except TimeoutError as exc:
        raise CheckTimeoutError(
            deadline_detail(timeout), target=target.name, kind=target.kind
        ) from exc
    except (OSError, asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
        raise CheckConnectionError(
            error_text(exc), target=target.name, kind=target.kind
        ) from exc

    try:
        rows = await conn.fetch(PROBE_QUERY, timeout=timeout)
    except TimeoutError as exc:
        raise CheckTimeoutError(
            deadline_detail(timeout), target=target.name, kind=target.kind
        ) from exc
    except (asyncpg.PostgresError, asyncpg.InterfaceError) as exc:
        raise ProtocolError(error_text(exc), target=target.name, kind=target.kind) from exc
    finally:
        await _close_quietly(conn, target)

    if len(rows) != 1 or rows[0][0] != EXPECTED_SCALAR:
        logger.debug("%s: %s returned %r", target.name, PROBE_QUERY, rows)
        raise ProtocolError("unexpected result", target=target.name, kind=target.kind)

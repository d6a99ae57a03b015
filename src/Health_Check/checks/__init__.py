"""Per-kind verification functions.

Each checker is an async function ``(target, timeout) -> None`` that returns on
success and raises a ``CheckError`` subclass on failure. Checkers never enforce
the deadline themselves beyond passing ``timeout`` to their client library;
the runner races them against it. Every connection a checker opens is closed
on every exit path, including cancellation.
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable, Mapping
from typing import Any

from Health_Check.checks.broker import check_amqp
from Health_Check.checks.database import check_postgres
from Health_Check.checks.file_timestamp import check_file_timestamp
from Health_Check.checks.http import check_http
from Health_Check.checks.key_value import check_redis
from Health_Check.models.enums import CheckKind

Checker = Callable[[Any, float], Awaitable[None]]

CHECKERS: Mapping[CheckKind, Checker] = {
    CheckKind.FILE_TIMESTAMP: check_file_timestamp,
    CheckKind.MESSAGE_BROKER: check_amqp,
    CheckKind.RELATIONAL_DATABASE: check_postgres,
    CheckKind.KEY_VALUE_STORE: check_redis,
    CheckKind.HTTP_ENDPOINT: check_http,
}

__all__ = [
    "CHECKERS",
    "Checker",
    "check_amqp",
    "check_file_timestamp",
    "check_http",
    "check_postgres",
    "check_redis",
]

"""HttpEndpoint check: GET the URL and require status 200."""

from __future__ import annotations

import logging

import httpx

from Health_Check.checks._common import deadline_detail, error_text
from Health_Check.models.targets import HttpEndpointTarget
from Health_Check.utils.exceptions import (
    CheckConnectionError,
    CheckTimeoutError,
    ProtocolError,
)

logger = logging.getLogger(__name__)


async def check_http(
    target: HttpEndpointTarget,
    timeout: float,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Succeed iff the response status code is exactly 200.

    Redirects are not followed: a 3xx is reported as a failure. Only the
    status line and headers are awaited; the body is never read.

    Args:
        target: Endpoint to probe.
        timeout: Applied to every phase of the request (connect, read, write, pool).
        transport: Optional transport override, used by tests.
    """
    try:
        async with (
            httpx.AsyncClient(timeout=timeout, transport=transport) as client,
            client.stream("GET", target.url) as response,
        ):
            status_code = response.status_code
    except httpx.TimeoutException as exc:
        raise CheckTimeoutError(
            deadline_detail(timeout), target=target.name, kind=target.kind
        ) from exc
    except httpx.HTTPError as exc:
        raise CheckConnectionError(
            error_text(exc), target=target.name, kind=target.kind
        ) from exc

    if status_code != 200:  # noqa: PLR2004
        raise ProtocolError(str(status_code), target=target.name, kind=target.kind)

    logger.debug("%s: GET %s -> 200", target.name, target.endpoint)

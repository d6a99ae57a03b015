"""MessageBroker check: complete an AMQP connection handshake, then close."""

from __future__ import annotations

import logging

import aio_pika
from aio_pika.exceptions import AMQPError

from Health_Check.checks._common import deadline_detail, error_text
from Health_Check.models.targets import MessageBrokerTarget
from Health_Check.utils.exceptions import (
    CheckConnectionError,
    CheckTimeoutError,
    ProtocolError,
)

logger = logging.getLogger(__name__)


async def check_amqp(target: MessageBrokerTarget, timeout: float) -> None:
    """Succeed iff the broker accepts a connection with the configured credentials.

    No channel, exchange, or queue is touched.
    """
    try:
        connection = await aio_pika.connect(target.url, timeout=timeout)
    except TimeoutError as exc:
        raise CheckTimeoutError(
            deadline_detail(timeout), target=target.name, kind=target.kind
        ) from exc
    except (AMQPError, OSError) as exc:
        raise CheckConnectionError(
            error_text(exc), target=target.name, kind=target.kind
        ) from exc

    logger.debug("%s: AMQP handshake completed with %s", target.name, target.endpoint)

    try:
        await connection.close()
    except AMQPError as exc:
        raise ProtocolError(
            f"close failed: {error_text(exc)}", target=target.name, kind=target.kind
        ) from exc

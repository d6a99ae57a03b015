"""FileTimestamp check: a file whose timestamp must be recent.

By default the file's modification time is used. In ``content`` mode the file
is expected to hold a Unix timestamp written by the supervised process; every
non-digit character (whitespace, newlines) is discarded before parsing. A
value outside the signed 64-bit range, or further in the future than clock
skew explains, is rejected rather than treated as fresh.
"""

from __future__ import annotations

import logging
import string
import time
from typing import Final

from Health_Check.checks._common import run_blocking
from Health_Check.models.enums import TimestampSource
from Health_Check.models.targets import FileTimestampTarget
from Health_Check.utils.exceptions import (
    CheckConnectionError,
    ProtocolError,
    StaleResourceError,
)

logger = logging.getLogger(__name__)

MAX_CONTENT_TIMESTAMP: Final[int] = 2**63 - 1
# How far ahead of our clock a written timestamp may be
CLOCK_SKEW_ALLOWANCE: Final[float] = 5.0


def _read_timestamp(target: FileTimestampTarget) -> float:
    """Blocking read of the target's timestamp (run on a daemon thread)."""
    if target.source == TimestampSource.MTIME:
        return target.path.stat().st_mtime

    content = target.path.read_text(encoding="utf-8", errors="replace")
    digits = "".join(ch for ch in content if ch in string.digits)
    if not digits:
        raise ProtocolError("no timestamp in file", target=target.name, kind=target.kind)
    # Compare lengths first so a huge digit run is never converted
    if len(digits) > len(str(MAX_CONTENT_TIMESTAMP)) or int(digits) > MAX_CONTENT_TIMESTAMP:
        raise ProtocolError("timestamp out of range", target=target.name, kind=target.kind)
    return int(digits)


async def check_file_timestamp(target: FileTimestampTarget, timeout: float) -> None:
    """Succeed iff the file exists and its age is within ``target.max_age``.

    Raises:
        CheckConnectionError: The file is missing or unreadable.
        ProtocolError: Content mode and the file holds no usable timestamp.
        StaleResourceError: The timestamp is older than allowed.
    """
    try:
        timestamp = await run_blocking(_read_timestamp, target)
    except FileNotFoundError as exc:
        raise CheckConnectionError("file missing", target=target.name, kind=target.kind) from exc
    except OSError as exc:
        raise CheckConnectionError(
            f"cannot read file: {exc.strerror or exc}",
            target=target.name,
            kind=target.kind,
        ) from exc

    age = time.time() - timestamp
    logger.debug("%s: %s age %.1fs (max %gs)", target.name, target.path, age, target.max_age)

    if target.source == TimestampSource.CONTENT and age < -CLOCK_SKEW_ALLOWANCE:
        raise ProtocolError(
            f"timestamp {-age:.0f}s in the future",
            target=target.name,
            kind=target.kind,
        )
    if age > target.max_age:
        raise StaleResourceError(
            f"stale by {age - target.max_age:.0f}s",
            target=target.name,
            kind=target.kind,
        )

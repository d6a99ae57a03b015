"""Centralized logging configuration for the CLI entry point."""

from __future__ import annotations

import logging
import os

LOG_FORMAT: str = "%(asctime)s %(levelname)-8s %(name)s: %(message)s"

_MODULE_LOGGERS: dict[str, str] = {
    "CHECKS": "Health_Check.checks",
    "SERVICES": "Health_Check.services",
    "REPORTING": "Health_Check.reporting",
}

# Client libraries that log every connection attempt at INFO
_NOISY_LOGGERS: tuple[str, ...] = ("httpx", "httpcore", "aio_pika", "aiormq", "asyncpg")


def configure_logging(
    *,
    level: str = "",
    verbose: bool = False,
    quiet: bool = False,
) -> None:
    """Configure root logger with a consistent format on stderr.

    Priority: verbose > quiet > level param > LOG_LEVEL env > INFO default.
    Uses force=True to override any prior root logger config.
    Reads LOG_LEVEL_{MODULE} env vars for per-module overrides.
    """
    if verbose:
        effective = logging.DEBUG
    elif quiet:
        effective = logging.WARNING
    elif level:
        effective = getattr(logging, level.upper(), logging.INFO)
    else:
        env_level = os.environ.get("LOG_LEVEL", "INFO")
        effective = getattr(logging, env_level.upper(), logging.INFO)

    logging.basicConfig(level=effective, format=LOG_FORMAT, force=True)

    for name in _NOISY_LOGGERS:
        logging.getLogger(name).setLevel(logging.WARNING)

    # Apply per-module overrides from env vars
    for key, logger_name in _MODULE_LOGGERS.items():
        env_key = f"LOG_LEVEL_{key}"
        module_level = os.environ.get(env_key)
        if module_level:
            resolved = getattr(logging, module_level.upper(), None)
            if resolved is not None:
                logging.getLogger(logger_name).setLevel(resolved)

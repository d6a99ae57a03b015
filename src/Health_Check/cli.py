"""CLI entry point for the dependency health-check runner.

Provides the ``health-check`` command with two subcommands: ``run`` performs
one check pass and exits with the verdict's status code, ``show-config``
prints the resolved targets without contacting anything.

This is the ONLY module that writes to stdout directly; all other modules use
``logging`` (stderr). The async runner is bridged to typer's synchronous
interface via ``asyncio.run()``.
"""

import asyncio
import logging
from pathlib import Path
from typing import Annotated

import typer
from rich.console import Console

from Health_Check.exit_policy import EXIT_CONFIGURATION_ERROR, conclude
from Health_Check.logging_config import configure_logging
from Health_Check.models import CheckConfig, CheckKind, OutputFormat, TimestampSource
from Health_Check.reporting import format_config_lines, render_config
from Health_Check.services import run_checks
from Health_Check.settings import DEFAULT_ENV_FILE, build_check_config, load_settings
from Health_Check.utils.exceptions import ConfigurationError

logger = logging.getLogger(__name__)

app = typer.Typer(name="health-check", help="Check health of apps and services")

# Rich console for formatted output
console = Console()
error_console = Console(stderr=True)

# ---------------------------------------------------------------------------
# Shared option types
# ---------------------------------------------------------------------------

TimestampFlag = Annotated[
    bool,
    typer.Option("--timestamp", help="Check that the timestamp file is recent"),
]
TimestampFileOpt = Annotated[
    str | None,
    typer.Option(help="File to check. Default: /app/tmp/health.all. Implies --timestamp"),
]
TimestampMaxAgeOpt = Annotated[
    float | None,
    typer.Option(help="Max allowed age in seconds. Default: 20. Implies --timestamp"),
]
TimestampSourceOpt = Annotated[
    TimestampSource | None,
    typer.Option(help="Read the file's mtime or a Unix timestamp from its content"),
]
AmqpFlag = Annotated[bool, typer.Option("--amqp", help="Connect to the AMQP broker")]
AmqpUrlOpt = Annotated[
    str | None, typer.Option(help="Broker URL (env AMQP_URL). Implies --amqp")
]
PostgresFlag = Annotated[
    bool, typer.Option("--postgres", help="Connect to PostgreSQL and run SELECT 1")
]
PostgresUrlOpt = Annotated[
    str | None, typer.Option(help="Database URL (env POSTGRES_URL). Implies --postgres")
]
RedisFlag = Annotated[bool, typer.Option("--redis", help="Connect to Redis and run INFO server")]
RedisUrlOpt = Annotated[
    str | None, typer.Option(help="Redis URL (env REDIS_URL). Implies --redis")
]
HttpFlag = Annotated[bool, typer.Option("--http", help="GET the URL and expect a 200 response")]
HttpUrlOpt = Annotated[
    list[str] | None,
    typer.Option(help="URL to GET; repeat for several endpoints (env HTTP_URL). Implies --http"),
]
TimeoutOpt = Annotated[
    float | None, typer.Option(help="Default per-check deadline in seconds (env CHECK_TIMEOUT)")
]
MaxConcurrencyOpt = Annotated[
    int | None, typer.Option(help="Run at most this many checks at once (default: all)")
]
EnvFileOpt = Annotated[Path, typer.Option(help="Dotenv file to read settings from")]


def _resolve_config(
    *,
    env_file: Path,
    flags: dict[CheckKind, bool],
    overrides: dict[str, object],
    http_urls: list[str] | None = None,
) -> CheckConfig:
    """Load settings and build the CheckConfig, or exit with the configuration error code."""
    try:
        settings = load_settings(env_file=env_file, **overrides)
        enabled = [kind for kind, on in flags.items() if on]
        return build_check_config(settings, enabled, http_urls=http_urls)
    except ConfigurationError as exc:
        error_console.print("[red]Configuration error:[/red]")
        for problem in exc.problems:
            error_console.print(f"  {problem}", highlight=False)
        raise typer.Exit(code=EXIT_CONFIGURATION_ERROR) from exc


def _collect(
    *,
    timestamp: bool,
    timestamp_file: str | None,
    timestamp_max_age: float | None,
    timestamp_source: TimestampSource | None,
    amqp: bool,
    amqp_url: str | None,
    postgres: bool,
    postgres_url: str | None,
    redis: bool,
    redis_url: str | None,
    http: bool,
    http_url: list[str] | None,
    timeout: float | None,
    max_concurrency: int | None,
) -> tuple[dict[CheckKind, bool], dict[str, object]]:
    """Split CLI values into enabled-kind flags and settings overrides.

    A connection option implies its kind, so ``--redis-url X`` alone enables Redis.
    Repeated ``--http-url`` values are not part of the overrides; they are passed
    to ``build_check_config`` as a list so commas inside a URL are preserved.
    """
    flags = {
        CheckKind.FILE_TIMESTAMP: timestamp
        or any(v is not None for v in (timestamp_file, timestamp_max_age, timestamp_source)),
        CheckKind.MESSAGE_BROKER: amqp or amqp_url is not None,
        CheckKind.RELATIONAL_DATABASE: postgres or postgres_url is not None,
        CheckKind.KEY_VALUE_STORE: redis or redis_url is not None,
        CheckKind.HTTP_ENDPOINT: http or bool(http_url),
    }
    overrides: dict[str, object] = {
        "timestamp_file": timestamp_file,
        "timestamp_max_age": timestamp_max_age,
        "timestamp_source": timestamp_source,
        "amqp_url": amqp_url,
        "postgres_url": postgres_url,
        "redis_url": redis_url,
        "check_timeout": timeout,
        "max_concurrency": max_concurrency,
    }
    return flags, overrides


# ---------------------------------------------------------------------------
# run command
# ---------------------------------------------------------------------------


@app.command()
def run(
    timestamp: TimestampFlag = False,
    timestamp_file: TimestampFileOpt = None,
    timestamp_max_age: TimestampMaxAgeOpt = None,
    timestamp_source: TimestampSourceOpt = None,
    amqp: AmqpFlag = False,
    amqp_url: AmqpUrlOpt = None,
    postgres: PostgresFlag = False,
    postgres_url: PostgresUrlOpt = None,
    redis: RedisFlag = False,
    redis_url: RedisUrlOpt = None,
    http: HttpFlag = False,
    http_url: HttpUrlOpt = None,
    timeout: TimeoutOpt = None,
    max_concurrency: MaxConcurrencyOpt = None,
    output: Annotated[
        OutputFormat, typer.Option("--output", "-o", help="Report format")
    ] = OutputFormat.TABLE,
    env_file: EnvFileOpt = Path(DEFAULT_ENV_FILE),
    verbose: Annotated[bool, typer.Option("--verbose", "-v", help="Enable debug logging")] = False,
    quiet: Annotated[bool, typer.Option("--quiet", "-q", help="Suppress info logging")] = False,
) -> None:
    """Run the enabled checks once; exit 0 if all pass, 1 otherwise, 2 on bad config."""
    configure_logging(verbose=verbose, quiet=quiet)

    flags, overrides = _collect(
        timestamp=timestamp,
        timestamp_file=timestamp_file,
        timestamp_max_age=timestamp_max_age,
        timestamp_source=timestamp_source,
        amqp=amqp,
        amqp_url=amqp_url,
        postgres=postgres,
        postgres_url=postgres_url,
        redis=redis,
        redis_url=redis_url,
        http=http,
        http_url=http_url,
        timeout=timeout,
        max_concurrency=max_concurrency,
    )
    config = _resolve_config(
        env_file=env_file, flags=flags, overrides=overrides, http_urls=http_url
    )

    logger.debug("Running %d check(s)", len(config.targets))
    verdict = asyncio.run(run_checks(config))
    raise typer.Exit(code=conclude(verdict, output_format=output, out=console))


# ---------------------------------------------------------------------------
# show-config command
# ---------------------------------------------------------------------------


@app.command("show-config")
def show_config(
    timestamp: TimestampFlag = False,
    timestamp_file: TimestampFileOpt = None,
    timestamp_max_age: TimestampMaxAgeOpt = None,
    timestamp_source: TimestampSourceOpt = None,
    amqp: AmqpFlag = False,
    amqp_url: AmqpUrlOpt = None,
    postgres: PostgresFlag = False,
    postgres_url: PostgresUrlOpt = None,
    redis: RedisFlag = False,
    redis_url: RedisUrlOpt = None,
    http: HttpFlag = False,
    http_url: HttpUrlOpt = None,
    timeout: TimeoutOpt = None,
    max_concurrency: MaxConcurrencyOpt = None,
    plain: Annotated[bool, typer.Option("--plain", help="One line per target, no table")] = False,
    env_file: EnvFileOpt = Path(DEFAULT_ENV_FILE),
) -> None:
    """Print the resolved targets without running any check."""
    configure_logging(quiet=True)

    flags, overrides = _collect(
        timestamp=timestamp,
        timestamp_file=timestamp_file,
        timestamp_max_age=timestamp_max_age,
        timestamp_source=timestamp_source,
        amqp=amqp,
        amqp_url=amqp_url,
        postgres=postgres,
        postgres_url=postgres_url,
        redis=redis,
        redis_url=redis_url,
        http=http,
        http_url=http_url,
        timeout=timeout,
        max_concurrency=max_concurrency,
    )
    config = _resolve_config(
        env_file=env_file, flags=flags, overrides=overrides, http_urls=http_url
    )

    if plain:
        for line in format_config_lines(config):
            console.out(line, highlight=False)
    else:
        render_config(config, out=console)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

if __name__ == "__main__":
    app()

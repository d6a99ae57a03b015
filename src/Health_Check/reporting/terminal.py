"""Rich-based terminal output for verdicts and resolved configurations.

Uses ``rich.console.Console`` for all output. Color scheme:
green = success, red = failure, yellow = timeout.
"""

from __future__ import annotations

import logging

from rich.console import Console
from rich.markup import escape
from rich.table import Table

from Health_Check.models.config import CheckConfig
from Health_Check.models.enums import CheckStatus, OverallHealth
from Health_Check.models.outcome import Verdict
from Health_Check.reporting.formatters import format_duration

logger = logging.getLogger(__name__)

# Shared console instance for terminal output
console = Console()

# --- Color scheme ---
COLOR_SUCCESS: str = "green"
COLOR_FAILURE: str = "red"
COLOR_TIMEOUT: str = "yellow"
COLOR_MUTED: str = "dim"

_STATUS_COLORS: dict[CheckStatus, str] = {
    CheckStatus.SUCCESS: COLOR_SUCCESS,
    CheckStatus.FAILURE: COLOR_FAILURE,
    CheckStatus.TIMEOUT: COLOR_TIMEOUT,
}


def _status_markup(status: CheckStatus) -> str:
    color = _STATUS_COLORS[status]
    return f"[{color}]{status.value.upper()}[/{color}]"


def render_verdict(verdict: Verdict, *, out: Console | None = None) -> None:
    """Render a Verdict as a table followed by the overall result.

    Args:
        verdict: Aggregated result of one run.
        out: Console to write to. Defaults to the module console.
    """
    target_console = out or console

    table = Table(title="Health Check")
    table.add_column("Target", style="bold")
    table.add_column("Kind")
    table.add_column("Status")
    table.add_column("Duration", justify="right")
    table.add_column("Detail")

    for outcome in verdict.outcomes:
        # Names and details are plain text; error messages may contain brackets
        table.add_row(
            escape(outcome.name),
            outcome.kind.value,
            _status_markup(outcome.status),
            format_duration(outcome.duration),
            "" if outcome.succeeded else escape(outcome.detail),
        )

    target_console.print(table)

    overall_color = COLOR_SUCCESS if verdict.overall == OverallHealth.HEALTHY else COLOR_FAILURE
    passed = len(verdict.outcomes) - len(verdict.failures)
    target_console.print(
        f"\n[bold {overall_color}]{verdict.overall.value.upper()}[/bold {overall_color}] "
        f"({passed}/{len(verdict.outcomes)} passed)"
    )
    checked_at = verdict.checked_at.strftime("%Y-%m-%dT%H:%M:%SZ")
    target_console.print(f"[{COLOR_MUTED}]Checked at: {checked_at}[/{COLOR_MUTED}]")


def render_config(config: CheckConfig, *, out: Console | None = None) -> None:
    """Render the resolved targets without running them. Credentials are masked."""
    target_console = out or console

    table = Table(title="Configured Checks")
    table.add_column("Target", style="bold")
    table.add_column("Kind")
    table.add_column("Endpoint")
    table.add_column("Timeout", justify="right")

    for target in config.targets:
        table.add_row(
            escape(target.name),
            target.kind.value,
            escape(target.endpoint),
            f"{config.timeout_for(target):g}s",
        )

    target_console.print(table)
    if config.max_concurrency is not None:
        target_console.print(
            f"[{COLOR_MUTED}]Max concurrency: {config.max_concurrency}[/{COLOR_MUTED}]"
        )

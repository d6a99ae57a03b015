"""Map a Verdict to the process exit status and emit the report.

The exit status is the canonical health signal for supervisors and
orchestrator probes: 0 when healthy, a fixed non-zero code otherwise.
"""

from __future__ import annotations

from typing import Final

from rich.console import Console

from Health_Check.models.enums import OutputFormat
from Health_Check.models.outcome import Verdict
from Health_Check.reporting.formatters import format_report_json, format_report_lines
from Health_Check.reporting.terminal import render_verdict

EXIT_HEALTHY: Final[int] = 0
EXIT_UNHEALTHY: Final[int] = 1
EXIT_CONFIGURATION_ERROR: Final[int] = 2


def exit_code_for(verdict: Verdict) -> int:
    """Healthy -> 0, anything else -> EXIT_UNHEALTHY."""
    return EXIT_HEALTHY if verdict.healthy else EXIT_UNHEALTHY


def emit_report(verdict: Verdict, output_format: OutputFormat, out: Console) -> None:
    """Write the report for ``verdict`` to ``out`` in the requested format."""
    if output_format == OutputFormat.TABLE:
        render_verdict(verdict, out=out)
    elif output_format == OutputFormat.TEXT:
        for line in format_report_lines(verdict):
            out.out(line, highlight=False)
    else:
        out.out(format_report_json(verdict), highlight=False)


def conclude(
    verdict: Verdict,
    *,
    output_format: OutputFormat | None = None,
    out: Console | None = None,
) -> int:
    """Emit the report (when a format is given) and return the exit status.

    Args:
        verdict: Aggregated result of the run.
        output_format: Report format, or None to emit nothing.
        out: Output sink; a stdout console when omitted.

    Returns:
        Process exit status for ``verdict``.
    """
    if output_format is not None:
        emit_report(verdict, output_format, out or Console())
    return exit_code_for(verdict)

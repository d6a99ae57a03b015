"""Plain-text and JSON renderings of a Verdict.

Both renderings list every target in configuration order. The text form is
one line per target; the JSON form is the machine-parseable payload.
"""

from __future__ import annotations

import json
from typing import Any

from Health_Check.models.config import CheckConfig
from Health_Check.models.outcome import CheckOutcome, Verdict


def format_duration(seconds: float) -> str:
    """Format elapsed time as milliseconds below one second, seconds above."""
    if seconds < 1:
        return f"{seconds * 1000:.0f}ms"
    return f"{seconds:.2f}s"


def format_outcome_line(outcome: CheckOutcome, *, name_width: int = 0) -> str:
    """One report line: name, kind, status, duration, and detail if not successful."""
    line = (
        f"{outcome.name:<{name_width}}  {outcome.kind.value:<9}  "
        f"{outcome.status.value.upper():<7}  {format_duration(outcome.duration):>8}"
    )
    if not outcome.succeeded and outcome.detail:
        line += f"  {outcome.detail}"
    return line


def format_report_lines(verdict: Verdict) -> list[str]:
    """Render a Verdict as text lines: one per target, then the overall summary."""
    name_width = max((len(outcome.name) for outcome in verdict.outcomes), default=0)
    lines = [format_outcome_line(outcome, name_width=name_width) for outcome in verdict.outcomes]
    passed = len(verdict.outcomes) - len(verdict.failures)
    total = len(verdict.outcomes)
    lines.append(f"overall: {verdict.overall.value.upper()} ({passed}/{total} passed)")
    return lines


def verdict_payload(verdict: Verdict) -> dict[str, Any]:
    """JSON-compatible dict with the overall verdict and every outcome."""
    return verdict.model_dump(mode="json")


def format_report_json(verdict: Verdict) -> str:
    return json.dumps(verdict_payload(verdict), indent=2)


def format_config_lines(config: CheckConfig) -> list[str]:
    """Describe configured targets without contacting them. Credentials are masked."""
    return [
        f"{target.name}  {target.kind.value}  {target.endpoint}  "
        f"timeout={config.timeout_for(target):g}s"
        for target in config.targets
    ]

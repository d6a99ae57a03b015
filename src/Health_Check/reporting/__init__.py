"""Reporting module: rich terminal tables, plain-text lines, and JSON payloads.

Re-exports all public functions so consumers can import directly:
    from Health_Check.reporting import render_verdict, format_report_lines
"""

from Health_Check.reporting.formatters import (
    format_config_lines,
    format_duration,
    format_outcome_line,
    format_report_json,
    format_report_lines,
    verdict_payload,
)
from Health_Check.reporting.terminal import render_config, render_verdict

__all__ = [
    # Formatters
    "format_config_lines",
    "format_duration",
    "format_outcome_line",
    "format_report_json",
    "format_report_lines",
    "verdict_payload",
    # Terminal
    "render_config",
    "render_verdict",
]

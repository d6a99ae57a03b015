"""Reduce ordered check outcomes into a single Verdict.

Pure functions: no I/O, no logging, no clock reads. The aggregation is
fail-closed: a configured target without an outcome counts as a failure,
never as an implicit success.
"""

from __future__ import annotations

import datetime
from collections.abc import Iterable, Sequence
from typing import Final

from Health_Check.models.enums import CheckStatus
from Health_Check.models.outcome import CheckOutcome, Verdict
from Health_Check.models.targets import CheckTarget

MISSING_OUTCOME_DETAIL: Final[str] = "no outcome recorded"


def aggregate(
    targets: Sequence[CheckTarget],
    outcomes: Iterable[CheckOutcome],
    *,
    checked_at: datetime.datetime,
) -> Verdict:
    """Build a Verdict with exactly one outcome per target, in target order.

    Args:
        targets: Configured targets; their order is the report order.
        outcomes: Outcomes in any order. The first outcome per target name
            wins; outcomes for unknown names are ignored.
        checked_at: When the run started.

    Returns:
        Verdict whose ``overall`` is healthy only if every target succeeded.
    """
    by_name: dict[str, CheckOutcome] = {}
    for outcome in outcomes:
        by_name.setdefault(outcome.name, outcome)

    ordered: list[CheckOutcome] = []
    for target in targets:
        outcome = by_name.get(target.name)
        if outcome is None or outcome.kind != target.kind:
            outcome = CheckOutcome(
                name=target.name,
                kind=target.kind,
                status=CheckStatus.FAILURE,
                detail=MISSING_OUTCOME_DETAIL,
                duration=0.0,
            )
        ordered.append(outcome)

    return Verdict(outcomes=tuple(ordered), checked_at=checked_at)

"""Outcome models: the result of one check attempt and the aggregate verdict."""

import datetime

from pydantic import BaseModel, ConfigDict, Field, computed_field

from Health_Check.models.enums import CheckKind, CheckStatus, OverallHealth


class CheckOutcome(BaseModel):
    """Result of executing one check target.

    Created exactly once per check attempt. ``detail`` explains the cause of a
    non-success status and is empty on success. ``duration`` is elapsed wall
    time in seconds.
    """

    model_config = ConfigDict(frozen=True)

    name: str
    kind: CheckKind
    status: CheckStatus
    detail: str = ""
    duration: float = Field(ge=0)

    @property
    def succeeded(self) -> bool:
        return self.status == CheckStatus.SUCCESS


class Verdict(BaseModel):
    """Aggregate over every CheckOutcome of one run, in configuration order.

    ``overall`` is derived, never stored: a run is healthy only when it has at
    least one outcome and every outcome succeeded.
    """

    model_config = ConfigDict(frozen=True)

    outcomes: tuple[CheckOutcome, ...]
    checked_at: datetime.datetime

    @computed_field  # type: ignore[prop-decorator]
    @property
    def overall(self) -> OverallHealth:
        if self.outcomes and all(outcome.succeeded for outcome in self.outcomes):
            return OverallHealth.HEALTHY
        return OverallHealth.UNHEALTHY

    @property
    def healthy(self) -> bool:
        return self.overall == OverallHealth.HEALTHY

    @property
    def failures(self) -> list[CheckOutcome]:
        """Outcomes that did not succeed, in configuration order."""
        return [outcome for outcome in self.outcomes if not outcome.succeeded]

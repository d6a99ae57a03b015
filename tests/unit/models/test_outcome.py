"""Tests for CheckOutcome and Verdict.

Covers:
- overall is HEALTHY iff every outcome succeeded
- an empty verdict is never healthy
- failures preserves configuration order
- JSON dump includes the derived overall field
- frozen immutability
"""

import datetime

import pytest
from pydantic import ValidationError

from Health_Check.models import CheckKind, CheckOutcome, CheckStatus, OverallHealth, Verdict

_NOW = datetime.datetime(2025, 1, 15, 15, 30, 0, tzinfo=datetime.UTC)


def _outcome(name: str, status: CheckStatus) -> CheckOutcome:
    return CheckOutcome(name=name, kind=CheckKind.HTTP_ENDPOINT, status=status, duration=0.1)


class TestVerdictOverall:
    """Tests for the derived overall verdict."""

    def test_all_success_is_healthy(self, healthy_verdict: Verdict) -> None:
        assert healthy_verdict.overall == OverallHealth.HEALTHY
        assert healthy_verdict.healthy is True

    def test_any_failure_is_unhealthy(self) -> None:
        verdict = Verdict(
            outcomes=(_outcome("a", CheckStatus.SUCCESS), _outcome("b", CheckStatus.FAILURE)),
            checked_at=_NOW,
        )
        assert verdict.overall == OverallHealth.UNHEALTHY

    def test_any_timeout_is_unhealthy(self) -> None:
        verdict = Verdict(
            outcomes=(_outcome("a", CheckStatus.TIMEOUT), _outcome("b", CheckStatus.SUCCESS)),
            checked_at=_NOW,
        )
        assert verdict.overall == OverallHealth.UNHEALTHY

    def test_empty_verdict_is_unhealthy(self) -> None:
        verdict = Verdict(outcomes=(), checked_at=_NOW)
        assert verdict.overall == OverallHealth.UNHEALTHY

    def test_failures_in_order(self, unhealthy_verdict: Verdict) -> None:
        assert [o.name for o in unhealthy_verdict.failures] == ["redis", "http"]

    def test_dump_includes_overall(self, unhealthy_verdict: Verdict) -> None:
        payload = unhealthy_verdict.model_dump(mode="json")
        assert payload["overall"] == "unhealthy"
        assert [o["status"] for o in payload["outcomes"]] == ["success", "failure", "timeout"]


class TestCheckOutcome:
    """Tests for CheckOutcome construction."""

    def test_detail_defaults_to_empty(self) -> None:
        assert _outcome("a", CheckStatus.SUCCESS).detail == ""

    def test_negative_duration_rejected(self) -> None:
        with pytest.raises(ValidationError):
            CheckOutcome(
                name="a",
                kind=CheckKind.HTTP_ENDPOINT,
                status=CheckStatus.SUCCESS,
                duration=-1.0,
            )

    def test_frozen(self) -> None:
        outcome = _outcome("a", CheckStatus.FAILURE)
        with pytest.raises(ValidationError, match="frozen"):
            outcome.status = CheckStatus.SUCCESS  # type: ignore[misc]

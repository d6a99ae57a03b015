"""Tests for aggregate(): ordering and the fail-closed policy."""

import datetime

from Health_Check.models import (
    CheckKind,
    CheckOutcome,
    CheckStatus,
    HttpEndpointTarget,
    KeyValueStoreTarget,
    OverallHealth,
)
from Health_Check.services import MISSING_OUTCOME_DETAIL, aggregate

_NOW = datetime.datetime(2025, 1, 15, 15, 30, 0, tzinfo=datetime.UTC)

_TARGETS = (
    HttpEndpointTarget(name="web", url="http://web/"),
    KeyValueStoreTarget(name="cache", url="redis://cache:6379/0"),
)


def _success(name: str, kind: CheckKind) -> CheckOutcome:
    return CheckOutcome(name=name, kind=kind, status=CheckStatus.SUCCESS, duration=0.01)


class TestAggregate:
    """Tests for aggregate()."""

    def test_all_success_is_healthy(self) -> None:
        verdict = aggregate(
            _TARGETS,
            [
                _success("web", CheckKind.HTTP_ENDPOINT),
                _success("cache", CheckKind.KEY_VALUE_STORE),
            ],
            checked_at=_NOW,
        )
        assert verdict.overall == OverallHealth.HEALTHY
        assert verdict.checked_at == _NOW

    def test_reorders_to_target_order(self) -> None:
        verdict = aggregate(
            _TARGETS,
            [
                _success("cache", CheckKind.KEY_VALUE_STORE),
                _success("web", CheckKind.HTTP_ENDPOINT),
            ],
            checked_at=_NOW,
        )
        assert [o.name for o in verdict.outcomes] == ["web", "cache"]

    def test_missing_outcome_is_failure(self) -> None:
        verdict = aggregate(_TARGETS, [_success("web", CheckKind.HTTP_ENDPOINT)], checked_at=_NOW)

        assert verdict.overall == OverallHealth.UNHEALTHY
        missing = verdict.outcomes[1]
        assert missing.name == "cache"
        assert missing.kind == CheckKind.KEY_VALUE_STORE
        assert missing.status == CheckStatus.FAILURE
        assert missing.detail == MISSING_OUTCOME_DETAIL

    def test_no_outcomes_at_all_is_unhealthy(self) -> None:
        verdict = aggregate(_TARGETS, [], checked_at=_NOW)
        assert len(verdict.outcomes) == 2
        assert verdict.overall == OverallHealth.UNHEALTHY

    def test_duplicate_outcomes_first_wins(self) -> None:
        failed = CheckOutcome(
            name="web",
            kind=CheckKind.HTTP_ENDPOINT,
            status=CheckStatus.FAILURE,
            detail="503",
            duration=0.01,
        )
        verdict = aggregate(
            _TARGETS,
            [
                failed,
                _success("web", CheckKind.HTTP_ENDPOINT),
                _success("cache", CheckKind.KEY_VALUE_STORE),
            ],
            checked_at=_NOW,
        )
        assert len(verdict.outcomes) == 2
        assert verdict.outcomes[0].detail == "503"

    def test_unknown_outcomes_ignored(self) -> None:
        verdict = aggregate(
            _TARGETS,
            [
                _success("web", CheckKind.HTTP_ENDPOINT),
                _success("cache", CheckKind.KEY_VALUE_STORE),
                _success("ghost", CheckKind.HTTP_ENDPOINT),
            ],
            checked_at=_NOW,
        )
        assert [o.name for o in verdict.outcomes] == ["web", "cache"]

    def test_outcome_with_wrong_kind_does_not_count(self) -> None:
        verdict = aggregate(
            _TARGETS,
            [
                _success("web", CheckKind.HTTP_ENDPOINT),
                _success("cache", CheckKind.HTTP_ENDPOINT),
            ],
            checked_at=_NOW,
        )
        assert verdict.outcomes[1].status == CheckStatus.FAILURE

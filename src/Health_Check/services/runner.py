"""Concurrent check execution with per-check deadlines and fault isolation.

Every target runs as its own asyncio task, raced against its deadline. A
check that misses the deadline is reported as a timeout and abandoned: its
task is cancelled but not awaited, so one hanging dependency never delays the
others. Abandoned tasks are tracked and given a grace period in ``aclose()``
so their ``finally`` blocks can release connections.
"""

from __future__ import annotations

import asyncio
import datetime
import logging
import time
from collections.abc import Mapping
from typing import Final

from Health_Check.checks import CHECKERS, Checker
from Health_Check.checks._common import deadline_detail, error_text
from Health_Check.models.config import CheckConfig
from Health_Check.models.enums import CheckKind, CheckStatus
from Health_Check.models.outcome import CheckOutcome, Verdict
from Health_Check.models.targets import CheckTarget
from Health_Check.services.aggregator import aggregate
from Health_Check.utils.exceptions import CheckError, CheckTimeoutError

logger = logging.getLogger(__name__)

# How long aclose() waits for cancelled checks to release their resources
ABANDON_GRACE_SECONDS: Final[float] = 1.0


class CheckRunner:
    """Run every configured check concurrently and collect one outcome per target.

    Usage::

        async with CheckRunner(config) as runner:
            outcomes = await runner.run()
    """

    def __init__(
        self,
        config: CheckConfig,
        *,
        checkers: Mapping[CheckKind, Checker] | None = None,
    ) -> None:
        self._config = config
        self._checkers: dict[CheckKind, Checker] = {**CHECKERS, **(checkers or {})}
        self._semaphore = (
            asyncio.Semaphore(config.max_concurrency)
            if config.max_concurrency is not None
            else None
        )
        self._abandoned: set[asyncio.Task[None]] = set()

    async def __aenter__(self) -> CheckRunner:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    @property
    def abandoned(self) -> frozenset[asyncio.Task[None]]:
        """Timed-out checks whose tasks have not finished unwinding yet."""
        return frozenset(self._abandoned)

    async def run(self) -> list[CheckOutcome]:
        """Execute all targets and return their outcomes in configuration order."""
        targets = self._config.targets
        results = await asyncio.gather(
            *(self._run_one(target) for target in targets),
            return_exceptions=True,
        )

        outcomes: list[CheckOutcome] = []
        for target, result in zip(targets, results, strict=True):
            if isinstance(result, BaseException):
                # _run_one converts every per-check error; this only trips on a runner fault
                logger.error("Runner fault while checking %s", target.name, exc_info=result)
                result = CheckOutcome(
                    name=target.name,
                    kind=target.kind,
                    status=CheckStatus.FAILURE,
                    detail=f"runner error: {type(result).__name__}: {result}",
                    duration=0.0,
                )
            outcomes.append(result)

        passed = sum(1 for outcome in outcomes if outcome.succeeded)
        logger.info("Health check run complete: %d/%d passed", passed, len(outcomes))
        return outcomes

    async def aclose(self, grace: float = ABANDON_GRACE_SECONDS) -> None:
        """Give abandoned checks up to ``grace`` seconds to release their resources."""
        if not self._abandoned:
            return
        _, still_running = await asyncio.wait(set(self._abandoned), timeout=grace)
        if still_running:
            logger.warning(
                "%d abandoned check(s) still unwinding after %.1fs: %s",
                len(still_running),
                grace,
                ", ".join(sorted(task.get_name() for task in still_running)),
            )

    # ------------------------------------------------------------------
    # Internal helpers
    # ------------------------------------------------------------------

    async def _run_one(self, target: CheckTarget) -> CheckOutcome:
        if self._semaphore is None:
            return await self._execute(target)
        # The deadline starts once the check actually runs, not while queued
        async with self._semaphore:
            return await self._execute(target)

    async def _execute(self, target: CheckTarget) -> CheckOutcome:
        timeout = self._config.timeout_for(target)
        checker = self._checkers[target.kind]
        started = time.perf_counter()

        task: asyncio.Task[None] = asyncio.create_task(
            checker(target, timeout),
            name=f"check:{target.name}",
        )
        try:
            done, _ = await asyncio.wait({task}, timeout=timeout)
        except asyncio.CancelledError:
            task.cancel()
            raise
        duration = time.perf_counter() - started

        if not done:
            self._abandon(task)
            return self._outcome(target, CheckStatus.TIMEOUT, deadline_detail(timeout), duration)

        if task.cancelled():
            return self._outcome(target, CheckStatus.FAILURE, "check was cancelled", duration)

        exc = task.exception()
        if exc is None:
            return self._outcome(target, CheckStatus.SUCCESS, "", duration)
        if isinstance(exc, CheckTimeoutError):
            return self._outcome(target, CheckStatus.TIMEOUT, str(exc), duration)
        if isinstance(exc, CheckError):
            return self._outcome(target, CheckStatus.FAILURE, str(exc), duration)

        logger.warning("Check %s raised unexpectedly", target.name, exc_info=exc)
        return self._outcome(
            target,
            CheckStatus.FAILURE,
            f"unexpected error: {type(exc).__name__}: {error_text(exc)}",
            duration,
        )

    def _abandon(self, task: asyncio.Task[None]) -> None:
        task.cancel()
        self._abandoned.add(task)
        task.add_done_callback(self._forget)

    def _forget(self, task: asyncio.Task[None]) -> None:
        self._abandoned.discard(task)
        if not task.cancelled() and task.exception() is not None:
            logger.debug(
                "Abandoned %s finished with %r", task.get_name(), task.exception()
            )

    @staticmethod
    def _outcome(
        target: CheckTarget,
        status: CheckStatus,
        detail: str,
        duration: float,
    ) -> CheckOutcome:
        if status == CheckStatus.SUCCESS:
            logger.debug("%s (%s): ok in %.3fs", target.name, target.kind, duration)
        else:
            logger.warning(
                "%s (%s): %s after %.3fs: %s", target.name, target.kind, status, duration, detail
            )
        return CheckOutcome(
            name=target.name,
            kind=target.kind,
            status=status,
            detail=detail,
            duration=duration,
        )


async def run_checks(
    config: CheckConfig,
    *,
    checkers: Mapping[CheckKind, Checker] | None = None,
) -> Verdict:
    """Run one full check pass for ``config`` and return its Verdict."""
    checked_at = datetime.datetime.now(datetime.UTC)
    async with CheckRunner(config, checkers=checkers) as runner:
        outcomes = await runner.run()
    return aggregate(config.targets, outcomes, checked_at=checked_at)

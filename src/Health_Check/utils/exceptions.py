"""Custom exception hierarchy for the health-check runner.

Per-target failures inherit from CheckError, which carries the name and kind
of the target that failed. They are always recovered inside the runner and
turned into a CheckOutcome. ConfigurationError is the only error allowed to
abort a run, and it is raised before any check executes.
"""

from __future__ import annotations

from collections.abc import Sequence

from pydantic import ValidationError


class CheckError(Exception):
    """Base exception for a single dependency verification failure.

    Attributes:
        target: Name of the check target involved in the failure.
        kind: Kind of dependency that failed (e.g., "postgres", "http").
    """

    def __init__(
        self,
        message: str,
        *,
        target: str,
        kind: str,
    ) -> None:
        self.target = target
        self.kind = kind
        super().__init__(message)


class CheckConnectionError(CheckError):
    """Raised on transport or authentication failure before any protocol exchange."""


class ProtocolError(CheckError):
    """Raised when connected but the minimal operation failed or returned the wrong thing."""


class StaleResourceError(CheckError):
    """Raised when a timestamp file is older than its allowed staleness."""


class CheckTimeoutError(CheckError):
    """Raised when a check produced no conclusive result within its deadline."""


class ConfigurationError(Exception):
    """Raised when the configuration cannot describe a runnable set of checks.

    Attributes:
        problems: One human-readable line per invalid setting.
    """

    def __init__(self, problems: Sequence[str]) -> None:
        self.problems = list(problems)
        super().__init__("invalid configuration: " + "; ".join(self.problems))

    @classmethod
    def from_validation_error(cls, exc: ValidationError) -> ConfigurationError:
        """Flatten a pydantic ValidationError into one problem line per error."""
        problems = [
            f"{'.'.join(str(part) for part in error['loc']) or 'config'}: {error['msg']}"
            for error in exc.errors()
        ]
        return cls(problems)

"""The Configuration Value: an immutable, validated description of one run."""

from __future__ import annotations

from collections import Counter
from collections.abc import Iterable
from typing import Any, Final

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from Health_Check.models.targets import CheckTarget
from Health_Check.utils.exceptions import ConfigurationError

DEFAULT_CHECK_TIMEOUT: Final[float] = 5.0


class CheckConfig(BaseModel):
    """Which checks to run, in which order, and under which deadlines.

    Produced by the configuration source (``Health_Check.settings``) or built
    directly in tests. Use ``CheckConfig.build`` to get ConfigurationError
    instead of a raw pydantic ValidationError.
    """

    model_config = ConfigDict(frozen=True)

    targets: tuple[CheckTarget, ...] = Field(min_length=1)
    default_timeout: float = Field(default=DEFAULT_CHECK_TIMEOUT, gt=0)
    max_concurrency: int | None = Field(default=None, ge=1)

    @field_validator("targets")
    @classmethod
    def _unique_names(cls, targets: tuple[CheckTarget, ...]) -> tuple[CheckTarget, ...]:
        counts = Counter(target.name for target in targets)
        duplicates = sorted(name for name, count in counts.items() if count > 1)
        if duplicates:
            raise ValueError(f"duplicate target names: {', '.join(duplicates)}")
        return targets

    @classmethod
    def build(cls, targets: Iterable[CheckTarget | dict[str, Any]], **kwargs: Any) -> CheckConfig:
        """Validate targets and options, raising ConfigurationError on any problem."""
        try:
            return cls(targets=tuple(targets), **kwargs)
        except ValidationError as exc:
            raise ConfigurationError.from_validation_error(exc) from exc

    def timeout_for(self, target: CheckTarget) -> float:
        """Effective deadline for a target: its own override, else the global default."""
        return target.timeout if target.timeout is not None else self.default_timeout

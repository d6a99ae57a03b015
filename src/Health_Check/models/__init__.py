"""Pydantic v2 models, enums, and type definitions.

Re-exports all public models so consumers can import directly:
    from Health_Check.models import CheckConfig, HttpEndpointTarget, Verdict
"""

from Health_Check.models.config import DEFAULT_CHECK_TIMEOUT, CheckConfig
from Health_Check.models.enums import (
    CheckKind,
    CheckStatus,
    OutputFormat,
    OverallHealth,
    TimestampSource,
)
from Health_Check.models.outcome import CheckOutcome, Verdict
from Health_Check.models.targets import (
    CheckTarget,
    FileTimestampTarget,
    HttpEndpointTarget,
    KeyValueStoreTarget,
    MessageBrokerTarget,
    RelationalDatabaseTarget,
    mask_credentials,
)

__all__ = [
    # Enums
    "CheckKind",
    "CheckStatus",
    "OutputFormat",
    "OverallHealth",
    "TimestampSource",
    # Targets
    "CheckTarget",
    "FileTimestampTarget",
    "HttpEndpointTarget",
    "KeyValueStoreTarget",
    "MessageBrokerTarget",
    "RelationalDatabaseTarget",
    "mask_credentials",
    # Configuration
    "DEFAULT_CHECK_TIMEOUT",
    "CheckConfig",
    # Outcomes
    "CheckOutcome",
    "Verdict",
]

"""StrEnum types for the health-check domain.

Values are lowercase strings. Use enum members in business logic, never raw strings.
"""

from enum import StrEnum


class CheckKind(StrEnum):
    """Kind of dependency a check target verifies."""

    FILE_TIMESTAMP = "timestamp"
    MESSAGE_BROKER = "amqp"
    RELATIONAL_DATABASE = "postgres"
    KEY_VALUE_STORE = "redis"
    HTTP_ENDPOINT = "http"


class CheckStatus(StrEnum):
    """How a single check attempt concluded."""

    SUCCESS = "success"
    FAILURE = "failure"
    TIMEOUT = "timeout"


class OverallHealth(StrEnum):
    """Aggregate verdict over every outcome of a run."""

    HEALTHY = "healthy"
    UNHEALTHY = "unhealthy"


class TimestampSource(StrEnum):
    """Where a FileTimestamp check reads the timestamp from."""

    MTIME = "mtime"
    CONTENT = "content"


class OutputFormat(StrEnum):
    """How the report is written to the output sink."""

    TABLE = "table"
    TEXT = "text"
    JSON = "json"

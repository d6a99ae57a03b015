"""Check target models: one frozen variant per dependency kind.

``CheckTarget`` is a closed tagged union discriminated on ``kind``. Adding a
new dependency kind means adding a variant here, a member to ``CheckKind``,
and a verification function to ``Health_Check.checks.CHECKERS``.
"""

from __future__ import annotations

from pathlib import Path
from typing import Annotated, Final, Literal
from urllib.parse import urlsplit, urlunsplit

from pydantic import BaseModel, ConfigDict, Field, field_validator

from Health_Check.models.enums import CheckKind, TimestampSource

MASKED_PASSWORD: Final[str] = "***"


def mask_credentials(url: str) -> str:
    """Replace the password component of a URL so it is safe to print."""
    parts = urlsplit(url)
    if parts.password is None:
        return url
    host = parts.hostname or ""
    if parts.port is not None:
        host = f"{host}:{parts.port}"
    netloc = f"{parts.username or ''}:{MASKED_PASSWORD}@{host}"
    return urlunsplit(parts._replace(netloc=netloc))


def _require_scheme(url: str, schemes: tuple[str, ...]) -> str:
    url = url.strip()
    if not url:
        raise ValueError("URL must not be empty")
    scheme = urlsplit(url).scheme.lower()
    if scheme not in schemes:
        raise ValueError(f"URL scheme must be one of {', '.join(schemes)}, got {scheme!r}")
    return url


class _TargetBase(BaseModel):
    """Fields shared by every check target."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    name: str = Field(min_length=1)
    # None means "use the configuration's default timeout"
    timeout: float | None = Field(default=None, gt=0)


class FileTimestampTarget(_TargetBase):
    """A file whose timestamp must be more recent than ``max_age`` seconds."""

    kind: Literal[CheckKind.FILE_TIMESTAMP] = CheckKind.FILE_TIMESTAMP
    path: Path
    max_age: float = Field(gt=0)
    source: TimestampSource = TimestampSource.MTIME

    @field_validator("path")
    @classmethod
    def _path_not_empty(cls, value: Path) -> Path:
        if str(value) in ("", "."):
            raise ValueError("path must not be empty")
        return value

    @property
    def endpoint(self) -> str:
        return str(self.path)


class MessageBrokerTarget(_TargetBase):
    """An AMQP broker reachable at ``url`` (credentials embedded in the URL)."""

    kind: Literal[CheckKind.MESSAGE_BROKER] = CheckKind.MESSAGE_BROKER
    url: str

    @field_validator("url")
    @classmethod
    def _amqp_scheme(cls, value: str) -> str:
        return _require_scheme(value, ("amqp", "amqps"))

    @property
    def endpoint(self) -> str:
        return mask_credentials(self.url)


class RelationalDatabaseTarget(_TargetBase):
    """A PostgreSQL database reachable at ``url``."""

    kind: Literal[CheckKind.RELATIONAL_DATABASE] = CheckKind.RELATIONAL_DATABASE
    url: str

    @field_validator("url")
    @classmethod
    def _postgres_scheme(cls, value: str) -> str:
        return _require_scheme(value, ("postgres", "postgresql"))

    @property
    def endpoint(self) -> str:
        return mask_credentials(self.url)


class KeyValueStoreTarget(_TargetBase):
    """A Redis server reachable at ``url``."""

    kind: Literal[CheckKind.KEY_VALUE_STORE] = CheckKind.KEY_VALUE_STORE
    url: str

    @field_validator("url")
    @classmethod
    def _redis_scheme(cls, value: str) -> str:
        return _require_scheme(value, ("redis", "rediss", "unix"))

    @property
    def endpoint(self) -> str:
        return mask_credentials(self.url)


class HttpEndpointTarget(_TargetBase):
    """An HTTP(S) URL that must answer a GET with status 200."""

    kind: Literal[CheckKind.HTTP_ENDPOINT] = CheckKind.HTTP_ENDPOINT
    url: str

    @field_validator("url")
    @classmethod
    def _http_scheme(cls, value: str) -> str:
        return _require_scheme(value, ("http", "https"))

    @property
    def endpoint(self) -> str:
        return mask_credentials(self.url)


CheckTarget = Annotated[
    FileTimestampTarget
    | MessageBrokerTarget
    | RelationalDatabaseTarget
    | KeyValueStoreTarget
    | HttpEndpointTarget,
    Field(discriminator="kind"),
]

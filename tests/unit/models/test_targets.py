"""Tests for check target models.

Covers:
- Each variant constructs with its kind tag set
- URL scheme validation per kind
- Frozen immutability and extra-field rejection
- Discriminated union parsing from plain dicts
- Credential masking in endpoints
"""

from pathlib import Path

import pytest
from pydantic import TypeAdapter, ValidationError

from Health_Check.models import (
    CheckKind,
    CheckTarget,
    FileTimestampTarget,
    HttpEndpointTarget,
    KeyValueStoreTarget,
    MessageBrokerTarget,
    RelationalDatabaseTarget,
    TimestampSource,
    mask_credentials,
)

_ADAPTER: TypeAdapter[CheckTarget] = TypeAdapter(CheckTarget)


class TestVariants:
    """Each variant carries its own kind tag."""

    def test_file_timestamp_defaults(self, tmp_path: Path) -> None:
        target = FileTimestampTarget(name="ts", path=tmp_path / "f", max_age=20.0)
        assert target.kind == CheckKind.FILE_TIMESTAMP
        assert target.source == TimestampSource.MTIME
        assert target.timeout is None

    def test_url_variants_have_kind(self) -> None:
        assert MessageBrokerTarget(name="a", url="amqp://h/").kind == CheckKind.MESSAGE_BROKER
        assert (
            RelationalDatabaseTarget(name="p", url="postgresql://h/db").kind
            == CheckKind.RELATIONAL_DATABASE
        )
        target = KeyValueStoreTarget(name="r", url="rediss://h:6380")
        assert target.kind == CheckKind.KEY_VALUE_STORE
        assert HttpEndpointTarget(name="h", url="https://h/").kind == CheckKind.HTTP_ENDPOINT

    def test_per_target_timeout_override(self) -> None:
        target = HttpEndpointTarget(name="h", url="http://h/", timeout=2.0)
        assert target.timeout == 2.0


class TestValidation:
    """Malformed targets are rejected at construction."""

    @pytest.mark.parametrize(
        ("model", "url"),
        [
            (MessageBrokerTarget, "http://broker/"),
            (RelationalDatabaseTarget, "mysql://db/"),
            (KeyValueStoreTarget, "memcached://cache/"),
            (HttpEndpointTarget, "ftp://files/"),
        ],
    )
    def test_wrong_scheme_rejected(self, model: type, url: str) -> None:
        with pytest.raises(ValidationError, match="URL scheme"):
            model(name="x", url=url)

    def test_empty_url_rejected(self) -> None:
        with pytest.raises(ValidationError, match="must not be empty"):
            HttpEndpointTarget(name="h", url="  ")

    def test_empty_name_rejected(self) -> None:
        with pytest.raises(ValidationError):
            HttpEndpointTarget(name="", url="http://h/")

    def test_non_positive_timeout_rejected(self) -> None:
        with pytest.raises(ValidationError):
            HttpEndpointTarget(name="h", url="http://h/", timeout=0)

    def test_non_positive_max_age_rejected(self, tmp_path: Path) -> None:
        with pytest.raises(ValidationError):
            FileTimestampTarget(name="ts", path=tmp_path / "f", max_age=-1)

    def test_extra_fields_forbidden(self) -> None:
        with pytest.raises(ValidationError):
            HttpEndpointTarget(name="h", url="http://h/", method="POST")  # type: ignore[call-arg]

    def test_frozen(self, http_target: HttpEndpointTarget) -> None:
        with pytest.raises(ValidationError, match="frozen"):
            http_target.url = "http://other/"  # type: ignore[misc]


class TestDiscriminatedUnion:
    """Plain dicts are dispatched to the variant named by ``kind``."""

    def test_dict_parses_to_matching_variant(self) -> None:
        target = _ADAPTER.validate_python(
            {"kind": CheckKind.KEY_VALUE_STORE, "name": "cache", "url": "redis://r:6379/1"}
        )
        assert isinstance(target, KeyValueStoreTarget)

    def test_variant_fields_enforced(self) -> None:
        with pytest.raises(ValidationError):
            _ADAPTER.validate_python({"kind": CheckKind.FILE_TIMESTAMP, "name": "ts"})


class TestMaskCredentials:
    """Passwords never appear in printable endpoints."""

    def test_password_masked(self) -> None:
        masked = mask_credentials("postgres://user:hunter2@db:5432/app")
        assert masked == "postgres://user:***@db:5432/app"

    def test_url_without_password_unchanged(self) -> None:
        assert mask_credentials("redis://redis:6379/0") == "redis://redis:6379/0"

    def test_endpoint_property_masks(self, postgres_target: RelationalDatabaseTarget) -> None:
        assert "secret" not in postgres_target.endpoint
        assert "***" in postgres_target.endpoint

    def test_file_endpoint_is_path(self, timestamp_target: FileTimestampTarget) -> None:
        assert timestamp_target.endpoint.endswith("health.all")

"""Pydantic models for hosting.de DNS API requests and responses."""

from enum import StrEnum
from typing import Any

from pydantic import BaseModel, Field, field_serializer, field_validator, model_validator
from pydantic_core import PydanticSerializationError

from hostingde._logging import REDACTED
from hostingde.exceptions import SerializationError

SUCCESS_STATUS = "success"

# =============================================================================
# Enums
# =============================================================================


class RecordType(StrEnum):
    """DNS record types managed by this library."""

    TXT = "TXT"


class MutationKind(StrEnum):
    """Whether a record mutation adds or deletes a record."""

    ADD = "add"
    DELETE = "delete"


# =============================================================================
# Request models
# =============================================================================


def _strip_trailing_dot(value: Any) -> Any:
    if isinstance(value, str) and value.endswith("."):
        return value[:-1]
    return value


class ZoneSelector(BaseModel):
    """Selects the DNS zone an update applies to (zoneConfig in requests)."""

    name: str = Field(min_length=1)

    model_config = {"frozen": True}

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_name(cls, value: Any) -> Any:
        return _strip_trailing_dot(value)


class RecordMutation(BaseModel):
    """A single requested record change.

    ``kind`` decides which list of an UpdateEnvelope the mutation belongs
    to and is not part of the wire format. Additions carry a TTL,
    deletions must not.
    """

    kind: MutationKind
    type: RecordType = RecordType.TXT
    name: str = Field(min_length=1)
    content: str
    ttl: int | None = Field(default=None, ge=0)

    model_config = {"frozen": True}

    @field_validator("name", mode="before")
    @classmethod
    def _normalize_name(cls, value: Any) -> Any:
        return _strip_trailing_dot(value)

    @model_validator(mode="after")
    def _check_ttl(self) -> "RecordMutation":
        if self.kind is MutationKind.ADD and self.ttl is None:
            raise ValueError("ttl is required for record additions")
        if self.kind is MutationKind.DELETE and self.ttl is not None:
            raise ValueError("ttl is not allowed for record deletions")
        return self

    @classmethod
    def add(cls, name: str, content: str, ttl: int) -> "RecordMutation":
        """Create a TXT record addition."""
        return cls(kind=MutationKind.ADD, name=name, content=content, ttl=ttl)

    @classmethod
    def delete(cls, name: str, content: str) -> "RecordMutation":
        """Create a TXT record deletion."""
        return cls(kind=MutationKind.DELETE, name=name, content=content)

    def to_payload(self) -> dict[str, Any]:
        """Return the wire representation of this mutation."""
        payload: dict[str, Any] = {
            "name": self.name,
            "type": self.type.value,
            "content": self.content,
        }
        if self.kind is MutationKind.ADD:
            payload["ttl"] = self.ttl
        return payload


class UpdateEnvelope(BaseModel):
    """Body of a zoneUpdate request."""

    auth_token: str = Field(alias="authToken")
    zone_config: ZoneSelector = Field(alias="zoneConfig")
    records_to_add: tuple[RecordMutation, ...] = Field(default=(), alias="recordsToAdd")
    records_to_delete: tuple[RecordMutation, ...] = Field(default=(), alias="recordsToDelete")

    model_config = {"populate_by_name": True, "frozen": True}

    @model_validator(mode="after")
    def _check_kinds(self) -> "UpdateEnvelope":
        if any(m.kind is not MutationKind.ADD for m in self.records_to_add):
            raise ValueError("recordsToAdd may only contain additions")
        if any(m.kind is not MutationKind.DELETE for m in self.records_to_delete):
            raise ValueError("recordsToDelete may only contain deletions")
        return self

    @field_serializer("records_to_add", "records_to_delete")
    def _serialize_records(self, records: tuple[RecordMutation, ...]) -> list[dict[str, Any]]:
        return [record.to_payload() for record in records]

    def to_payload(self, redact_token: bool = False) -> dict[str, Any]:
        """Return the request body as a dict.

        Args:
            redact_token: Replace the auth token with a placeholder (for logging).
        """
        payload = self.model_dump(mode="json", by_alias=True)
        if redact_token:
            payload["authToken"] = REDACTED
        return payload

    def to_json(self) -> bytes:
        """Serialize the envelope to a JSON request body.

        Raises:
            SerializationError: If the envelope cannot be encoded.
        """
        try:
            return self.model_dump_json(by_alias=True).encode()
        except (PydanticSerializationError, UnicodeEncodeError) as exc:
            raise SerializationError(f"Could not encode zone update request: {exc}") from exc


# =============================================================================
# Response models
# =============================================================================


class ZoneRecord(BaseModel):
    """A record echoed back by hosting.de after a zone update."""

    id: str | None = None
    name: str | None = None
    type: str | None = None
    content: str | None = None
    ttl: int | None = None
    priority: int | str | None = None
    last_change_date: str | None = Field(default=None, alias="lastChangeDate")
    record_template_id: str | None = Field(default=None, alias="recordTemplateId")
    zone_config_id: str | None = Field(default=None, alias="zoneConfigId")

    model_config = {"populate_by_name": True}


class ZoneConfig(BaseModel):
    """Partial view of a hosting.de zone configuration."""

    id: str | None = None
    name: str | None = None
    name_unicode: str | None = Field(default=None, alias="nameUnicode")
    account_id: str | None = Field(default=None, alias="accountId")
    email_address: str | None = Field(default=None, alias="emailAddress")
    master_ip: str | None = Field(default=None, alias="masterIp")
    last_change_date: str | None = Field(default=None, alias="lastChangeDate")
    status: str | None = None
    type: str | None = None
    soa_values: dict[str, Any] | None = Field(default=None, alias="soaValues")
    template_values: Any = Field(default=None, alias="templateValues")
    zone_transfer_whitelist: list[str] | None = Field(default=None, alias="zoneTransferWhitelist")

    model_config = {"populate_by_name": True, "extra": "allow"}


class ZoneUpdateResult(BaseModel):
    """The ``response`` object of a zoneUpdate reply."""

    records: list[ZoneRecord] | None = None
    zone_config: ZoneConfig | None = Field(default=None, alias="zoneConfig")

    model_config = {"populate_by_name": True}


class UpdateOutcome(BaseModel):
    """Decoded zoneUpdate reply.

    Only ``status`` decides success. ``errors``, ``warnings`` and
    ``metadata`` are kept as opaque JSON values.
    """

    status: str
    response: ZoneUpdateResult | None = None
    errors: Any = None
    warnings: Any = None
    metadata: Any = None
    raw_body: str | None = Field(default=None, exclude=True)

    @property
    def succeeded(self) -> bool:
        """True if hosting.de reported exactly ``success``."""
        return self.status == SUCCESS_STATUS

    @property
    def records(self) -> list[ZoneRecord]:
        """Records echoed in the response (empty if none)."""
        if self.response is None or self.response.records is None:
            return []
        return self.response.records

    def find_record(self, name: str, content: str) -> ZoneRecord | None:
        """Find an echoed record by name and content.

        Names are compared without a trailing dot.
        """
        wanted = _strip_trailing_dot(name)
        for record in self.records:
            if record.content == content and _strip_trailing_dot(record.name) == wanted:
                return record
        return None

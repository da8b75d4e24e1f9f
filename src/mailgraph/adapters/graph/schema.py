"""Pydantic models describing the Graph API mail payloads."""

from __future__ import annotations

from collections.abc import Mapping
from datetime import datetime  # noqa: TC003
from typing import cast

from pydantic import BaseModel, ConfigDict, Field, field_validator, model_validator


def _blank_to_none(value: object) -> object:
    if isinstance(value, str):
        stripped = value.strip()
        return stripped or None
    return value


class GraphBaseModel(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)


class EmailAddressPayload(GraphBaseModel):
    address: str | None = None
    name: str | None = None

    _normalize = field_validator("address", "name", mode="before")(_blank_to_none)


class RecipientPayload(GraphBaseModel):
    email_address: EmailAddressPayload = Field(
        default_factory=EmailAddressPayload, alias="emailAddress"
    )

    @model_validator(mode="before")
    @classmethod
    def _null_email_address(cls, value: object) -> object:
        if isinstance(value, Mapping):
            data = dict(cast(Mapping[str, object], value))
            if data.get("emailAddress") is None:
                data.pop("emailAddress", None)
            return data
        return value


class GraphMessage(GraphBaseModel):
    id: str
    conversation_id: str = Field(alias="conversationId")
    subject: str | None = None
    received_date_time: datetime | None = Field(default=None, alias="receivedDateTime")
    sent_date_time: datetime | None = Field(default=None, alias="sentDateTime")
    has_attachments: bool = Field(default=False, alias="hasAttachments")
    importance: str | None = None
    is_read: bool | None = Field(default=None, alias="isRead")
    web_link: str | None = Field(default=None, alias="webLink")
    sender: RecipientPayload | None = Field(default=None, alias="from")
    to_recipients: list[RecipientPayload] = Field(default_factory=list, alias="toRecipients")
    cc_recipients: list[RecipientPayload] = Field(default_factory=list, alias="ccRecipients")

    _normalize_subject = field_validator("subject", mode="before")(_blank_to_none)

    @field_validator("id", "conversation_id")
    @classmethod
    def _require_identifier(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("identifier must not be blank")
        return value

    @field_validator("to_recipients", "cc_recipients", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return [] if value is None else value

    @field_validator("has_attachments", mode="before")
    @classmethod
    def _null_to_false(cls, value: object) -> object:
        return False if value is None else value


class GraphAttachment(GraphBaseModel):
    id: str
    name: str | None = None
    content_type: str | None = Field(default=None, alias="contentType")
    size: int | None = None
    is_inline: bool | None = Field(default=None, alias="isInline")
    last_modified_date_time: datetime | None = Field(default=None, alias="lastModifiedDateTime")

    _normalize_name = field_validator("name", mode="before")(_blank_to_none)


class GraphPage(GraphBaseModel):
    """One page of a Graph collection response."""

    value: list[dict[str, object]] = Field(default_factory=list)
    next_link: str | None = Field(default=None, alias="@odata.nextLink")


class GraphErrorDetail(GraphBaseModel):
    code: str | None = None
    message: str | None = None


class GraphErrorResponse(GraphBaseModel):
    error: GraphErrorDetail


class TokenResponse(GraphBaseModel):
    access_token: str
    token_type: str | None = None
    expires_in: int | None = None


class TokenClaims(GraphBaseModel):
    roles: list[str] = Field(default_factory=list)

    @field_validator("roles", mode="before")
    @classmethod
    def _null_to_empty(cls, value: object) -> object:
        return [] if value is None else value


MessagePayloadInput = GraphMessage | Mapping[str, object]
AttachmentPayloadInput = GraphAttachment | Mapping[str, object]

"""Public interface for the Microsoft Graph adapter."""

from __future__ import annotations

from .auth import GraphTokenProvider, roles_from_access_token
from .client import DIRECTORY_READ_ALL, MAIL_READ, GraphClient
from .errors import (
    ApiError,
    AuthenticationError,
    AuthorizationError,
    GraphClientError,
    TransportError,
    ValidationError,
)
from .schema import GraphAttachment, GraphMessage, GraphPage, RecipientPayload
from .source import GraphMailSource
from .translator import parse_attachment, parse_message

__all__ = [
    "DIRECTORY_READ_ALL",
    "MAIL_READ",
    "ApiError",
    "AuthenticationError",
    "AuthorizationError",
    "GraphAttachment",
    "GraphClient",
    "GraphClientError",
    "GraphMailSource",
    "GraphMessage",
    "GraphPage",
    "GraphTokenProvider",
    "RecipientPayload",
    "TransportError",
    "ValidationError",
    "parse_attachment",
    "parse_message",
    "roles_from_access_token",
]

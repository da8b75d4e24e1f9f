"""Error taxonomy surfaced by the Graph client."""

from __future__ import annotations


class GraphClientError(RuntimeError):
    """Base class for failures surfaced by the Graph client."""

    def __init__(self, message: str, *, endpoint: str | None = None) -> None:
        super().__init__(message)
        self.endpoint = endpoint


class AuthenticationError(GraphClientError):
    """The identity provider rejected the configured credentials."""


class AuthorizationError(GraphClientError):
    """The credential lacks the scope or permission an endpoint requires."""

    def __init__(
        self,
        message: str,
        *,
        endpoint: str | None = None,
        status: int | str | None = None,
        required: tuple[str, ...] = (),
    ) -> None:
        super().__init__(message, endpoint=endpoint)
        self.status = status
        self.required = required


class TransportError(GraphClientError):
    """The request never produced an HTTP response."""


class ApiError(GraphClientError):
    """The Graph API answered with an error status after all attempts."""

    def __init__(self, message: str, *, status: int, endpoint: str | None = None) -> None:
        super().__init__(message, endpoint=endpoint)
        self.status = status


class ValidationError(GraphClientError):
    """A pre-flight check on the credential failed."""

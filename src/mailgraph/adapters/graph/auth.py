"""Client-credentials token acquisition for the Graph API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx
import jwt
from pydantic import ValidationError as PayloadValidationError

from .errors import AuthenticationError, TransportError
from .schema import TokenClaims, TokenResponse

if TYPE_CHECKING:
    from mailgraph.adapters.http_resilience import ResilientClient
    from mailgraph.config.graph import GraphConfig

log = getLogger(__name__)


class GraphTokenProvider:
    """Owns the cached bearer token for one Graph client.

    The token is fetched lazily and kept until the caller observes an
    authentication failure and asks for a refresh. Expiry timestamps are not
    tracked.
    """

    def __init__(self, config: GraphConfig) -> None:
        self._config = config
        self._access_token: str | None = None
        self.acquisitions = 0

    @property
    def cached_token(self) -> str | None:
        return self._access_token

    async def get_access_token(self, client: ResilientClient) -> str:
        if self._access_token is None:
            self._access_token = await self._authenticate(client)
        return self._access_token

    async def refresh_access_token(self, client: ResilientClient) -> str:
        self._access_token = None
        self._access_token = await self._authenticate(client)
        return self._access_token

    def invalidate(self) -> None:
        self._access_token = None

    async def _authenticate(self, client: ResilientClient) -> str:
        log.debug(f"Requesting Graph access token for directory {self._config.directory_id}")
        try:
            response = await client.post(
                self._config.token_url,
                data={
                    "grant_type": "client_credentials",
                    "client_id": self._config.client_id,
                    "client_secret": self._config.client_secret,
                    "scope": self._config.scope,
                },
            )
        except httpx.TransportError as exc:
            raise TransportError(
                f"Could not reach identity provider: {exc}", endpoint=self._config.token_url
            ) from exc

        if response.is_error:
            raise AuthenticationError(
                f"Identity provider rejected credentials ({response.status_code}): "
                f"{_error_description(response)}",
                endpoint=self._config.token_url,
            )

        try:
            token = TokenResponse.model_validate(response.json())
        except (ValueError, PayloadValidationError) as exc:
            raise AuthenticationError(
                "Identity provider returned an unreadable token response",
                endpoint=self._config.token_url,
            ) from exc

        self.acquisitions += 1
        return token.access_token


def roles_from_access_token(access_token: str | None) -> list[str]:
    """Return the ``roles`` claim of a JWT, or an empty list if it cannot be read.

    The signature is not verified.
    """

    if not access_token:
        return []
    try:
        claims = jwt.decode(access_token, options={"verify_signature": False})
    except jwt.DecodeError:
        log.debug("Access token is not a readable JWT")
        return []
    try:
        return TokenClaims.model_validate(claims).roles
    except PayloadValidationError:
        return []


def _error_description(response: httpx.Response) -> str:
    try:
        payload = response.json()
    except ValueError:
        return response.text or response.reason_phrase
    if isinstance(payload, dict):
        description = payload.get("error_description") or payload.get("error")
        if description:
            return str(description)
    return response.reason_phrase

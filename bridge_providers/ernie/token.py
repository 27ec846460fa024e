"""ERNIE access-token fetcher (OAuth client credentials).

``GET https://aip.baidubce.com/oauth/2.0/token`` with ``grant_type``,
``client_id`` (API key) and ``client_secret`` (secret key). The token is
cached in the instance's :class:`TokenCell`; ``expires_in`` is honoured
when the server sends it.
"""
from __future__ import annotations

import logging
import time
from typing import TYPE_CHECKING, Optional

import httpx
from pydantic import ValidationError

from ..base.credentials import CachedToken, Clock
from ..base.errors import CredentialFetchError
from ..base.logging import log_event
from ..base.transport import decode_body, open_http_client
from ..config.defaults import ERNIE_ACCESS_TOKEN_URL
from .wire import TokenResponse

if TYPE_CHECKING:
    from ..config.provider_config import ExtraConfig

PROVIDER = "ernie"


async def fetch_access_token(
    api_key: str,
    secret_key: str,
    *,
    extra: Optional["ExtraConfig"] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    logger: Optional[logging.Logger] = None,
    clock: Clock = time.time,
) -> CachedToken:
    """Exchange the API key pair for an access token.

    Raises:
        CredentialFetchError: on transport failure or when the response
            carries no ``access_token`` (message from ``error_description``).
    """
    params = {"grant_type": "client_credentials", "client_id": api_key, "client_secret": secret_key}
    try:
        async with open_http_client(extra, transport) as client:
            response = await client.get(ERNIE_ACCESS_TOKEN_URL, params=params)
    except httpx.HTTPError as e:
        raise CredentialFetchError(
            f"Failed to fetch access token: {type(e).__name__}: {e}", provider=PROVIDER, raw=e
        ) from e
    data = decode_body(response.content)
    try:
        token = TokenResponse.model_validate(data)
    except ValidationError:
        token = TokenResponse()
    if not token.access_token:
        raise CredentialFetchError(
            f"Failed to fetch access token: {token.error_description or 'Invalid response data'}",
            provider=PROVIDER,
            status=response.status_code,
            raw=data,
        )
    if logger is not None:
        log_event(logger, "credential.fetch", provider=PROVIDER, expires_in=token.expires_in)
    return CachedToken.from_expires_in(token.access_token, token.expires_in, clock=clock)


__all__ = ["fetch_access_token"]

"""Vertex AI access tokens from Application Default Credentials.

The ADC file written by ``gcloud auth application-default login`` holds a
``client_id``, ``client_secret`` and ``refresh_token``. They are exchanged at
``https://oauth2.googleapis.com/token`` (``grant_type=refresh_token``) for a
bearer token and its lifetime. The file is only read, never written.
"""
from __future__ import annotations

import asyncio
import json
import logging
import os
import time
from pathlib import Path
from typing import TYPE_CHECKING, Dict, Optional

import httpx
from pydantic import ValidationError

from ..base.credentials import CachedToken, Clock
from ..base.errors import CredentialFetchError
from ..base.logging import log_event
from ..base.transport import decode_body, open_http_client
from ..config.defaults import VERTEXAI_ADC_FILENAME, VERTEXAI_TOKEN_URL
from .wire import TokenResponse

if TYPE_CHECKING:
    from ..config.provider_config import ExtraConfig

PROVIDER = "vertexai"
_ADC_FIELDS = ("client_id", "client_secret", "refresh_token")


def default_adc_file() -> Optional[Path]:
    """Platform default ADC location, or ``None`` when it cannot be derived."""
    if os.name == "nt":
        appdata = os.environ.get("APPDATA")
        return Path(appdata, "gcloud", VERTEXAI_ADC_FILENAME) if appdata else None
    try:
        home = Path.home()
    except RuntimeError:
        return None
    return home / ".config" / "gcloud" / VERTEXAI_ADC_FILENAME


async def load_adc(adc_file: Optional[str] = None) -> Dict[str, str]:
    """Read the ADC file and return the refresh-token grant payload."""
    path = Path(adc_file).expanduser() if adc_file else default_adc_file()
    if path is None:
        raise CredentialFetchError(f"No {VERTEXAI_ADC_FILENAME}", provider=PROVIDER)
    try:
        text = await asyncio.to_thread(path.read_text, encoding="utf-8")
        data = json.loads(text)
    except (OSError, ValueError) as e:
        raise CredentialFetchError(f"Failed to load {path}: {e}", provider=PROVIDER, raw=e) from e
    if not isinstance(data, dict) or not all(isinstance(data.get(k), str) for k in _ADC_FIELDS):
        raise CredentialFetchError(f"Invalid {VERTEXAI_ADC_FILENAME}", provider=PROVIDER)
    grant = {k: data[k] for k in _ADC_FIELDS}
    grant["grant_type"] = "refresh_token"
    return grant


async def fetch_access_token(
    adc_file: Optional[str] = None,
    *,
    extra: Optional["ExtraConfig"] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
    logger: Optional[logging.Logger] = None,
    clock: Clock = time.time,
) -> CachedToken:
    """Exchange the ADC refresh token for a bearer token.

    Raises:
        CredentialFetchError: unreadable ADC file, transport failure, or a
            response lacking ``access_token`` / ``expires_in``.
    """
    grant = await load_adc(adc_file)
    try:
        async with open_http_client(extra, transport) as client:
            response = await client.post(VERTEXAI_TOKEN_URL, json=grant)
    except httpx.HTTPError as e:
        raise CredentialFetchError(
            f"Failed to fetch access token: {type(e).__name__}: {e}", provider=PROVIDER, raw=e
        ) from e
    data = decode_body(response.content)
    try:
        token = TokenResponse.model_validate(data)
    except ValidationError:
        token = TokenResponse()
    if not token.access_token or token.expires_in is None:
        raise CredentialFetchError(
            f"Failed to fetch access token: {token.error_description or 'Invalid response data'}",
            provider=PROVIDER,
            status=response.status_code,
            raw=data,
        )
    if logger is not None:
        log_event(logger, "credential.fetch", provider=PROVIDER, expires_in=token.expires_in)
    return CachedToken.from_expires_in(token.access_token, token.expires_in, clock=clock)


__all__ = ["default_adc_file", "load_adc", "fetch_access_token"]

"""HTTP client construction for provider calls.

A fresh ``httpx.AsyncClient`` is opened per call (``async with``) so no
connection state is shared between concurrent requests. ``ExtraConfig``
supplies the proxy and the connect timeout; reads are unbounded because a
stream may legitimately stay open for minutes. Tests inject an
``httpx.MockTransport`` via ``transport``.
"""
from __future__ import annotations

from typing import TYPE_CHECKING, Any, Dict, Optional

import httpx

if TYPE_CHECKING:
    from ...config.provider_config import ExtraConfig


def http_timeout(extra: Optional["ExtraConfig"]) -> httpx.Timeout:
    connect = extra.connect_timeout if extra else None
    return httpx.Timeout(None, connect=connect)


def open_http_client(
    extra: Optional["ExtraConfig"] = None,
    transport: Optional[httpx.AsyncBaseTransport] = None,
) -> httpx.AsyncClient:
    """Return an unopened ``httpx.AsyncClient`` honouring ``extra``.

    A proxy is ignored when ``transport`` is given; the transport decides
    where requests go.
    """
    kwargs: Dict[str, Any] = {"timeout": http_timeout(extra)}
    if transport is not None:
        kwargs["transport"] = transport
    elif extra and extra.proxy:
        kwargs["proxy"] = extra.proxy
    return httpx.AsyncClient(**kwargs)


__all__ = ["open_http_client", "http_timeout"]

"""Prepared outbound request.

Adapters produce a :class:`PreparedRequest`; the shared consumers execute it.
``log_url`` and ``log_headers`` mask credentials so the request can be
logged at DEBUG.
"""
from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Any, Dict, Optional

_SECRET_QUERY = re.compile(r"((?:access_token|key|client_secret)=)[^&]+")
_SECRET_HEADERS = frozenset({"authorization", "x-api-key", "x-goog-api-key"})
REDACTED = "***"


@dataclass(frozen=True)
class PreparedRequest:
    """Method, URL, headers and JSON body of one provider call."""

    url: str
    json: Optional[Dict[str, Any]] = None
    headers: Dict[str, str] = field(default_factory=dict)
    method: str = "POST"

    def log_url(self) -> str:
        return _SECRET_QUERY.sub(lambda m: m.group(1) + REDACTED, self.url)

    def log_headers(self) -> Dict[str, str]:
        return {k: (REDACTED if k.lower() in _SECRET_HEADERS else v) for k, v in self.headers.items()}


__all__ = ["PreparedRequest", "REDACTED"]

"""HTTP transport shared by the provider adapters."""

from .client import http_timeout, open_http_client
from .consumers import ErrorClassifier, decode_body, media_type, open_stream, send_json
from .request import REDACTED, PreparedRequest

__all__ = [
    "PreparedRequest",
    "REDACTED",
    "open_http_client",
    "http_timeout",
    "ErrorClassifier",
    "decode_body",
    "media_type",
    "send_json",
    "open_stream",
]

"""Access-token caching shared by providers that mint short-lived tokens."""

from .cached_token import CachedToken, Clock
from .token_cell import Fetcher, TokenCell
from .registry import reset_token_cells, token_cell

__all__ = [
    "CachedToken",
    "Clock",
    "Fetcher",
    "TokenCell",
    "token_cell",
    "reset_token_cells",
]

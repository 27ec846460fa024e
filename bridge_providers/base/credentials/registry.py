"""Process-wide registry of token cells keyed by provider instance."""
from __future__ import annotations

import threading
from typing import Dict

from .token_cell import TokenCell

_CELLS: Dict[str, TokenCell] = {}
_CELLS_LOCK = threading.Lock()


def token_cell(key: str) -> TokenCell:
    """Return the cell for ``key``, creating it on first use.

    Keys are ``"<provider>:<client name>"`` so clients sharing a configuration
    name share one token.
    """
    with _CELLS_LOCK:
        cell = _CELLS.get(key)
        if cell is None:
            cell = TokenCell(key)
            _CELLS[key] = cell
        return cell


def reset_token_cells() -> None:
    """Drop every cell (tests and credential rotation)."""
    with _CELLS_LOCK:
        _CELLS.clear()


__all__ = ["token_cell", "reset_token_cells"]

"""Provider interfaces facade.

Re-exports the protocols defined in ``interfaces_parts`` so callers import
from a single stable location.
"""

from .interfaces_parts import ChatClient, ReplySink

__all__ = ["ChatClient", "ReplySink"]

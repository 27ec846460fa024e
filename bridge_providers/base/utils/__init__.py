"""Shared helpers for provider adapters."""

from .messages import (
    SYSTEM_SEPARATOR,
    extract_system_message,
    network_image_urls,
    patch_system_message,
    system_image_urls,
)

__all__ = [
    "SYSTEM_SEPARATOR",
    "extract_system_message",
    "patch_system_message",
    "system_image_urls",
    "network_image_urls",
]

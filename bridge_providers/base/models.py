"""
Provider-agnostic domain models (DTOs) public surface.

This module re-exports the one-class-per-file implementations under
``bridge_providers.base.models_parts`` to keep a stable import path.
"""

from .models_parts.content_part import ContentPart, ContentPartType, ImagePart, TextPart, split_data_url
from .models_parts.message import Message, Role, ROLES
from .models_parts.send_data import SendData
from .models_parts.model import Model, parse_capabilities, CAPABILITY_TEXT, CAPABILITY_VISION

__all__ = [
    "ContentPart",
    "ContentPartType",
    "TextPart",
    "ImagePart",
    "split_data_url",
    "Message",
    "Role",
    "ROLES",
    "SendData",
    "Model",
    "parse_capabilities",
    "CAPABILITY_TEXT",
    "CAPABILITY_VISION",
]

"""Provider-agnostic DTO implementations (one concern per file)."""

from .content_part import ContentPart, ContentPartType, ImagePart, TextPart, split_data_url
from .message import Message, Role, ROLES
from .send_data import SendData
from .model import Model, parse_capabilities, CAPABILITY_TEXT, CAPABILITY_VISION

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

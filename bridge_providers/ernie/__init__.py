"""ERNIE (Baidu Qianfan) provider package."""

from .client import ErnieClient
from .models import ERNIE_MODELS, list_models

__all__ = ["ErnieClient", "ERNIE_MODELS", "list_models"]

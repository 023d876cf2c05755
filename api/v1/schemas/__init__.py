"""Re-export individual schema modules for easy imports."""

from .user import UserIn, UserOut, UserPrefsIn
from .advice import ChatRequest, ChatResponse, RecommendationsOut
from .meta import ConfigOut

__all__ = [
    "UserIn",
    "UserOut",
    "UserPrefsIn",
    "ChatRequest",
    "ChatResponse",
    "RecommendationsOut",
    "ConfigOut",
]

"""
Provider gateway data models.
"""

from .request import (
    Message,
    RequestOptions,
    coerce_messages,
    coerce_options,
    to_chat_messages,
    split_system,
    flatten_prompt,
)
from .response import NormalizedResponse, Usage

__all__ = [
    "Message",
    "RequestOptions",
    "coerce_messages",
    "coerce_options",
    "to_chat_messages",
    "split_system",
    "flatten_prompt",
    "NormalizedResponse",
    "Usage",
]

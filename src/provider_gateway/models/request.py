"""
Provider-agnostic request models.
"""

from typing import Any, Dict, List, Literal, Optional, Sequence, Tuple, Union
from pydantic import BaseModel, Field


class Message(BaseModel):
    """A single role-tagged conversation turn."""
    role: Literal["system", "user", "assistant"]
    content: str

    class Config:
        frozen = True


class RequestOptions(BaseModel):
    """
    Optional generation parameters.

    Every field may be omitted; adapters fill in their own defaults.
    """
    provider: Optional[str] = None
    model: Optional[str] = None
    temperature: Optional[float] = Field(default=None, ge=0, le=2)
    max_tokens: Optional[int] = Field(default=None, ge=1)

    class Config:
        frozen = True


MessageLike = Union[Message, Dict[str, Any]]


def coerce_messages(messages: Sequence[MessageLike]) -> List[Message]:
    """Accept Message instances or plain dicts, preserving order."""
    return [m if isinstance(m, Message) else Message(**m) for m in messages]


def coerce_options(options: Union[RequestOptions, Dict[str, Any], None]) -> RequestOptions:
    """Accept RequestOptions, a plain dict (``maxTokens`` allowed) or None."""
    if options is None:
        return RequestOptions()
    if isinstance(options, RequestOptions):
        return options
    data = dict(options)
    if "maxTokens" in data:
        data["max_tokens"] = data.pop("maxTokens")
    return RequestOptions(**data)


def to_chat_messages(messages: Sequence[Message]) -> List[Dict[str, str]]:
    """Pass-through shape used by OpenAI-style chat endpoints."""
    return [{"role": m.role, "content": m.content} for m in messages]


def split_system(messages: Sequence[Message]) -> Tuple[Optional[str], List[Dict[str, str]]]:
    """
    Separate system turns from the rest of the conversation.

    Returns the system text (multiple system turns joined by newlines,
    None when there are none) and the remaining turns in order.
    """
    system_parts = [m.content for m in messages if m.role == "system"]
    rest = [
        {"role": m.role, "content": m.content}
        for m in messages
        if m.role != "system"
    ]
    system = "\n".join(system_parts) if system_parts else None
    return system, rest


def flatten_prompt(messages: Sequence[Message], with_roles: bool = False) -> str:
    """Collapse the conversation into one prompt string."""
    if with_roles:
        return "\n".join(f"{m.role}: {m.content}" for m in messages)
    return "\n".join(m.content for m in messages)

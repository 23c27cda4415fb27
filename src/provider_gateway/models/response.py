"""
Normalized response model returned to every caller.
"""

from typing import Optional
from pydantic import BaseModel


class Usage(BaseModel):
    """Token usage information."""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0


class NormalizedResponse(BaseModel):
    """
    The only response shape callers see, whichever backend served it.

    ``model`` and ``usage`` are None when the backend does not report them.
    """
    completion: str = ""
    model: Optional[str] = None
    usage: Optional[Usage] = None
    provider: Optional[str] = None

"""
Pydantic schemas for spell-check functionality.
"""
from datetime import datetime
from typing import List, Optional

from pydantic import BaseModel, Field

from spellcheck_service.services.spellcheck_base import WorkerState


class SuggestionRequest(BaseModel):
    """A batch of words to check, typically the tokens of one line."""

    words: List[str] = Field(description="Tokens needing checking, in input order")
    request_id: Optional[int] = Field(
        default=None,
        description="Correlation id assigned by the client adapter",
    )


class SuggestionResponse(BaseModel):
    """Suggested corrections for a SuggestionRequest."""

    suggestions: List[str] = Field(
        default_factory=list,
        description="Corrections ordered by distance per word, flattened in input order",
    )
    request_id: Optional[int] = Field(
        default=None,
        description="Correlation id of the request this answers",
    )


class CheckLineRequest(BaseModel):
    """One line of user text to check."""

    line: str = Field(description="Line of text; tokens are split on whitespace")


class EnableSpellcheckRequest(BaseModel):
    """Request to turn spellchecking on."""

    dictionary_path: Optional[str] = Field(
        default=None,
        description="Dictionary to load (defaults to SPELLCHECK_DICTIONARY_PATH)",
    )


class SpellcheckStatusResponse(BaseModel):
    """Current state of the spell-check worker."""

    state: WorkerState
    enabled: bool
    dictionary_path: Optional[str] = None
    word_count: int = 0
    max_suggestions: int


class HealthResponse(BaseModel):
    """Schema for health check endpoint response."""
    status: str
    spellcheck: WorkerState
    timestamp: datetime

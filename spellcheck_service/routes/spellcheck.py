"""
API routes for turning spellchecking on and off and requesting suggestions.
"""
from fastapi import APIRouter, Depends, HTTPException, status

from spellcheck_service.config import settings
from spellcheck_service.schemas.spellcheck import (
    CheckLineRequest,
    EnableSpellcheckRequest,
    SpellcheckStatusResponse,
    SuggestionRequest,
    SuggestionResponse,
)
from spellcheck_service.services.spellcheck import SpellcheckClient, get_spellcheck_client
from spellcheck_service.utils.logger import get_logger

logger = get_logger("routes.spellcheck")

router = APIRouter(prefix="/api/v1/spellcheck", tags=["Spellcheck"])


def _status(client: SpellcheckClient) -> SpellcheckStatusResponse:
    return SpellcheckStatusResponse(
        state=client.state,
        enabled=client.enabled,
        dictionary_path=client.dictionary_path,
        word_count=client.word_count,
        max_suggestions=client.max_suggestions,
    )


@router.get("/status", response_model=SpellcheckStatusResponse)
async def get_status(
    client: SpellcheckClient = Depends(get_spellcheck_client),
) -> SpellcheckStatusResponse:
    """Get the current spell-check worker state."""
    return _status(client)


@router.post(
    "/enable",
    response_model=SpellcheckStatusResponse,
    responses={503: {"description": "No dictionary could be loaded"}},
)
async def enable_spellcheck(
    body: EnableSpellcheckRequest,
    client: SpellcheckClient = Depends(get_spellcheck_client),
) -> SpellcheckStatusResponse:
    """
    Turn spellchecking on.

    Starts the worker with the given dictionary, falling back to the
    configured default if it does not exist. Calling this while spellchecking
    is already on leaves the running worker untouched.
    """
    if not await client.enable(body.dictionary_path):
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail={
                "message": "No dictionary could be loaded, spellchecking is disabled",
                "state": client.state.value,
            }
        )
    return _status(client)


@router.post("/disable", response_model=SpellcheckStatusResponse)
async def disable_spellcheck(
    client: SpellcheckClient = Depends(get_spellcheck_client),
) -> SpellcheckStatusResponse:
    """Turn spellchecking off."""
    await client.disable()
    return _status(client)


@router.post("/suggestions", response_model=SuggestionResponse)
async def get_suggestions(
    body: SuggestionRequest,
    client: SpellcheckClient = Depends(get_spellcheck_client),
) -> SuggestionResponse:
    """
    Get corrections for a batch of words.

    Returns an empty suggestion list when spellchecking is off.
    """
    return await client.check_words(body.words)


@router.post("/lines", response_model=SuggestionResponse)
async def check_line(
    body: CheckLineRequest,
    client: SpellcheckClient = Depends(get_spellcheck_client),
) -> SuggestionResponse:
    """
    Get corrections for one line of text.

    Lines shorter than SPELLCHECK_MIN_LINE_LENGTH are not checked. Longer
    lines are split on whitespace and checked word by word.
    """
    if len(body.line) < settings.SPELLCHECK_MIN_LINE_LENGTH:
        logger.debug("Line too short to check", length=len(body.line))
        return SuggestionResponse()

    return await client.check_words(body.line.split())

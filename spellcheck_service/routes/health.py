"""
Health check endpoint for monitoring.
"""
from datetime import datetime, timezone
from fastapi import APIRouter, Depends
from spellcheck_service.schemas.spellcheck import HealthResponse
from spellcheck_service.services.spellcheck import SpellcheckClient, get_spellcheck_client
from spellcheck_service.utils.logger import get_logger

logger = get_logger("health")
router = APIRouter()


@router.get(
    "/health",
    response_model=HealthResponse,
    summary="Health check",
    description="Check application health and spell-check worker state",
)
async def health_check(
    client: SpellcheckClient = Depends(get_spellcheck_client),
) -> HealthResponse:
    """
    Health check endpoint.

    The service stays healthy when spellchecking is off or failed to load;
    editing continues without suggestions in that case.

    Returns:
        HealthResponse with status, spell-check state and timestamp
    """
    logger.debug("Health check", spellcheck_state=client.state.value)
    return HealthResponse(
        status="healthy",
        spellcheck=client.state,
        timestamp=datetime.now(timezone.utc)
    )

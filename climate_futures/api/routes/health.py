"""Health check endpoint."""

from datetime import datetime, timezone

from fastapi import APIRouter, Depends

from climate_futures.api.deps import get_completion_client
from climate_futures.api.models import HealthResponse
from climate_futures.llm.adapter import CompletionClient

router = APIRouter(prefix="/api", tags=["health"])


@router.get("/health", response_model=HealthResponse)
def health(completion_client: CompletionClient = Depends(get_completion_client)):
    """Liveness plus whether the completion service is configured."""
    # Fallbacks keep every endpoint working without the LLM
    llm_ok = bool(getattr(completion_client, "available", True))
    return HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        llm_available=llm_ok,
    )

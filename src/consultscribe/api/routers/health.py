"""
Health check endpoints.
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

from ...application.speaker.transcript import classify_transcript
from ...core.config import get_settings
from ..schemas.common import ApiResponse
from ..utils.responses import ok

router = APIRouter(prefix="/health", tags=["health"])

# Known two-turn exchange used to prove the classifier is wired up
_PROBE_TRANSCRIPT = "Hello, how are you feeling today?\nI've been having a headache since yesterday."
_PROBE_EXPECTED = (
    "[Doctor]: Hello, how are you feeling today?\n\n"
    "[Patient]: I've been having a headache since yesterday."
)


class HealthResponse(BaseModel):
    """Health check response schema."""

    status: str
    timestamp: datetime
    version: str
    service: str


@router.get("", response_model=ApiResponse[HealthResponse])
@router.get("/", response_model=ApiResponse[HealthResponse], include_in_schema=False)
async def health_check(request: Request):
    """
    Health check endpoint.

    Returns the current status of the service.
    """
    settings = get_settings()
    return ok(request, data=HealthResponse(
        status="healthy",
        timestamp=datetime.now(timezone.utc),
        version=settings.app_version,
        service=settings.app_name,
    ), message="OK")


@router.get("/ready", response_model=ApiResponse[dict])
async def readiness_check(request: Request):
    """
    Readiness check endpoint.

    Runs a fixed transcript through the classifier and reports whether the
    optional speaker correction backend is configured.
    """
    settings = get_settings()
    checks = {}

    classifier_ok = classify_transcript(_PROBE_TRANSCRIPT) == _PROBE_EXPECTED
    checks["speaker_classifier"] = "ok" if classifier_ok else "unexpected_output"

    if not settings.speaker_correction.enabled:
        checks["speaker_correction"] = "disabled"
    elif settings.azure_openai.is_configured:
        checks["speaker_correction"] = "configured"
        checks["azure_openai_chat_deployment"] = settings.azure_openai.deployment_name
    else:
        checks["speaker_correction"] = "not_configured"

    status = "ready" if classifier_ok else "degraded"
    return ok(request, data={
        "status": status,
        "timestamp": datetime.now(timezone.utc),
        "checks": checks,
    }, message="OK" if classifier_ok else "Classifier self-check failed")


@router.get("/live", response_model=ApiResponse[dict])
async def liveness_check(request: Request):
    """
    Liveness check endpoint.

    Returns whether the service is alive.
    """
    return ok(request, data={"status": "alive", "timestamp": datetime.now(timezone.utc)}, message="OK")

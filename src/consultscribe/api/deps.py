"""FastAPI dependency providers."""

import logging
from typing import Annotated, Optional

from fastapi import Depends

from ..adapters.external.speaker_correction_openai import OpenAISpeakerCorrectionService
from ..application.ports.services.speaker_correction_service import SpeakerCorrectionService
from ..application.speaker.classifier import SpeakerClassifier
from ..application.speaker.transcript import TranscriptClassifier
from ..application.use_cases.attribute_speakers import AttributeSpeakersUseCase
from ..core.config import Settings, get_settings

logger = logging.getLogger("consultscribe")


def get_app_settings() -> Settings:
    return get_settings()


def get_transcript_classifier(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> TranscriptClassifier:
    """Build a transcript classifier from the speaker settings."""
    classifier = SpeakerClassifier(
        weights=settings.speaker.scoring_weights(),
        doctor_overrides_first=settings.speaker.doctor_overrides_first,
    )
    return TranscriptClassifier(classifier, trust_existing_labels=settings.speaker.trust_existing_labels)


def get_speaker_correction_service(
    settings: Annotated[Settings, Depends(get_app_settings)],
) -> Optional[SpeakerCorrectionService]:
    """Correction service, or None when correction is disabled or Azure OpenAI is not configured."""
    if not settings.speaker_correction.enabled:
        return None
    if not settings.azure_openai.is_configured:
        logger.warning("Speaker correction is enabled but Azure OpenAI is not configured")
        return None
    from ..core.ai_client import AzureAIClient

    return OpenAISpeakerCorrectionService(
        AzureAIClient(),
        min_confidence=settings.speaker_correction.min_confidence,
        temperature=settings.speaker_correction.temperature,
        max_tokens=settings.speaker_correction.max_tokens,
    )


def get_attribute_speakers_use_case(
    transcript_classifier: Annotated[TranscriptClassifier, Depends(get_transcript_classifier)],
    correction_service: Annotated[
        Optional[SpeakerCorrectionService], Depends(get_speaker_correction_service)
    ],
) -> AttributeSpeakersUseCase:
    return AttributeSpeakersUseCase(transcript_classifier, correction_service)


AttributeSpeakersUseCaseDep = Annotated[AttributeSpeakersUseCase, Depends(get_attribute_speakers_use_case)]
SettingsDep = Annotated[Settings, Depends(get_app_settings)]

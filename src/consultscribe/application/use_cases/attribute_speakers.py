"""Attribute Speakers use case: label every turn of a consultation as Doctor or Patient."""

from typing import List, Optional, Tuple

from ...core.exceptions import ExternalServiceError, SpeakerCorrectionError
from ...core.structured_logger import get_logger
from ...domain.entities.utterance import Utterance
from ..dto.speaker_dto import AttributeSpeakersRequest, AttributeSpeakersResponse
from ..ports.services.speaker_correction_service import SpeakerCorrectionService
from ..speaker.language_detection import detect_language
from ..speaker.patient_detection import Clock, extract_patient_info
from ..speaker.transcript import TranscriptClassifier, join_turns

logger = get_logger(__name__)


class AttributeSpeakersUseCase:
    """Use case for speaker attribution with optional model-backed correction."""

    def __init__(
        self,
        transcript_classifier: TranscriptClassifier,
        correction_service: Optional[SpeakerCorrectionService] = None,
        clock: Optional[Clock] = None,
    ):
        self._transcript_classifier = transcript_classifier
        self._correction_service = correction_service
        self._clock = clock

    async def _apply_correction(
        self, utterances: List[Utterance]
    ) -> Tuple[List[Utterance], bool, Optional[str]]:
        if self._correction_service is None:
            return utterances, False, "Speaker correction is not configured"
        try:
            correction = await self._correction_service.correct(utterances)
        except SpeakerCorrectionError as e:
            logger.warning(f"Speaker correction rejected, using heuristic labels: {e.reason}")
            return utterances, False, e.reason
        except ExternalServiceError as e:
            logger.warning(f"Speaker correction failed, using heuristic labels: {e.message}")
            return utterances, False, e.message
        return correction.utterances, True, correction.analysis or None

    async def execute(self, request: AttributeSpeakersRequest) -> AttributeSpeakersResponse:
        """Execute the attribute speakers use case."""
        utterances = list(request.utterances)
        applied, note = False, None
        if request.use_llm_correction and utterances:
            utterances, applied, note = await self._apply_correction(utterances)

        # Fresh context per request; the classifier mutates it turn by turn
        labeled = self._transcript_classifier.classify_utterances(utterances)

        language = detect_language(" ".join(u.text for u in utterances))
        patient_info = extract_patient_info(utterances, clock=self._clock)

        logger.info(
            f"Attributed {len(labeled)} turns",
            turns=len(labeled),
            correction_applied=applied,
            language=language.value,
        )
        return AttributeSpeakersResponse(
            utterances=labeled,
            labeled_transcript=join_turns(labeled),
            language=language,
            patient_info=patient_info,
            correction_applied=applied,
            correction_note=note,
        )

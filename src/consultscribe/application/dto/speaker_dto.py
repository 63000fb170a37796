"""Speaker attribution DTOs between the API layer and the use case."""

from dataclasses import dataclass
from typing import List, Optional

from ...domain.entities.utterance import LabeledUtterance, PatientInfo, Utterance
from ...domain.enums.speaker import Locale


@dataclass
class AttributeSpeakersRequest:
    """Request DTO for labeling a consultation transcript."""

    utterances: List[Utterance]
    use_llm_correction: bool = False


@dataclass
class AttributeSpeakersResponse:
    """Response DTO for a labeled consultation transcript."""

    utterances: List[LabeledUtterance]
    labeled_transcript: str
    language: Locale
    patient_info: Optional[PatientInfo] = None
    correction_applied: bool = False
    correction_note: Optional[str] = None

"""
Conversational context threaded across the turns of one transcript.

A context is owned by a single classification session: create a fresh one per
transcript and never share it between concurrent sessions. The speaker
classifier only reads it; the transcript classifier mutates it after each turn.
"""

from dataclasses import dataclass, field
from typing import List, Optional, Tuple

from ...domain.enums.speaker import SpeakerRole
from ...domain.value_objects.speaker_features import SpeakerFeatures
from .patterns import (
    DOCTOR_PATTERNS,
    FIRST_PERSON_PATTERN,
    SYMPTOM_CONTEXT_PATTERN,
    matches_any,
    normalize,
)


@dataclass
class ConversationContext:
    """Running state of a consultation being classified."""

    last_speaker: SpeakerRole = SpeakerRole.DOCTOR
    is_first_interaction: bool = True
    turn_count: int = 0
    doctor_asked_question: bool = False
    is_patient_describing_symptoms: bool = False
    is_prescribing: bool = False
    interaction_history: List[Tuple[SpeakerRole, str]] = field(default_factory=list)

    # Running tallies, monotonically updated per turn
    medical_terms_count: float = 0.0
    question_count: int = 0
    first_person_count: int = 0
    sentence_complexity: float = 0.0

    def record_turn(
        self,
        speaker: SpeakerRole,
        text: str,
        features: Optional[SpeakerFeatures] = None,
        classified: bool = True,
    ) -> None:
        """Fold one attributed turn into the context.

        ``classified`` is False for turns that arrived with a trusted label:
        they update the speaker, flags and history but do not advance
        ``turn_count``.
        """
        self.interaction_history.append((speaker, text))
        self.last_speaker = speaker
        self.is_first_interaction = False
        if classified:
            self.turn_count += 1

        self.doctor_asked_question = speaker == SpeakerRole.DOCTOR and "?" in text
        self.is_patient_describing_symptoms = (
            speaker == SpeakerRole.PATIENT and bool(SYMPTOM_CONTEXT_PATTERN.search(text))
        )
        self.is_prescribing = (
            speaker == SpeakerRole.DOCTOR and matches_any(DOCTOR_PATTERNS.prescriptions, text)
        )

        self.question_count += text.count("?")
        self.first_person_count += len(FIRST_PERSON_PATTERN.findall(normalize(text)))
        if features is not None:
            self.medical_terms_count += features.medical_terms_usage / 2
            self.sentence_complexity = features.sentence_complexity

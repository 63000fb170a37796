"""
Speaker classifier: decides whether one utterance was spoken by the doctor or
the patient.

Decision precedence:

1. Empty text keeps the previous speaker.
2. On the first turn, an opening greeting is the doctor.
3. Hard override patterns decide outright (doctor group first by default).
4. Otherwise a weighted feature score plus a context adjustment is computed and
   ``score > 0`` means Doctor. A score of exactly zero is Patient.

The classifier never mutates the context it is given.
"""

import logging
from dataclasses import dataclass
from typing import Callable, Optional

from ...domain.enums.speaker import SpeakerRole
from ...domain.value_objects.speaker_features import DEFAULT_WEIGHTS, ScoringWeights, SpeakerFeatures
from .context import ConversationContext
from .features import extract_features
from .patterns import (
    DOCTOR_OVERRIDE_PATTERNS,
    GREETING_PATTERNS,
    PATIENT_OVERRIDE_PATTERNS,
    cue_profile,
    matches_any,
)

logger = logging.getLogger(__name__)

FeatureExtractor = Callable[[str], SpeakerFeatures]


@dataclass(frozen=True)
class SpeakerDecision:
    """Outcome of classifying one utterance, with the rule that produced it."""

    speaker: SpeakerRole
    reason: str  # empty | greeting | doctor_override | patient_override | score
    score: Optional[float] = None
    features: Optional[SpeakerFeatures] = None


class SpeakerClassifier:
    """Rule-and-score classifier for a single utterance."""

    def __init__(
        self,
        weights: ScoringWeights = DEFAULT_WEIGHTS,
        doctor_overrides_first: bool = True,
        feature_extractor: FeatureExtractor = extract_features,
    ) -> None:
        self._weights = weights
        self._doctor_overrides_first = doctor_overrides_first
        self._extract = feature_extractor

    def classify(self, text: str, context: ConversationContext) -> SpeakerRole:
        return self.explain(text, context).speaker

    def explain(self, text: str, context: ConversationContext) -> SpeakerDecision:
        """Classify ``text`` and report which rule decided it."""
        if not text or not text.strip():
            fallback = context.last_speaker if context.last_speaker.is_final else SpeakerRole.DOCTOR
            return SpeakerDecision(fallback, "empty")

        if context.is_first_interaction and matches_any(GREETING_PATTERNS, text):
            return SpeakerDecision(SpeakerRole.DOCTOR, "greeting")

        override = self._match_override(text)
        if override is not None:
            reason = "doctor_override" if override == SpeakerRole.DOCTOR else "patient_override"
            return SpeakerDecision(override, reason)

        features = self._extract(text)
        score = self.score(features, context)
        speaker = self.decide(score)
        logger.debug(
            f"Scored turn {context.turn_count}: score={score:.2f} speaker={speaker.value} "
            f"features={features.to_dict()}"
        )
        if logger.isEnabledFor(logging.DEBUG):
            hits = [name for name, hit in cue_profile(text).items() if hit]
            logger.debug(f"Pattern cues for turn {context.turn_count}: {hits}")
        return SpeakerDecision(speaker, "score", score, features)

    def score(self, features: SpeakerFeatures, context: ConversationContext) -> float:
        """Feature score plus the context adjustment."""
        return self._weights.weigh(features) + self.context_adjustment(context)

    def context_adjustment(self, context: ConversationContext) -> float:
        w = self._weights
        adjustment = 0.0
        if context.last_speaker == SpeakerRole.DOCTOR:
            adjustment -= w.after_speaker_bias
            if context.doctor_asked_question:
                adjustment -= w.after_question_bias
        elif context.last_speaker == SpeakerRole.PATIENT:
            adjustment += w.after_speaker_bias
            if context.is_patient_describing_symptoms:
                adjustment += w.after_symptoms_bias
        adjustment += w.turn_parity_bias if context.turn_count % 2 == 0 else -w.turn_parity_bias
        return adjustment

    @staticmethod
    def decide(score: float) -> SpeakerRole:
        """Positive scores are Doctor; zero and below are Patient."""
        return SpeakerRole.DOCTOR if score > 0 else SpeakerRole.PATIENT

    def _match_override(self, text: str) -> Optional[SpeakerRole]:
        groups = [
            (SpeakerRole.DOCTOR, DOCTOR_OVERRIDE_PATTERNS),
            (SpeakerRole.PATIENT, PATIENT_OVERRIDE_PATTERNS),
        ]
        if not self._doctor_overrides_first:
            groups.reverse()
        for role, patterns in groups:
            if matches_any(patterns, text):
                return role
        return None

"""
Per-utterance feature vector and the weights that turn it into a score.
"""

from dataclasses import asdict, dataclass
from typing import Dict


@dataclass(frozen=True)
class SpeakerFeatures:
    """Non-negative signals for one utterance, each on an approximate 0-10 scale."""

    medical_terms_usage: float = 0.0
    sentence_complexity: float = 0.0
    question_density: float = 0.0
    first_person_usage: float = 0.0
    directive_language: float = 0.0
    symptom_description: float = 0.0
    technical_jargon: float = 0.0

    def to_dict(self) -> Dict[str, float]:
        return asdict(self)


@dataclass(frozen=True)
class ScoringWeights:
    """Feature weights and context biases for the doctor/patient score.

    Positive contributions lean Doctor, negative lean Patient.
    """

    medical_terms: float = 1.5
    sentence_complexity: float = 0.8
    question_density: float = 0.6
    first_person: float = -1.8
    directive_language: float = 1.2
    symptom_description: float = -2.0
    technical_jargon: float = 2.0

    after_speaker_bias: float = 2.0
    after_question_bias: float = 4.0
    after_symptoms_bias: float = 4.0
    turn_parity_bias: float = 1.0

    def weigh(self, features: SpeakerFeatures) -> float:
        """Weighted sum of a feature vector."""
        return (
            features.medical_terms_usage * self.medical_terms
            + features.sentence_complexity * self.sentence_complexity
            + features.question_density * self.question_density
            + features.first_person_usage * self.first_person
            + features.directive_language * self.directive_language
            + features.symptom_description * self.symptom_description
            + features.technical_jargon * self.technical_jargon
        )


DEFAULT_WEIGHTS = ScoringWeights()

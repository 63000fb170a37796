"""
Value objects package for domain layer.
"""

from .speaker_features import DEFAULT_WEIGHTS, ScoringWeights, SpeakerFeatures

__all__ = [
    "SpeakerFeatures",
    "ScoringWeights",
    "DEFAULT_WEIGHTS",
]

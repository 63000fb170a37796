"""
Speaker attribution engine.

Public entry points for classifying consultation turns as Doctor or Patient.
"""

from .classifier import SpeakerClassifier, SpeakerDecision
from .context import ConversationContext
from .features import extract_features
from .language_detection import detect_language
from .patient_detection import detect_patient_info, extract_patient_info
from .patterns import DOCTOR_PATTERNS, PATIENT_PATTERNS, cue_profile
from .transcript import TranscriptClassifier, classify_transcript, split_turns

__all__ = [
    "SpeakerClassifier",
    "SpeakerDecision",
    "ConversationContext",
    "TranscriptClassifier",
    "classify_transcript",
    "split_turns",
    "extract_features",
    "detect_language",
    "detect_patient_info",
    "extract_patient_info",
    "DOCTOR_PATTERNS",
    "PATIENT_PATTERNS",
    "cue_profile",
]

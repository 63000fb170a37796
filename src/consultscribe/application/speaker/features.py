"""
Feature extraction for a single utterance.

Each signal is computed independently and normalised to roughly 0-10. Empty
or single-word input yields zeros rather than dividing by zero.
"""

import re
from typing import List

from ...domain.value_objects.speaker_features import SpeakerFeatures
from .patterns import (
    CONNECTIVE_PATTERN,
    DIRECTIVE_PATTERNS,
    DOCTOR_PATTERNS,
    FIRST_PERSON_PATTERN,
    SUBORDINATOR_PATTERN,
    SYMPTOM_VOCABULARY_PATTERN,
    TECHNICAL_JARGON_PATTERNS,
    count_matches,
    normalize,
)

MAX_SCORE = 10.0

_SENTENCE_BOUNDARY = re.compile(r"[.!?]+")
_WORD = re.compile(r"[a-z0-9']+")

# Sentence-length contribution starts above this many words per sentence
_PLAIN_SENTENCE_WORDS = 5


def _cap(value: float) -> float:
    return max(0.0, min(value, MAX_SCORE))


def split_sentences(text: str) -> List[str]:
    return [s for s in _SENTENCE_BOUNDARY.split(text) if s.strip()]


def split_words(text: str) -> List[str]:
    return _WORD.findall(normalize(text))


def medical_terms_usage(text: str) -> float:
    return _cap(count_matches(DOCTOR_PATTERNS.medical_terms, text) * 2)


def sentence_complexity(text: str) -> float:
    words = split_words(text)
    sentences = split_sentences(text)
    if not words or not sentences:
        return 0.0
    avg_words = len(words) / len(sentences)
    length_part = min(max(avg_words - _PLAIN_SENTENCE_WORDS, 0) * 0.5, 4.0)
    lowered = normalize(text)
    subordinate_part = min(len(SUBORDINATOR_PATTERN.findall(lowered)) * 1.5, 3.0)
    connective_part = min(len(CONNECTIVE_PATTERN.findall(lowered)) * 1.5, 3.0)
    return _cap(length_part + subordinate_part + connective_part)


def question_density(text: str) -> float:
    sentences = split_sentences(text)
    if not sentences:
        return 0.0
    return _cap(text.count("?") / len(sentences) * MAX_SCORE)


def first_person_usage(text: str) -> float:
    words = split_words(text)
    if not words:
        return 0.0
    pronouns = len(FIRST_PERSON_PATTERN.findall(normalize(text)))
    return _cap(pronouns / len(words) * MAX_SCORE)


def directive_language(text: str) -> float:
    return _cap(count_matches(DIRECTIVE_PATTERNS, text))


def symptom_description(text: str) -> float:
    return _cap(len(SYMPTOM_VOCABULARY_PATTERN.findall(normalize(text))))


def technical_jargon(text: str) -> float:
    return _cap(count_matches(TECHNICAL_JARGON_PATTERNS, text) * 2)


def extract_features(text: str) -> SpeakerFeatures:
    """Compute the full feature vector for one utterance."""
    text = text or ""
    return SpeakerFeatures(
        medical_terms_usage=medical_terms_usage(text),
        sentence_complexity=sentence_complexity(text),
        question_density=question_density(text),
        first_person_usage=first_person_usage(text),
        directive_language=directive_language(text),
        symptom_description=symptom_description(text),
        technical_jargon=technical_jargon(text),
    )

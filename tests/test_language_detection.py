"""
Language detection tests.
"""

import pytest

from consultscribe.application.speaker.language_detection import detect_language
from consultscribe.domain.enums.speaker import Locale


@pytest.mark.parametrize(
    "text,expected",
    [
        ("How are you feeling today?", Locale.ENGLISH_INDIA),
        ("नमस्ते डॉक्टर", Locale.HINDI_INDIA),
        ("నమస్కారం డాక్టర్", Locale.TELUGU_INDIA),
        ("", Locale.ENGLISH_INDIA),
        ("¿Cómo está usted?", Locale.ENGLISH_INDIA),
    ],
)
def test_detect_language(text, expected):
    assert detect_language(text) == expected


def test_devanagari_checked_before_telugu():
    assert detect_language("hello నమస్కారం नमस्ते") == Locale.HINDI_INDIA


def test_locale_values_are_recognizer_codes():
    assert detect_language("namaste").value == "en-IN"

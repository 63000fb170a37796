"""
Script-based language detection for speech-recognition locale selection.

Informational only: the detected locale never feeds the speaker score.
"""

import re

from ...domain.enums.speaker import Locale

_DEVANAGARI = re.compile(r"[\u0900-\u097F]")
_TELUGU = re.compile(r"[\u0C00-\u0C7F]")


def detect_language(text: str) -> Locale:
    """Return the locale implied by the first recognised script in ``text``.

    Devanagari is checked before Telugu; any other script, or empty text,
    falls back to English (India).
    """
    if not text:
        return Locale.ENGLISH_INDIA
    if _DEVANAGARI.search(text):
        return Locale.HINDI_INDIA
    if _TELUGU.search(text):
        return Locale.TELUGU_INDIA
    return Locale.ENGLISH_INDIA

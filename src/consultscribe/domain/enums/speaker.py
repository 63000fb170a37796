"""
Speaker role and locale enums used across the attribution engine.
"""

import re
from enum import Enum
from typing import Optional

from ..errors import InvalidSpeakerLabelError


class SpeakerRole(str, Enum):
    """Roles a consultation turn can be attributed to."""

    DOCTOR = "Doctor"
    PATIENT = "Patient"
    IDENTIFYING = "Identifying"  # Placeholder before the first decision, never emitted

    @property
    def is_final(self) -> bool:
        """True for roles that may appear on a labeled output turn."""
        return self in (SpeakerRole.DOCTOR, SpeakerRole.PATIENT)

    @classmethod
    def parse(cls, label: Optional[str], strict: bool = False) -> Optional["SpeakerRole"]:
        """Parse a trusted Doctor/Patient label.

        Accepts case-insensitive ``Doctor``/``Patient`` with optional square
        brackets. ``Identifying``, ``Speaker N`` and anything else are not
        trusted: ``None`` is returned, or ``InvalidSpeakerLabelError`` raised
        when ``strict`` is set.
        """
        cleaned = re.sub(r"^\[|\]$", "", (label or "").strip()).strip().lower()
        if cleaned == "doctor":
            return cls.DOCTOR
        if cleaned == "patient":
            return cls.PATIENT
        if strict:
            raise InvalidSpeakerLabelError(label or "")
        return None


class Locale(str, Enum):
    """Speech-recognition locales selected from the script of a text span."""

    ENGLISH_INDIA = "en-IN"
    HINDI_INDIA = "hi-IN"
    TELUGU_INDIA = "te-IN"

"""
Utterance entities flowing through speaker attribution.

An ``Utterance`` is one turn as ingested; a ``LabeledUtterance`` is the same
turn after it has been attributed to a final role.
"""

from dataclasses import dataclass
from typing import Dict, Optional

from ..enums.speaker import SpeakerRole


@dataclass(frozen=True)
class Utterance:
    """One unit of speech, optionally carrying a trusted speaker label."""

    text: str
    speaker: Optional[SpeakerRole] = None
    source_label: Optional[str] = None  # Raw upstream label, e.g. "Speaker 1"
    start: Optional[float] = None
    end: Optional[float] = None

    @property
    def is_trusted(self) -> bool:
        """Whether the turn already carries a final Doctor/Patient label."""
        return self.speaker is not None and self.speaker.is_final


@dataclass(frozen=True)
class LabeledUtterance:
    """A turn attributed to Doctor or Patient."""

    speaker: SpeakerRole
    text: str

    def to_tagged(self) -> str:
        """Render as ``[Role]: text``."""
        return f"[{self.speaker.value}]: {self.text}"

    def to_dict(self) -> Dict[str, str]:
        return {"speaker": self.speaker.value, "text": self.text}


@dataclass(frozen=True)
class PatientInfo:
    """Patient name surfaced from the opening greeting of a session."""

    name: str
    time: str

    def to_dict(self) -> Dict[str, str]:
        return {"name": self.name, "time": self.time}


@dataclass(frozen=True)
class DiarizedWord:
    """Word-level output of an upstream diarizing recognizer."""

    word: str
    speaker_tag: int
    start_time: float
    end_time: float
    confidence: Optional[float] = None

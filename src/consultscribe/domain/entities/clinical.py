"""
Clinical details read off a speaker-labeled consultation.
"""

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Medication:
    """A medicine mentioned by the doctor, with whatever dosing was stated."""

    name: str
    dose: Optional[str] = None
    frequency: Optional[str] = None
    duration: Optional[str] = None


@dataclass(frozen=True)
class ClinicalDetails:
    symptoms: List[str] = field(default_factory=list)
    medications: List[Medication] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        return asdict(self)

"""
Speaker correction service interface for model-backed relabeling.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, Dict, List, Sequence

from ....domain.entities.utterance import Utterance


@dataclass(frozen=True)
class SpeakerCorrection:
    """A validated correction: every utterance carries a trusted Doctor/Patient label."""

    utterances: List[Utterance]
    confidence: float
    corrections: List[Dict[str, Any]] = field(default_factory=list)
    analysis: str = ""


class SpeakerCorrectionService(ABC):
    """Abstract service that relabels a transcript's speakers upstream of the heuristic classifier."""

    @abstractmethod
    async def correct(self, utterances: Sequence[Utterance]) -> SpeakerCorrection:
        """
        Relabel the speakers of an ordered transcript.

        Args:
            utterances: Turns in transcript order, labeled or not.

        Returns:
            SpeakerCorrection whose utterances are all trusted.

        Raises:
            SpeakerCorrectionError: output unparseable, below the confidence
                threshold, or carrying a label other than Doctor/Patient.
            ExternalServiceError: the model call itself failed.
        """
        pass

"""
Transcript classifier: attributes every turn of a consultation in order.

Turns are processed strictly sequentially because each decision reads the
context left by the previous one. Trusted Doctor/Patient labels are passed
through untouched; ``[Identifying]``, ``[Speaker N]`` and other tags are
stripped and the turn is classified.
"""

import logging
import re
from typing import List, Optional, Sequence

from ...domain.entities.utterance import LabeledUtterance, Utterance
from ...domain.enums.speaker import SpeakerRole
from .classifier import SpeakerClassifier
from .context import ConversationContext
from .features import extract_features
from .patterns import SPEAKER_TAG_PATTERN

logger = logging.getLogger(__name__)

_TURN_BOUNDARY = re.compile(r"(?:\r?\n)+")
TURN_SEPARATOR = "\n\n"


def parse_turn(line: str) -> Utterance:
    """Split an optional leading ``[Label]:`` tag from one transcript line."""
    line = line.strip()
    match = SPEAKER_TAG_PATTERN.match(line)
    if not match:
        return Utterance(text=line)
    label = match.group("label").strip()
    return Utterance(
        text=line[match.end():].strip(),
        speaker=SpeakerRole.parse(label),
        source_label=label,
    )


def split_turns(raw: Optional[str]) -> List[Utterance]:
    """Split a raw transcript on newline runs into non-empty turns."""
    if not raw:
        return []
    return [parse_turn(line) for line in _TURN_BOUNDARY.split(raw) if line.strip()]


def join_turns(labeled: Sequence[LabeledUtterance]) -> str:
    return TURN_SEPARATOR.join(turn.to_tagged() for turn in labeled)


class TranscriptClassifier:
    """Drives the speaker classifier over an ordered sequence of turns."""

    def __init__(
        self,
        classifier: Optional[SpeakerClassifier] = None,
        trust_existing_labels: bool = True,
    ) -> None:
        self._classifier = classifier or SpeakerClassifier()
        self._trust_existing_labels = trust_existing_labels

    def classify_utterances(
        self,
        utterances: Sequence[Utterance],
        context: Optional[ConversationContext] = None,
    ) -> List[LabeledUtterance]:
        """Label every utterance, preserving input order.

        A fresh context is created unless one is supplied; a supplied context
        is mutated in place and must not be shared with another session.
        """
        context = context if context is not None else ConversationContext()
        labeled: List[LabeledUtterance] = []
        passed_through = 0

        for utterance in utterances:
            if self._trust_existing_labels and utterance.is_trusted:
                labeled.append(LabeledUtterance(utterance.speaker, utterance.text))
                context.record_turn(utterance.speaker, utterance.text, classified=False)
                passed_through += 1
                continue

            decision = self._classifier.explain(utterance.text, context)
            features = decision.features or extract_features(utterance.text)
            labeled.append(LabeledUtterance(decision.speaker, utterance.text))
            context.record_turn(decision.speaker, utterance.text, features)

        logger.debug(f"Labeled {len(labeled)} turns ({passed_through} passed through with trusted labels)")
        return labeled

    def classify_transcript(self, raw: Optional[str], context: Optional[ConversationContext] = None) -> str:
        """Label a newline-delimited transcript and render ``[Role]: text`` turns."""
        turns = split_turns(raw)
        if not turns:
            return ""
        return join_turns(self.classify_utterances(turns, context))


def classify_transcript(raw: Optional[str]) -> str:
    """Classify a raw transcript with default settings."""
    return TranscriptClassifier().classify_transcript(raw)

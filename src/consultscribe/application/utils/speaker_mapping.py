"""
Speaker mapping utility for diarized transcripts.
Maps speaker indices from diarization to Doctor/Patient labels by convention.

This is not the heuristic classifier: it only applies when the upstream
diarizer's indices are already known to follow the doctor-speaks-first order.
"""

import logging
import re
from dataclasses import replace
from typing import List, Optional, Sequence

from ...core.constants import SPEAKER_INDEX_ROLES
from ...domain.entities.utterance import Utterance
from ...domain.enums.speaker import SpeakerRole

logger = logging.getLogger(__name__)

_SPEAKER_TAG = re.compile(r"\[Speaker\s*(\d+)\]")
_SPEAKER_LABEL = re.compile(r"^\s*Speaker\s*(\d+)\s*$", re.IGNORECASE)


def role_for_speaker_index(index: int) -> Optional[SpeakerRole]:
    """Role assigned to a diarizer speaker index, or None if it has none."""
    label = SPEAKER_INDEX_ROLES.get(index)
    return SpeakerRole(label) if label else None


def map_speaker_labels(transcript: str) -> str:
    """Rewrite ``[Speaker 1]``/``[Speaker 2]`` tags to ``[Doctor]``/``[Patient]``.

    Other speaker indices are left untouched so the heuristic classifier can
    still pick them up.
    """
    if not transcript:
        return ""

    def _replace(match: "re.Match[str]") -> str:
        role = role_for_speaker_index(int(match.group(1)))
        return f"[{role.value}]" if role else match.group(0)

    return _SPEAKER_TAG.sub(_replace, transcript)


def map_speaker_utterances(utterances: Sequence[Utterance]) -> List[Utterance]:
    """Give ``Speaker N`` utterances a trusted role where the convention covers N."""
    mapped: List[Utterance] = []
    unmapped = 0
    for utterance in utterances:
        match = _SPEAKER_LABEL.match(utterance.source_label or "")
        if utterance.is_trusted or not match:
            mapped.append(utterance)
            continue
        role = role_for_speaker_index(int(match.group(1)))
        if role is None:
            unmapped += 1
            mapped.append(utterance)
            continue
        mapped.append(replace(utterance, speaker=role))

    if unmapped:
        logger.warning(f"{unmapped} utterances had speaker indices outside the Doctor/Patient convention")
    return mapped

"""
Patient name detection from the opening turns of a consultation.

Separate from speaker scoring: a small set of greeting and introduction
patterns surfaces the name the doctor greets the patient with.
"""

import logging
import re
from datetime import datetime
from typing import Callable, Iterable, Optional, Union

from ...core.constants import NON_NAME_WORDS
from ...domain.entities.utterance import PatientInfo, Utterance
from .transcript import parse_turn, split_turns

logger = logging.getLogger(__name__)

Clock = Callable[[], datetime]

_TITLE = r"(?:mrs\.?|mr\.?|ms\.?|miss|dr\.?)?"

_NAME_PATTERNS = tuple(
    re.compile(p, re.IGNORECASE)
    for p in (
        # Greetings addressed to the patient
        rf"\b(?:hi|hello|hey|good morning|good afternoon|good evening|welcome)\s+{_TITLE}\s*([a-z]+)",
        rf"(?:namaste|namaskar|नमस्ते|నమస్కారం)\s+{_TITLE}\s*([a-z]+)",
        # Direct patient references
        rf"\b(?:patient|patient's name|client|person)(?:'s| is| name is)?\s+{_TITLE}\s*([a-z]+)",
        # Introductions
        rf"\b(?:this is|meet|let me introduce|introducing|i(?:'m| am) seeing|i have)\s+{_TITLE}\s*([a-z]+)",
        # Arrivals
        rf"\b{_TITLE}\s*([a-z]+)\s+(?:is here|has arrived|is waiting|has come)",
        # Hindi and Telugu greetings followed by a latin-script name
        rf"(?:शुभ प्रभात|शुभ दिन|शुभ सन्ध्या|శుభోదయం|శుభ దినం)\s+{_TITLE}\s*([a-z]+)",
        # Self-introductions
        r"\b(?:name is|called|my name is|i am)\s+([a-z]+)",
        rf"\b(?:for|with)\s+patient\s+{_TITLE}\s*([a-z]+)",
        r"namaste.*?\s+([a-z]+)",
        # "Doctor, I'm John"
        r"\b(?:doctor|doc|dr\.?)(?:[,\s].*?)?\s+([a-z]+)(?:\s|$)",
        # Sentences opening with a name
        rf"^{_TITLE}\s*([a-z]{{3,}})\s+(?:is|has|wants|needs|came|suffering|here)",
    )
)

_CAPITALISED_AFTER_GREETING = re.compile(
    r"(?i:hello|hi|hey|namaste|namaskar|good morning|good afternoon)\s+([A-Z][a-z]{2,})"
)

_SEGMENT_BOUNDARY = re.compile(r"[.,!?;]|\[Doctor\]|\[Patient\]|\[Identifying\]")


def is_common_word(word: str) -> bool:
    return word.lower() in NON_NAME_WORDS


def _current_time(clock: Optional[Clock]) -> str:
    return (clock or datetime.now)().strftime("%H:%M")


def _first_name(text: str) -> Optional[str]:
    for pattern in _NAME_PATTERNS:
        match = pattern.search(text)
        if match and match.group(1):
            candidate = match.group(1)
            if len(candidate) >= 2 and not is_common_word(candidate):
                return candidate[0].upper() + candidate[1:].lower()
    return None


def detect_patient_info(text: str, clock: Optional[Clock] = None) -> Optional[PatientInfo]:
    """Find a greeted or introduced patient name in ``text``.

    The whole text is scanned first, then each sentence-like segment, then a
    capitalised word directly after a greeting. Returns ``None`` when nothing
    plausible is found.
    """
    normalized = re.sub(r"\s+", " ", text or "").strip()
    if not normalized:
        return None

    name = _first_name(normalized)
    if name is None:
        for segment in _SEGMENT_BOUNDARY.split(normalized):
            if len(segment.strip()) < 3:
                continue
            name = _first_name(segment)
            if name:
                break

    if name is None:
        match = _CAPITALISED_AFTER_GREETING.search(normalized)
        if match and not is_common_word(match.group(1)):
            name = match.group(1)

    if name is None:
        return None
    logger.debug(f"Detected patient name '{name}'")
    return PatientInfo(name=name, time=_current_time(clock))


def extract_patient_info(
    turns: Union[str, Iterable[Union[str, Utterance]]],
    max_turns: int = 3,
    clock: Optional[Clock] = None,
) -> Optional[PatientInfo]:
    """Scan the first ``max_turns`` turns of a session for the patient's name."""
    if isinstance(turns, str):
        turns = split_turns(turns)
    for index, turn in enumerate(turns):
        if index >= max_turns:
            break
        text = turn.text if isinstance(turn, Utterance) else parse_turn(turn or "").text
        info = detect_patient_info(text, clock)
        if info:
            return info
    return None

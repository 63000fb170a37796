"""
Shared helper to normalise transcript input into canonical utterances.

Upstream recognizers and clients hand over turns in several shapes: a raw
newline-delimited string, a list of lines, ``{"speaker", "text"}`` records,
``{"transcript", "ts_start", "ts_end"}`` records or single-key
``{"Doctor": "text"}`` dialogue turns. Everything is turned into
``Utterance`` records here so the speaker classifier sees one shape.
"""

import logging
import re
from typing import Any, Iterable, List, Mapping, Optional, Union

from ...domain.entities.utterance import Utterance
from ...domain.enums.speaker import SpeakerRole
from ..speaker.transcript import parse_turn

logger = logging.getLogger(__name__)

# "Doctor: text" / "Speaker 2: text" without square brackets
_BARE_LABEL = re.compile(r"^\s*(?P<label>doctor|patient|speaker\s*\d+)\s*:\s*", re.IGNORECASE)

_RECORD_KEYS = {"text", "transcript", "speaker", "start", "end", "ts_start", "ts_end"}

DialogueInput = Union[str, Iterable[Union[str, Mapping[str, Any], Utterance]]]


def _make_utterance(
    text: Optional[str],
    label: Optional[str] = None,
    start: Optional[float] = None,
    end: Optional[float] = None,
) -> Utterance:
    label = label.strip() if isinstance(label, str) and label.strip() else None
    return Utterance(
        text=(text or "").strip(),
        speaker=SpeakerRole.parse(label),
        source_label=label,
        start=start,
        end=end,
    )


def parse_line(line: str) -> Utterance:
    """Parse one line carrying an optional ``[Label]:`` or ``Label:`` prefix."""
    utterance = parse_turn(line)
    if utterance.source_label is not None:
        return utterance
    match = _BARE_LABEL.match(utterance.text)
    if not match:
        return utterance
    return _make_utterance(utterance.text[match.end():], match.group("label"))


def _first_present(record: Mapping[str, Any], *keys: str) -> Any:
    for key in keys:
        if record.get(key) is not None:
            return record[key]
    return None


def parse_record(record: Mapping[str, Any]) -> Utterance:
    """Parse a turn record from a diarizer or client."""
    if len(record) == 1:
        key, value = next(iter(record.items()))
        if key not in _RECORD_KEYS and isinstance(value, str):
            return _make_utterance(value, key)

    return _make_utterance(
        _first_present(record, "text", "transcript"),
        record.get("speaker"),
        _first_present(record, "start", "ts_start"),
        _first_present(record, "end", "ts_end"),
    )


def structure_dialogue(raw: DialogueInput) -> List[Utterance]:
    """Normalise any supported transcript shape into non-empty utterances, in order."""
    if raw is None:
        return []
    if isinstance(raw, str):
        items: List[Utterance] = [parse_line(line) for line in raw.splitlines() if line.strip()]
    else:
        items = []
        for item in raw:
            if isinstance(item, Utterance):
                items.append(item)
            elif isinstance(item, str):
                items.append(parse_line(item))
            elif isinstance(item, Mapping):
                items.append(parse_record(item))
            else:
                logger.warning(f"Skipping unsupported dialogue item of type {type(item).__name__}")

    utterances = [u for u in items if u.text]
    dropped = len(items) - len(utterances)
    if dropped:
        logger.debug(f"Dropped {dropped} empty turns during ingestion")
    return utterances

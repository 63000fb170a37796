"""
Formats word-level diarization output into tagged speaker turns.
"""

from typing import List, Optional, Sequence

from ...domain.entities.utterance import DiarizedWord
from ..speaker.transcript import TURN_SEPARATOR

# Silence between two words that closes the current turn
PAUSE_THRESHOLD_SECONDS = 1.0
_SENTENCE_END = (".", "!", "?")


def format_diarized_transcript(words: Sequence[DiarizedWord]) -> str:
    """Group diarized words into ``[Speaker N]: ...`` turns.

    A turn closes when the speaker changes, when a word ends a sentence,
    when the pause before the next word exceeds the threshold, or at the
    last word. Turns are joined with a blank line.
    """
    if not words:
        return ""

    turns: List[str] = []
    current_speaker: Optional[int] = None
    current: List[str] = []

    def _flush() -> None:
        if current and current_speaker is not None:
            turns.append(f"[Speaker {current_speaker}]: {' '.join(current)}")
        current.clear()

    for index, word in enumerate(words):
        if current_speaker is not None and word.speaker_tag != current_speaker:
            _flush()
        current_speaker = word.speaker_tag
        current.append(word.word)

        is_last = index == len(words) - 1
        long_pause = not is_last and words[index + 1].start_time - word.end_time > PAUSE_THRESHOLD_SECONDS
        if word.word.endswith(_SENTENCE_END) or long_pause or is_last:
            _flush()

    return TURN_SEPARATOR.join(turns)

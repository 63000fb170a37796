"""
Patient name detection tests.
"""

import pytest

from consultscribe.application.speaker.patient_detection import (
    detect_patient_info,
    extract_patient_info,
    is_common_word,
)
from consultscribe.domain.entities.utterance import PatientInfo, Utterance


def test_greeted_name_is_detected(fixed_clock):
    info = detect_patient_info("Hello Mr. Sharma, how are you feeling today?", fixed_clock)
    assert info == PatientInfo(name="Sharma", time="09:30")


def test_namaste_greeting(fixed_clock):
    assert detect_patient_info("Namaste Priya ji, please sit", fixed_clock).name == "Priya"


@pytest.mark.parametrize(
    "text",
    [
        "I've been having a headache since yesterday.",
        "Hi everyone",
        "",
    ],
)
def test_no_name_found(text, fixed_clock):
    assert detect_patient_info(text, fixed_clock) is None


def test_common_words_are_not_names():
    assert is_common_word("Everyone")
    assert is_common_word("doctor")
    assert not is_common_word("Sharma")


def test_only_first_turns_are_scanned(fixed_clock):
    turns = ["How is the pain?", "Bad.", "Hello Mr. Sharma"]
    assert extract_patient_info(turns, max_turns=2, clock=fixed_clock) is None
    assert extract_patient_info(turns, max_turns=3, clock=fixed_clock).name == "Sharma"


def test_tags_are_stripped_from_string_transcripts(fixed_clock):
    transcript = "[Doctor]: Hello John, how are you today?\n[Patient]: Not great."
    assert extract_patient_info(transcript, clock=fixed_clock) == PatientInfo("John", "09:30")


def test_utterance_records_are_accepted(fixed_clock):
    turns = [Utterance("Good evening Mrs. Iyer")]
    assert extract_patient_info(turns, clock=fixed_clock).name == "Iyer"

"""
Speaker correction adapter and use-case fallback tests.

The Azure OpenAI client is replaced by a stub exposing the same async
``chat`` coroutine.
"""

import asyncio
import json
from types import SimpleNamespace

import openai
import pytest

from consultscribe.adapters.external.speaker_correction_openai import (
    OpenAISpeakerCorrectionService,
    extract_json_object,
    parse_corrected_utterances,
    render_transcript,
)
from consultscribe.application.dto.speaker_dto import AttributeSpeakersRequest
from consultscribe.application.ports.services.speaker_correction_service import (
    SpeakerCorrection,
    SpeakerCorrectionService,
)
from consultscribe.application.speaker.transcript import TranscriptClassifier
from consultscribe.application.use_cases.attribute_speakers import AttributeSpeakersUseCase
from consultscribe.core.exceptions import OpenAIError, SpeakerCorrectionError
from consultscribe.domain.entities.utterance import Utterance
from consultscribe.domain.enums.speaker import Locale, SpeakerRole

TURNS = [
    Utterance("Any fever?", source_label="Speaker 1"),
    Utterance("Yes, since Monday.", source_label="Speaker 2"),
]


class StubChatClient:
    def __init__(self, content=None, error=None):
        self.content = content
        self.error = error
        self.calls = []

    async def chat(self, messages, **kwargs):
        self.calls.append((messages, kwargs))
        if self.error is not None:
            raise self.error
        return SimpleNamespace(choices=[SimpleNamespace(message=SimpleNamespace(content=self.content))])


def _reply(transcript, confidence=0.95, fenced=True):
    body = json.dumps(
        {
            "correctedTranscript": transcript,
            "confidence": confidence,
            "corrections": [{"original": "Speaker 1", "corrected": "Doctor", "reason": "asks questions"}],
            "analysis": "Doctor asks, patient answers",
        }
    )
    return f"```json\n{body}\n```" if fenced else body


def test_render_transcript_uses_raw_labels():
    turns = TURNS + [Utterance("Okay", SpeakerRole.PATIENT, "Patient"), Utterance("Hmm")]
    assert render_transcript(turns) == (
        "Speaker 1: Any fever?\nSpeaker 2: Yes, since Monday.\nPatient: Okay\nUnknown: Hmm"
    )


def test_extract_json_object_strips_fences():
    assert extract_json_object(_reply("Doctor: Hi"))["confidence"] == 0.95


@pytest.mark.parametrize("content", ["no json here", "{not: valid}", "```\n```"])
def test_extract_json_object_rejects_garbage(content):
    with pytest.raises(SpeakerCorrectionError):
        extract_json_object(content)


def test_parse_corrected_utterances():
    utterances = parse_corrected_utterances("Doctor: Any fever?\n\n[Patient]: Yes, since Monday.")
    assert [(u.speaker, u.text) for u in utterances] == [
        (SpeakerRole.DOCTOR, "Any fever?"),
        (SpeakerRole.PATIENT, "Yes, since Monday."),
    ]
    assert all(u.is_trusted for u in utterances)


@pytest.mark.parametrize(
    "transcript",
    [
        "Doctor: Any fever?\nSpeaker 1: Yes.",
        "Doctor: Any fever?\nUnknown: Yes.",
        "Any fever?",
        "",
    ],
)
def test_parse_corrected_utterances_rejects_untrusted_labels(transcript):
    with pytest.raises(SpeakerCorrectionError):
        parse_corrected_utterances(transcript)


def test_correction_accepted():
    client = StubChatClient(_reply("Doctor: Any fever?\nPatient: Yes, since Monday."))
    service = OpenAISpeakerCorrectionService(client, min_confidence=0.85, temperature=0.1, max_tokens=500)

    correction = asyncio.run(service.correct(TURNS))

    assert [u.speaker for u in correction.utterances] == [SpeakerRole.DOCTOR, SpeakerRole.PATIENT]
    assert correction.confidence == 0.95
    assert correction.analysis == "Doctor asks, patient answers"
    messages, kwargs = client.calls[0]
    assert "Speaker 1: Any fever?" in messages[1]["content"]
    assert kwargs == {"temperature": 0.1, "max_tokens": 500}


def test_merged_turns_rejected():
    turns = TURNS + [Utterance("A little, at night.", source_label="Speaker 2")]
    client = StubChatClient(_reply("Doctor: Any fever? Yes, since Monday. A little, at night."))
    with pytest.raises(SpeakerCorrectionError) as excinfo:
        asyncio.run(OpenAISpeakerCorrectionService(client).correct(turns))
    assert excinfo.value.reason == "corrected transcript changed turn count"
    assert excinfo.value.details == {"expected": 3, "received": 1}


def test_accepted_correction_keeps_submitted_text():
    client = StubChatClient(_reply("Doctor: Any fever??\nPatient: Yes since monday"))
    correction = asyncio.run(OpenAISpeakerCorrectionService(client).correct(TURNS))
    assert [u.text for u in correction.utterances] == [u.text for u in TURNS]
    assert [u.speaker for u in correction.utterances] == [SpeakerRole.DOCTOR, SpeakerRole.PATIENT]


def test_use_case_falls_back_when_turns_are_merged():
    turns = [
        Utterance("Hello there, how are you today?"),
        Utterance("I've been coughing."),
        Utterance("Any fever?"),
    ]
    client = StubChatClient(_reply("Doctor: Hello there, how are you today and any fever?"))
    use_case = AttributeSpeakersUseCase(TranscriptClassifier(), OpenAISpeakerCorrectionService(client))
    result = _run(use_case, turns)

    assert result.correction_applied is False
    assert result.correction_note == "corrected transcript changed turn count"
    assert [u.text for u in result.utterances] == [u.text for u in turns]


def test_low_confidence_rejected():
    client = StubChatClient(_reply("Doctor: Any fever?\nPatient: Yes.", confidence=0.4))
    service = OpenAISpeakerCorrectionService(client)
    with pytest.raises(SpeakerCorrectionError) as excinfo:
        asyncio.run(service.correct(TURNS))
    assert excinfo.value.details == {"confidence": 0.4}


def test_missing_transcript_field_rejected():
    client = StubChatClient(json.dumps({"confidence": 0.99}))
    with pytest.raises(SpeakerCorrectionError):
        asyncio.run(OpenAISpeakerCorrectionService(client).correct(TURNS))


def test_client_errors_are_wrapped():
    client = StubChatClient(error=openai.OpenAIError("connection reset"))
    with pytest.raises(OpenAIError) as excinfo:
        asyncio.run(OpenAISpeakerCorrectionService(client).correct(TURNS))
    assert "connection reset" in excinfo.value.message


class StaticCorrection(SpeakerCorrectionService):
    def __init__(self, result=None, error=None):
        self.result = result
        self.error = error

    async def correct(self, utterances):
        if self.error is not None:
            raise self.error
        return self.result


def _run(use_case, turns=TURNS, use_llm_correction=True):
    request = AttributeSpeakersRequest(utterances=list(turns), use_llm_correction=use_llm_correction)
    return asyncio.run(use_case.execute(request))


def test_use_case_applies_correction():
    corrected = [
        Utterance("Any fever?", SpeakerRole.PATIENT, "Patient"),
        Utterance("Yes, since Monday.", SpeakerRole.DOCTOR, "Doctor"),
    ]
    service = StaticCorrection(SpeakerCorrection(corrected, 0.9, analysis="swapped"))
    result = _run(AttributeSpeakersUseCase(TranscriptClassifier(), service))

    assert result.correction_applied is True
    assert result.correction_note == "swapped"
    assert [u.speaker for u in result.utterances] == [SpeakerRole.PATIENT, SpeakerRole.DOCTOR]


@pytest.mark.parametrize(
    "error,note",
    [
        (SpeakerCorrectionError("confidence 0.40 below 0.85"), "confidence 0.40 below 0.85"),
        (OpenAIError("timeout"), "OpenAI service error: timeout"),
    ],
)
def test_use_case_falls_back_to_heuristic(error, note):
    result = _run(AttributeSpeakersUseCase(TranscriptClassifier(), StaticCorrection(error=error)))

    assert result.correction_applied is False
    assert result.correction_note == note
    assert result.labeled_transcript == "[Doctor]: Any fever?\n\n[Patient]: Yes, since Monday."


def test_use_case_without_service_reports_unconfigured():
    result = _run(AttributeSpeakersUseCase(TranscriptClassifier()))
    assert result.correction_applied is False
    assert result.correction_note == "Speaker correction is not configured"


def test_use_case_skips_correction_unless_requested(fixed_clock):
    service = StaticCorrection(error=AssertionError("must not be called"))
    turns = [Utterance("Hello Mr. Sharma, please sit."), Utterance("I've been coughing.")]
    result = _run(AttributeSpeakersUseCase(TranscriptClassifier(), service, fixed_clock), turns, False)

    assert result.correction_note is None
    assert result.language == Locale.ENGLISH_INDIA
    assert result.patient_info.name == "Sharma"
    assert result.patient_info.time == "09:30"

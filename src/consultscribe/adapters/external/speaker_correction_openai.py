"""
Azure OpenAI implementation of the speaker correction service.

The model is asked to relabel every turn as Doctor or Patient and to report
its confidence. Its answer is only accepted when it parses cleanly, clears the
confidence threshold and carries no label other than Doctor/Patient.
"""

import json
import logging
import re
from dataclasses import replace
from typing import Any, Dict, List, Optional, Sequence

import openai
from pydantic import BaseModel, ConfigDict, Field, ValidationError

from ...application.ports.services.speaker_correction_service import (
    SpeakerCorrection,
    SpeakerCorrectionService,
)
from ...core.exceptions import OpenAIError, SpeakerCorrectionError
from ...domain.entities.utterance import Utterance
from ...domain.enums.speaker import SpeakerRole
from ...domain.errors import InvalidSpeakerLabelError

logger = logging.getLogger("consultscribe")

SYSTEM_PROMPT = "You are an expert medical conversation analyst."

CORRECTION_PROMPT = """Identify the speakers in this medical consultation transcript and fix incorrect speaker labels.

The transcript comes from a diarization system that may label turns "Speaker 1:", "Speaker 2:" or guess
Doctor/Patient wrongly.

Doctor speech: clinical terminology, diagnostic questions, explanations, instructions and prescriptions,
directive language ("I recommend...", "You should...", "Take this medication...").
Patient speech: personal symptoms and experiences in the first person ("I feel...", "My pain..."),
answers to the doctor's questions, questions about their own condition, lay terms.
Flow: the doctor usually opens with a greeting and questions; the patient describes symptoms; the doctor
follows up, explains and prescribes.

Rules:
- Label EVERY line "Doctor:" or "Patient:". Never output "Speaker N", "Unknown" or any other label.
- Keep the order and the spoken content of every line unchanged.
- Only correct labels you are highly confident about and report an overall confidence between 0 and 1.

TRANSCRIPT:
{transcript}

Return only a JSON object:
{{
  "correctedTranscript": "Doctor: ...\\nPatient: ...",
  "confidence": 0.95,
  "corrections": [{{"original": "Speaker 1", "corrected": "Doctor", "reason": "asks diagnostic questions"}}],
  "analysis": "Brief explanation of the correction reasoning"
}}"""

_CODE_FENCE = re.compile(r"^```(?:json)?\s*|\s*```$", re.IGNORECASE)
_LABELED_LINE = re.compile(r"^\[?(?P<label>[^\]:]{1,40})\]?:\s*(?P<text>.*)$")


class CorrectionPayload(BaseModel):
    model_config = ConfigDict(extra="ignore", populate_by_name=True)

    corrected_transcript: str = Field(alias="correctedTranscript")
    confidence: float = 0.0
    corrections: List[Dict[str, Any]] = Field(default_factory=list)
    analysis: str = ""


def render_transcript(utterances: Sequence[Utterance]) -> str:
    """Render turns as ``Label: text`` lines for the prompt."""
    lines = []
    for utterance in utterances:
        if utterance.is_trusted:
            label = utterance.speaker.value
        else:
            label = utterance.source_label or "Unknown"
        lines.append(f"{label}: {utterance.text}")
    return "\n".join(lines)


def extract_json_object(content: str) -> Dict[str, Any]:
    """Strip code fences and parse the outermost ``{...}`` block of a model reply."""
    text = _CODE_FENCE.sub("", (content or "").strip())
    first, last = text.find("{"), text.rfind("}")
    if first == -1 or last <= first:
        raise SpeakerCorrectionError("no JSON object in model response")
    try:
        payload = json.loads(text[first:last + 1])
    except json.JSONDecodeError as e:
        raise SpeakerCorrectionError("unparseable model response", {"error": str(e)}) from e
    if not isinstance(payload, dict):
        raise SpeakerCorrectionError("model response is not a JSON object")
    return payload


def parse_corrected_utterances(transcript: str) -> List[Utterance]:
    """Turn ``Doctor: ...`` / ``Patient: ...`` lines into trusted utterances.

    Any other label, or a line with no label, invalidates the whole correction.
    """
    utterances: List[Utterance] = []
    for line in transcript.splitlines():
        line = line.strip()
        if not line:
            continue
        match = _LABELED_LINE.match(line)
        if not match:
            raise SpeakerCorrectionError("unlabeled line in corrected transcript", {"line": line[:80]})
        try:
            speaker = SpeakerRole.parse(match.group("label"), strict=True)
        except InvalidSpeakerLabelError as e:
            raise SpeakerCorrectionError(e.message, e.details) from e
        text = match.group("text").strip()
        if text:
            utterances.append(Utterance(text=text, speaker=speaker, source_label=speaker.value))
    if not utterances:
        raise SpeakerCorrectionError("corrected transcript is empty")
    return utterances


class OpenAISpeakerCorrectionService(SpeakerCorrectionService):
    """Speaker correction through an Azure OpenAI chat deployment."""

    def __init__(
        self,
        client,
        min_confidence: float = 0.85,
        temperature: float = 0.1,
        max_tokens: Optional[int] = 4000,
    ) -> None:
        self._client = client
        self._min_confidence = min_confidence
        self._temperature = temperature
        self._max_tokens = max_tokens

    async def correct(self, utterances: Sequence[Utterance]) -> SpeakerCorrection:
        messages = [
            {"role": "system", "content": SYSTEM_PROMPT},
            {"role": "user", "content": CORRECTION_PROMPT.format(transcript=render_transcript(utterances))},
        ]
        try:
            response = await self._client.chat(
                messages,
                temperature=self._temperature,
                max_tokens=self._max_tokens,
            )
        except openai.OpenAIError as e:
            raise OpenAIError(str(e)) from e

        content = response.choices[0].message.content if response.choices else None
        if not content:
            raise SpeakerCorrectionError("empty model response")

        try:
            payload = CorrectionPayload.model_validate(extract_json_object(content))
        except ValidationError as e:
            raise SpeakerCorrectionError("model response missing required fields", {"errors": e.errors()}) from e

        if payload.confidence < self._min_confidence:
            raise SpeakerCorrectionError(
                f"confidence {payload.confidence:.2f} below {self._min_confidence:.2f}",
                {"confidence": payload.confidence},
            )

        labels = parse_corrected_utterances(payload.corrected_transcript)
        if len(labels) != len(utterances):
            raise SpeakerCorrectionError(
                "corrected transcript changed turn count",
                {"expected": len(utterances), "received": len(labels)},
            )
        # Only the labels are taken from the model; text and timing stay as submitted
        corrected = [
            replace(original, speaker=label.speaker, source_label=label.speaker.value)
            for original, label in zip(utterances, labels)
        ]
        logger.info(f"Speaker correction accepted with confidence {payload.confidence:.2f}")
        return SpeakerCorrection(
            utterances=corrected,
            confidence=payload.confidence,
            corrections=payload.corrections,
            analysis=payload.analysis,
        )

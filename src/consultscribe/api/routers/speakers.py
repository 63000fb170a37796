"""
Speaker attribution endpoints.
"""

import logging
from typing import List, Optional

from fastapi import APIRouter, Request, status

from ...application.dto.speaker_dto import AttributeSpeakersRequest
from ...application.speaker.language_detection import detect_language
from ...application.speaker.patient_detection import extract_patient_info
from ...application.utils.clinical_extraction import extract_clinical_details
from ...application.utils.diarized_transcript import format_diarized_transcript
from ...application.utils.speaker_mapping import map_speaker_labels, map_speaker_utterances
from ...application.utils.structure_dialogue import structure_dialogue
from ...domain.entities.utterance import DiarizedWord, LabeledUtterance, Utterance
from ...domain.enums.speaker import SpeakerRole
from ..deps import AttributeSpeakersUseCaseDep, SettingsDep
from ..errors import PayloadTooLargeError, ValidationError
from ..schemas.common import ApiResponse, ErrorResponse
from ..schemas.speakers import (
    ClassifySpeakersRequest,
    ClassifySpeakersResponse,
    ClinicalDetailsResponse,
    DiarizedTranscriptRequest,
    ExtractDetailsRequest,
    LabeledUtteranceOut,
    LanguageRequest,
    LanguageResponse,
    PatientInfoOut,
    TranscriptRequest,
    TranscriptResponse,
)
from ..utils.responses import ok

router = APIRouter(prefix="/speakers", tags=["Speakers"])
logger = logging.getLogger("consultscribe")


def _require_one_input(body: ClassifySpeakersRequest) -> None:
    if (body.transcript is None) == (body.utterances is None):
        raise ValidationError(
            "Provide exactly one of 'transcript' or 'utterances'",
            {"fields": ["transcript", "utterances"]},
        )


def _raw_length(body: ClassifySpeakersRequest) -> int:
    """Characters submitted, counted before any normalisation."""
    if body.transcript is not None:
        return len(body.transcript)
    return sum(
        len(item) if isinstance(item, str) else len(item.text or item.transcript or "")
        for item in body.utterances
    )


def _ingest(body: ClassifySpeakersRequest) -> List[Utterance]:
    if body.transcript is not None:
        utterances = structure_dialogue(body.transcript)
    else:
        utterances = structure_dialogue(
            item if isinstance(item, str) else item.to_record() for item in body.utterances
        )
    if body.remap_speaker_indices:
        utterances = map_speaker_utterances(utterances)
    return utterances


def _check_size(length: int, limit: int) -> None:
    if length > limit:
        raise PayloadTooLargeError(
            f"Transcript has {length} characters; the limit is {limit}",
            {"length": length, "limit": limit},
        )


@router.post(
    "/classify",
    response_model=ApiResponse[ClassifySpeakersResponse],
    status_code=status.HTTP_200_OK,
    responses={
        413: {"model": ErrorResponse, "description": "Transcript too large"},
        422: {"model": ErrorResponse, "description": "Invalid input"},
    },
)
async def classify_speakers(
    request: Request,
    body: ClassifySpeakersRequest,
    use_case: AttributeSpeakersUseCaseDep,
    settings: SettingsDep,
):
    """
    Label every turn of a consultation as Doctor or Patient.

    Turns already tagged Doctor/Patient are kept; everything else is
    classified in order with the rule-and-score classifier, optionally after
    a model-backed correction pass.
    """
    _require_one_input(body)
    _check_size(_raw_length(body), settings.speaker.max_transcript_chars)
    utterances = _ingest(body)

    result = await use_case.execute(
        AttributeSpeakersRequest(utterances=utterances, use_llm_correction=body.use_llm_correction)
    )
    data = ClassifySpeakersResponse(
        labeled_transcript=result.labeled_transcript,
        utterances=[LabeledUtteranceOut(**u.to_dict()) for u in result.utterances],
        language=result.language.value,
        patient_info=PatientInfoOut(**result.patient_info.to_dict()) if result.patient_info else None,
        correction_applied=result.correction_applied,
        correction_note=result.correction_note,
    )
    return ok(request, data=data, message="Speakers attributed")


@router.post("/remap", response_model=ApiResponse[TranscriptResponse])
async def remap_speakers(request: Request, body: TranscriptRequest, settings: SettingsDep):
    """Rewrite [Speaker 1]/[Speaker 2] tags to [Doctor]/[Patient] by convention."""
    _check_size(len(body.transcript), settings.speaker.max_transcript_chars)
    return ok(request, data=TranscriptResponse(transcript=map_speaker_labels(body.transcript)), message="OK")


@router.post("/patient-info", response_model=ApiResponse[Optional[PatientInfoOut]])
async def patient_info(request: Request, body: TranscriptRequest, settings: SettingsDep):
    """Surface the patient name greeted in the first turns, if any."""
    _check_size(len(body.transcript), settings.speaker.max_transcript_chars)
    info = extract_patient_info(body.transcript)
    data = PatientInfoOut(**info.to_dict()) if info else None
    return ok(request, data=data, message="OK" if info else "No patient name found")


@router.post("/language", response_model=ApiResponse[LanguageResponse])
async def language(request: Request, body: LanguageRequest):
    """Pick the speech-recognition locale from the script of a text span."""
    return ok(request, data=LanguageResponse(locale=detect_language(body.text).value), message="OK")


@router.post("/diarized", response_model=ApiResponse[TranscriptResponse])
async def diarized_transcript(request: Request, body: DiarizedTranscriptRequest):
    """Group word-level diarization output into tagged speaker turns."""
    words = [
        DiarizedWord(w.word, w.speaker_tag, w.start_time, w.end_time, w.confidence)
        for w in body.words
    ]
    transcript = format_diarized_transcript(words)
    if body.remap_roles:
        transcript = map_speaker_labels(transcript)
    return ok(request, data=TranscriptResponse(transcript=transcript), message="OK")


@router.post("/extract", response_model=ApiResponse[ClinicalDetailsResponse])
async def extract_details(request: Request, body: ExtractDetailsRequest):
    """Extract patient symptoms and doctor-prescribed medicines from labeled turns."""
    labeled = [
        LabeledUtterance(SpeakerRole.parse(u.speaker, strict=True), u.text)
        for u in body.utterances
    ]
    details = extract_clinical_details(labeled)
    data = ClinicalDetailsResponse(**details.to_dict())
    logger.info(
        f"Extracted {len(details.symptoms)} symptoms and {len(details.medications)} medicines"
    )
    return ok(request, data=data, message="OK")

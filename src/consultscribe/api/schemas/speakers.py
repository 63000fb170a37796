"""
Pydantic schemas for speaker attribution endpoints.
"""

from typing import Any, Dict, List, Optional, Union

from pydantic import AliasChoices, BaseModel, ConfigDict, Field


class UtteranceIn(BaseModel):
    """One transcript turn as delivered by a recognizer or client."""

    model_config = ConfigDict(extra="ignore")

    text: Optional[str] = Field(None, description="Spoken text")
    transcript: Optional[str] = Field(None, description="Spoken text (alternate key)")
    speaker: Optional[str] = Field(None, description="Upstream speaker label, e.g. 'Doctor' or 'Speaker 1'")
    start: Optional[float] = Field(None, validation_alias=AliasChoices("start", "ts_start"))
    end: Optional[float] = Field(None, validation_alias=AliasChoices("end", "ts_end"))

    def to_record(self) -> Dict[str, Any]:
        return self.model_dump(exclude_none=True)


class ClassifySpeakersRequest(BaseModel):
    """Request schema for labeling a transcript; send exactly one of transcript or utterances."""

    transcript: Optional[str] = Field(None, description="Newline-delimited turns, optionally tagged [Role]:")
    utterances: Optional[List[Union[UtteranceIn, str]]] = Field(None, description="Ordered turn records")
    use_llm_correction: bool = Field(False, description="Try model-backed correction before the heuristic")
    remap_speaker_indices: bool = Field(
        False, description="Treat Speaker 1/2 labels as Doctor/Patient before classifying"
    )


class LabeledUtteranceOut(BaseModel):
    speaker: str = Field(..., description="Doctor or Patient")
    text: str


class PatientInfoOut(BaseModel):
    name: str = Field(..., description="Greeted patient name")
    time: str = Field(..., description="Detection time, HH:MM")


class ClassifySpeakersResponse(BaseModel):
    """Response schema for a labeled transcript."""

    labeled_transcript: str = Field(..., description="[Role]: text turns separated by blank lines")
    utterances: List[LabeledUtteranceOut] = Field(default_factory=list)
    language: str = Field(..., description="Detected locale, e.g. en-IN")
    patient_info: Optional[PatientInfoOut] = None
    correction_applied: bool = False
    correction_note: Optional[str] = None


class TranscriptRequest(BaseModel):
    transcript: str = Field(..., description="Raw transcript text")


class TranscriptResponse(BaseModel):
    transcript: str


class LanguageRequest(BaseModel):
    text: str = Field(..., description="Text span to inspect")


class LanguageResponse(BaseModel):
    locale: str = Field(..., description="Speech-recognition locale")


class DiarizedWordIn(BaseModel):
    """Word-level diarization output; camelCase keys are accepted too."""

    word: str
    speaker_tag: int = Field(..., validation_alias=AliasChoices("speaker_tag", "speakerTag"))
    start_time: float = Field(..., validation_alias=AliasChoices("start_time", "startTime"))
    end_time: float = Field(..., validation_alias=AliasChoices("end_time", "endTime"))
    confidence: Optional[float] = None


class DiarizedTranscriptRequest(BaseModel):
    words: List[DiarizedWordIn] = Field(default_factory=list)
    remap_roles: bool = Field(False, description="Map Speaker 1/2 to Doctor/Patient")


class ExtractDetailsRequest(BaseModel):
    """Request schema for clinical extraction over labeled turns."""

    utterances: List[LabeledUtteranceOut] = Field(..., description="Turns labeled Doctor or Patient")


class MedicineOut(BaseModel):
    """Schema for individual medicine information extracted from the consultation."""

    name: str = Field(..., description="Name of the medicine")
    dose: Optional[str] = Field(None, description="Dosage information")
    frequency: Optional[str] = Field(None, description="Frequency of administration")
    duration: Optional[str] = Field(None, description="Duration of treatment")


class ClinicalDetailsResponse(BaseModel):
    symptoms: List[str] = Field(default_factory=list, description="Symptoms reported by the patient")
    medications: List[MedicineOut] = Field(default_factory=list, description="Medicines prescribed by the doctor")

"""
API schemas package.
"""

# Common schemas
from .common import ApiResponse, ErrorResponse

# Speaker attribution schemas
from .speakers import (
    ClassifySpeakersRequest,
    ClassifySpeakersResponse,
    ClinicalDetailsResponse,
    DiarizedTranscriptRequest,
    DiarizedWordIn,
    ExtractDetailsRequest,
    LabeledUtteranceOut,
    LanguageRequest,
    LanguageResponse,
    MedicineOut,
    PatientInfoOut,
    TranscriptRequest,
    TranscriptResponse,
    UtteranceIn,
)

__all__ = [
    "ApiResponse",
    "ErrorResponse",
    "ClassifySpeakersRequest",
    "ClassifySpeakersResponse",
    "ClinicalDetailsResponse",
    "DiarizedTranscriptRequest",
    "DiarizedWordIn",
    "ExtractDetailsRequest",
    "LabeledUtteranceOut",
    "LanguageRequest",
    "LanguageResponse",
    "MedicineOut",
    "PatientInfoOut",
    "TranscriptRequest",
    "TranscriptResponse",
    "UtteranceIn",
]

"""
Domain entities package.
"""

from .clinical import ClinicalDetails, Medication
from .utterance import DiarizedWord, LabeledUtterance, PatientInfo, Utterance

__all__ = [
    "Utterance",
    "LabeledUtterance",
    "PatientInfo",
    "DiarizedWord",
    "Medication",
    "ClinicalDetails",
]

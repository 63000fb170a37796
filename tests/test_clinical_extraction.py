"""
Clinical extraction tests.
"""

from consultscribe.application.utils.clinical_extraction import (
    extract_clinical_details,
    extract_medications,
    extract_symptoms,
)
from consultscribe.domain.entities.clinical import Medication
from consultscribe.domain.entities.utterance import LabeledUtterance
from consultscribe.domain.enums.speaker import SpeakerRole

CONSULTATION = [
    LabeledUtterance(SpeakerRole.PATIENT, "I've had headaches and a sore throat, and some fever."),
    LabeledUtterance(
        SpeakerRole.DOCTOR,
        "Take two tablets of Paracetamol 500mg twice daily for 5 days. Also Cetirizine at night.",
    ),
    LabeledUtterance(SpeakerRole.PATIENT, "I already take Ibuprofen 200mg for the fever."),
]


def test_symptoms_from_patient_turns_only():
    labeled = CONSULTATION + [LabeledUtterance(SpeakerRole.DOCTOR, "Any nausea?")]
    assert extract_symptoms(labeled) == ["headache", "sore throat", "fever"]


def test_medications_from_doctor_turns_only():
    assert extract_medications(CONSULTATION) == [
        Medication("Paracetamol", "500mg", "twice daily", "5 days"),
        Medication("Cetirizine", None, "at night", None),
    ]


def test_medicine_named_twice_is_reported_once():
    labeled = [
        LabeledUtterance(SpeakerRole.DOCTOR, "Start Amoxicillin 250mg three times a day."),
        LabeledUtterance(SpeakerRole.DOCTOR, "Continue the amoxicillin for a week."),
    ]
    assert extract_medications(labeled) == [
        Medication("Amoxicillin", "250mg", "three times a day", None),
    ]


def test_clinical_details_to_dict():
    details = extract_clinical_details(CONSULTATION).to_dict()
    assert details["symptoms"] == ["headache", "sore throat", "fever"]
    assert details["medications"][0] == {
        "name": "Paracetamol",
        "dose": "500mg",
        "frequency": "twice daily",
        "duration": "5 days",
    }


def test_no_turns():
    details = extract_clinical_details([])
    assert details.symptoms == []
    assert details.medications == []

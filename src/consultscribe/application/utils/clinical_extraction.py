"""
Rule-based extraction of symptoms and prescribed medicines.

Depends on speaker labels: symptoms are read from Patient turns only and
medicines from Doctor turns only, so a patient naming the tablet they already
take is not reported as a prescription.
"""

import re
from typing import Dict, List, Optional, Sequence

from ...domain.entities.clinical import ClinicalDetails, Medication
from ...domain.entities.utterance import LabeledUtterance
from ...domain.enums.speaker import SpeakerRole
from ..speaker.features import split_sentences

_SYMPTOM = re.compile(
    r"\b(sore throat|runny nose|blocked nose|chest pain|back pain|stomach ache|abdominal pain|"
    r"shortness of breath|loss of appetite|body ache|joint pain|"
    r"headaches?|migraine|fever|cough|cold|nausea|vomiting|diarrh(?:o)?ea|dizziness|fatigue|"
    r"weakness|rash|chills|itching|swelling|cramps|congestion|insomnia|pain)\b",
    re.IGNORECASE,
)

# Medicines recognised by name even when no dose is spoken
KNOWN_MEDICINES = (
    "Paracetamol", "Ibuprofen", "Aspirin", "Amoxicillin", "Azithromycin",
    "Metformin", "Omeprazole", "Atorvastatin", "Cetirizine", "Pantoprazole",
    "Dolo", "Crocin", "Montelukast", "Amlodipine", "Losartan",
)
_KNOWN_MEDICINE = re.compile(r"\b(" + "|".join(KNOWN_MEDICINES) + r")\b", re.IGNORECASE)

_DOSE = r"\d+(?:\.\d+)?\s?(?:mg|mcg|ml|g)"
_NAMED_DOSE = re.compile(rf"\b([A-Z][A-Za-z-]{{2,}})\s+({_DOSE})\b")
_DOSE_ONLY = re.compile(rf"\b({_DOSE})\b", re.IGNORECASE)

_FREQUENCY = re.compile(
    r"\b((?:once|twice|thrice|(?:one|two|three|four|\d+) times?)\s+(?:a\s+|per\s+)?(?:day|daily|week|weekly)"
    r"|every\s+\d+\s+hours|at\s+(?:bedtime|night)|as\s+needed|(?:before|after)\s+meals|daily)\b",
    re.IGNORECASE,
)
_DURATION = re.compile(
    r"\bfor\s+((?:\d+|a|one|two|three|four|five|six|seven|ten)\s+(?:days?|weeks?|months?))\b",
    re.IGNORECASE,
)

# Capitalised sentence openers that precede a dose without naming a medicine
_NOT_MEDICINE = {"take", "use", "apply", "start", "continue", "give", "have", "try", "about", "only"}


def _canonical_symptom(term: str) -> str:
    term = term.lower()
    return "headache" if term == "headaches" else term


def extract_symptoms(labeled: Sequence[LabeledUtterance]) -> List[str]:
    """Symptoms mentioned in Patient turns, de-duplicated in first-mention order."""
    seen: Dict[str, None] = {}
    for turn in labeled:
        if turn.speaker != SpeakerRole.PATIENT:
            continue
        for match in _SYMPTOM.finditer(turn.text):
            seen.setdefault(_canonical_symptom(match.group(1)), None)
    return list(seen)


def _search(pattern: "re.Pattern[str]", text: str) -> Optional[str]:
    match = pattern.search(text)
    return match.group(1) if match else None


def _medications_in_sentence(sentence: str) -> List[Medication]:
    found: List[Medication] = []
    names = set()
    frequency = _search(_FREQUENCY, sentence)
    duration = _search(_DURATION, sentence)

    for match in _NAMED_DOSE.finditer(sentence):
        name = match.group(1)
        if name.lower() in _NOT_MEDICINE:
            continue
        names.add(name.lower())
        found.append(Medication(name, match.group(2), frequency, duration))

    for match in _KNOWN_MEDICINE.finditer(sentence):
        name = match.group(1)
        if name.lower() in names:
            continue
        names.add(name.lower())
        dose = _search(_DOSE_ONLY, sentence[match.end():])
        found.append(Medication(name[0].upper() + name[1:], dose, frequency, duration))
    return found


def extract_medications(labeled: Sequence[LabeledUtterance]) -> List[Medication]:
    """Medicines named in Doctor turns with the dose, frequency and duration stated alongside."""
    medications: Dict[str, Medication] = {}
    for turn in labeled:
        if turn.speaker != SpeakerRole.DOCTOR:
            continue
        for sentence in split_sentences(turn.text):
            for medication in _medications_in_sentence(sentence):
                medications.setdefault(medication.name.lower(), medication)
    return list(medications.values())


def extract_clinical_details(labeled: Sequence[LabeledUtterance]) -> ClinicalDetails:
    return ClinicalDetails(
        symptoms=extract_symptoms(labeled),
        medications=extract_medications(labeled),
    )

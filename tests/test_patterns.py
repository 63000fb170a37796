"""
Pattern library tests.
"""

from consultscribe.application.speaker.patterns import (
    DOCTOR_OVERRIDE_PATTERNS,
    DOCTOR_PATTERNS,
    GREETING_PATTERNS,
    PATIENT_OVERRIDE_PATTERNS,
    PATIENT_PATTERNS,
    count_matches,
    cue_profile,
    matches_any,
    normalize,
)


def test_normalize_trims_and_lowercases():
    assert normalize("  Hello THERE ") == "hello there"
    assert normalize(None) == ""


def test_greeting_is_matched_case_insensitively():
    assert matches_any(GREETING_PATTERNS, "Good Morning, Mr. Rao")
    assert matches_any(GREETING_PATTERNS, "NAMASTE ji")
    assert not matches_any(GREETING_PATTERNS, "Well, hello there")


def test_doctor_override_openers():
    assert matches_any(DOCTOR_OVERRIDE_PATTERNS, "Take two tablets after food")
    assert matches_any(DOCTOR_OVERRIDE_PATTERNS, "Based on your reports, it is viral")
    assert matches_any(DOCTOR_OVERRIDE_PATTERNS, "You should rest for a few days")
    assert not matches_any(DOCTOR_OVERRIDE_PATTERNS, "I'll take the bus home")


def test_patient_override_openers():
    assert matches_any(PATIENT_OVERRIDE_PATTERNS, "I've been coughing all night")
    assert matches_any(PATIENT_OVERRIDE_PATTERNS, "I'm not feeling well")
    assert matches_any(PATIENT_OVERRIDE_PATTERNS, "No, I don't smoke")
    assert not matches_any(PATIENT_OVERRIDE_PATTERNS, "Is it serious?")


def test_count_matches_sums_every_pattern():
    text = "The diagnosis is hypertension and the treatment is therapy"
    assert count_matches(DOCTOR_PATTERNS.medical_terms, text) == 4


def test_patient_groups():
    assert matches_any(PATIENT_PATTERNS.symptoms, "It hurts when I walk")
    assert matches_any(PATIENT_PATTERNS.responses, "Sometimes, in the evening")
    assert matches_any(PATIENT_PATTERNS.questions, "Is it serious?")
    assert matches_any(PATIENT_PATTERNS.history, "It runs in my family")


def test_cue_profile_reports_every_group():
    profile = cue_profile("Take this medicine twice daily")
    assert len(profile) == 9
    assert profile["doctor_directives"] is True
    assert profile["doctor_prescriptions"] is True
    assert profile["patient_symptoms"] is False
    assert profile["patient_history"] is False

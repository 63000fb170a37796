"""
Shared constants for Consult-Scribe.
"""

# Fixed convention for two-speaker diarization: first speaker index is the doctor
SPEAKER_INDEX_ROLES = {
    1: "Doctor",
    2: "Patient",
}

# Words the name detector must never report as a patient name
NON_NAME_WORDS = {
    "the", "and", "for", "not", "but", "you", "all", "any", "can", "had", "has",
    "have", "her", "his", "one", "our", "out", "she", "that", "this", "was",
    "were", "who", "will", "with", "there", "they", "then", "than", "some",
    "yes", "no", "okay", "fine", "sure", "please", "thanks", "welcome",
    "here", "today", "tomorrow", "doctor", "patient", "nurse", "sir", "madam",
    # Words that follow "I am" / "I have" / "Doctor, ..." in ordinary speech
    "been", "feeling", "having", "a", "an", "so", "very", "really",
    "good", "better", "worse", "how", "what", "again", "everyone",
    "i", "im", "it", "is", "my", "pain", "fever", "headache", "sorry",
}

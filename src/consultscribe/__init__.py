"""
Consult-Scribe: speaker attribution for doctor-patient consultations

Labels transcribed consultation turns as Doctor or Patient using linguistic
patterns, per-utterance features and running conversational context, and
exposes the engine over a small FastAPI service.
"""

__version__ = "0.1.0"
__author__ = "Consult-Scribe Team"
__description__ = "Doctor/patient speaker attribution for consultation transcripts"

"""
Pattern library characterising doctor-like and patient-like speech.

Every group is an ordered tuple of compiled, case-insensitive regexes. A group
matches an utterance when at least one of its patterns is found in the
lower-cased, trimmed text. Most patterns anchor at the start of the utterance;
vocabulary patterns (dosage units, jargon, symptoms) are word-boundary matches
anywhere in the text.
"""

import re
from dataclasses import dataclass
from typing import Dict, Iterable, Pattern, Tuple

PatternGroup = Tuple[Pattern[str], ...]


def _compile(*patterns: str) -> PatternGroup:
    return tuple(re.compile(p, re.IGNORECASE) for p in patterns)


def normalize(text: str) -> str:
    """Lower-case and trim an utterance before matching."""
    return (text or "").strip().lower()


def matches_any(group: Iterable[Pattern[str]], text: str) -> bool:
    """True if any pattern in the group matches the normalised text."""
    lowered = normalize(text)
    return any(pattern.search(lowered) for pattern in group)


def count_matches(group: Iterable[Pattern[str]], text: str) -> int:
    """Total non-overlapping matches of every pattern in the group."""
    lowered = normalize(text)
    return sum(len(pattern.findall(lowered)) for pattern in group)


@dataclass(frozen=True)
class DoctorPatterns:
    questions: PatternGroup
    explanations: PatternGroup
    directives: PatternGroup
    prescriptions: PatternGroup
    medical_terms: PatternGroup


@dataclass(frozen=True)
class PatientPatterns:
    symptoms: PatternGroup
    responses: PatternGroup
    questions: PatternGroup
    history: PatternGroup


DOCTOR_PATTERNS = DoctorPatterns(
    # Questions doctors typically ask
    questions=_compile(
        r"^(how|what|when|where|why|do you|are you|have you|can you|did you|is there|are there|does it|has this)",
        r"^any (fever|pain|discomfort|symptoms|nausea|difficulty|trouble|issues|medication|allergies|history)",
        r"^(tell me about|describe|explain|elaborate on)",
        r"^(let me|i('ll| will) take|i need to)",
        r"^(how (long|often|frequently|severe|bad)|when did)",
        r"^(do you (feel|have|experience|get|take)|are you (feeling|experiencing|having))",
        r"^(is it|does it|has it|could be|seems like|looks like|sounds like)",
    ),
    # Authoritative explanations and diagnoses
    explanations=_compile(
        r"^(your|the|these|those|this|that) (test results|bloodwork|scan|x-ray|levels|numbers|symptoms|condition)",
        r"^(it('s| is) (likely|probably|possibly|definitely|just|only))",
        r"^(based on|according to|given|i think|i believe|i suspect|it appears|it seems|it could be)",
        r"^(you (have|need|should|might|may|could|must|will need)|we (should|need|will|can|could|might))",
        r"^(i('d| would) (recommend|suggest|advise|like|want)|let's)",
        r"^(that('s| is) (normal|common|unusual|concerning|expected|fine|okay|good|not good))",
    ),
    # Instructions to patients
    directives=_compile(
        r"^(take|use|apply|try|avoid|reduce|increase|continue with|stop)\b",
        r"^(i('ll| will) (prescribe|give|recommend|refer|schedule))",
        r"^(come back|return|follow up|check in|call|contact|see me)\b",
        r"^(say|open|close|breathe|cough|lift|move|turn|relax|deep breath)\b",
    ),
    # Prescription and dosage vocabulary
    prescriptions=_compile(
        r"\b(prescribe|prescription|take|dosage|dose|tablets?|capsules?|pills?|syrup|injection|medication|medicine|drug|antibiotics?|cream|ointment|drops)\b",
        r"\b(twice|thrice|daily|once|every|morning|night|evening|before|after|meals?|empty stomach)\b",
        r"(?:\d\s?|\b)(mg|mcg|ml|milligrams?|grams?|g)\b",
        r"^(for|until|over|the next) \d+ (days|weeks|months)",
        r"\b(side effects|allergic reaction|refill|pharmacy)\b",
    ),
    # Basic clinical vocabulary
    medical_terms=_compile(
        r"\b(diagnosis|prognosis|chronic|acute|symptom|inflammation|prescription|dosage|treatment|therapy|medication|antibiotic|analgesic|consultation|referral|examination|assessment)\b",
        r"\b(hypertension|diabetes|arthritis|asthma|thyroid|cholesterol|infection|virus|bacteria|fungal|autoimmune|neurological)\b",
        r"\b(cardiac|pulmonary|renal|hepatic|dermatological|gastrointestinal|musculoskeletal|endocrine|respiratory|cardiovascular)\b",
    ),
)


PATIENT_PATTERNS = PatientPatterns(
    # First-person symptom self-report
    symptoms=_compile(
        r"^(i('ve| have|'m| am) (been|feeling|having|getting|experiencing|noticing|suffering))",
        r"^(it (feels|hurts|aches|burns|itches|started|began|comes|goes|gets))",
        r"^(my (head|throat|chest|stomach|back|arm|leg|neck|foot|ear|eye|nose) (hurts|aches|feels|is))",
        r"^(i (feel|hurt|ache|can't|don't|haven't|won't|didn't|isn't|aren't|wasn't|weren't))",
        r"^(the pain|this feeling|the sensation|the discomfort|the issue|the problem)",
    ),
    # Short answers to the doctor's questions
    responses=_compile(
        r"^(yes|no|sometimes|occasionally|rarely|never|always|usually|not really|kind of|sort of|maybe|i think so)\b",
        r"^(about|around|approximately|like|probably|possibly|definitely|absolutely|actually|honestly)\b",
        r"^(a (little|bit|lot|few|couple)|some|many|much|several|plenty|hardly any|barely any)\b",
        r"^(in the (morning|evening|afternoon|night)|during the day|at night|while|when|after|before)\b",
        r"^(only when|especially when|mostly when|every time|whenever)\b",
    ),
    # Questions patients ask about their condition
    questions=_compile(
        r"^(is that|does that|will this|should i|can i|do i need|how long|how often|how bad)",
        r"^(what (about|should|could|is|does|will|causes|caused)|when (can|should|will|is))",
        r"^(will i (need|have to|be able to)|can i (still|go|eat|drink|take))",
        r"^(is (it|this|that) (serious|normal|bad|concerning|dangerous|common|contagious))",
    ),
    # Personal and family history
    history=_compile(
        r"^(i('ve| have) (had|been diagnosed with|suffered from|struggled with))",
        r"^(it runs in (my|the) family)",
        r"^(my (mother|father|parents|sibling|brother|sister|grandparent)) (has|had|have)",
        r"^(this happened (before|previously|last year|last month|last week))",
    ),
)


def cue_profile(text: str) -> Dict[str, bool]:
    """Which doctor and patient pattern groups an utterance hits."""
    profile = {}
    for prefix, patterns in (("doctor", DOCTOR_PATTERNS), ("patient", PATIENT_PATTERNS)):
        for name, group in vars(patterns).items():
            profile[f"{prefix}_{name}"] = matches_any(group, text)
    return profile


# Opening greetings; only decisive on the first turn of a session
GREETING_PATTERNS = _compile(
    r"^(hello|hi|hey|good (morning|afternoon|evening)|namaste|namaskar|welcome)\b",
)

# High-precision openers that decide the speaker without scoring
DOCTOR_OVERRIDE_PATTERNS = _compile(
    r"^(i would like to|i('ll| will) prescribe|let me|i recommend)",
    r"^(based on|according to|looking at) (your|the|these)",
    r"^(take|use) (this|these|the|two|three|four|one)\b",
    r"^(we need to|you should|you need to|you must)",
)

PATIENT_OVERRIDE_PATTERNS = _compile(
    r"^i('m| am) (not )?feeling",
    r"^i('ve| have) been",
    r"^(my|i('ve| have)|the) (pain|headache|problem|issue)",
    r"^(yes|no),? (doctor|i (have|had|am|do|don't|can't))",
)


# Vocabulary counted by the feature extractor
FIRST_PERSON_PATTERN = re.compile(r"\b(i|i'm|i've|i'll|i'd|my|mine|me|myself)\b", re.IGNORECASE)

SUBORDINATOR_PATTERN = re.compile(
    r"\b(because|since|although|though|unless|whereas|while|if|whether|until|so that|in order to)\b",
    re.IGNORECASE,
)

CONNECTIVE_PATTERN = re.compile(
    r"\b(however|therefore|moreover|furthermore|consequently|nevertheless|additionally|thus|hence|otherwise)\b",
    re.IGNORECASE,
)

DIRECTIVE_PATTERNS = _compile(
    r"\b(take|use|apply|avoid|reduce|increase|continue|stop|start|drink|rest|follow up|come back|schedule|monitor|check)\b",
    r"\b(you should|you must|you need to|you have to|make sure|be sure to|don't forget to|i recommend|i suggest|i advise)\b",
)

SYMPTOM_VOCABULARY_PATTERN = re.compile(
    r"\b(pain|painful|aches?|aching|hurts?|hurting|sore|headaches?|migraine|fever|feverish|cough(ing)?|nausea|nauseous|"
    r"vomit(ing)?|dizzy|dizziness|tired|fatigue|itch(y|ing)?|burning|swollen|swelling|cramps?|discomfort|bleeding|"
    r"rash|chills|weak|weakness|stiff(ness)?|numb(ness)?|throbbing|sneez(e|ing)|congest(ed|ion)|runny|breathless)\b",
    re.IGNORECASE,
)

TECHNICAL_JARGON_PATTERNS = _compile(
    r"\b(differential diagnosis|pathophysiology|comorbidit(y|ies)|etiology|aetiology|idiopathic|prophylaxis|prophylactic)\b",
    r"\b(contraindicat(ed|ion)|pharmacokinetics?|titrat(e|ion)|sequelae|benign|malignan(t|cy)|metasta(sis|tic))\b",
    r"\b(auscultation|palpation|tachycardia|bradycardia|dyspnea|edema|oedema|erythema|lesion|biopsy|histolog(y|ical))\b",
)

# Turn-level flags kept on the conversation context
SYMPTOM_CONTEXT_PATTERN = re.compile(
    r"pain|hurt|feel|symptom|problem|issue|" + SYMPTOM_VOCABULARY_PATTERN.pattern,
    re.IGNORECASE,
)

# Leading role tag such as "[Doctor]:" or "[Speaker 2]:"
SPEAKER_TAG_PATTERN = re.compile(r"^\s*\[(?P<label>[^\]]+)\]:\s*")

"""Fixed vocabularies for the intent parser: exercises, activities, body parts."""

from __future__ import annotations

import re

# Ordered most-specific first so "leg curls" never resolves to "Bicep Curl".
EXERCISE_LEXICON: tuple[tuple[str, str], ...] = (
    (r"leg\s*curls?", "Leg Curl"),
    (r"leg\s*extensions?", "Leg Extension"),
    (r"leg\s*press", "Leg Press"),
    (r"triceps?\s*push\s*downs?", "Tricep Pushdown"),
    (r"triceps?\s*extensions?", "Tricep Extension"),
    (r"push\s*downs?", "Tricep Pushdown"),
    (r"(?:biceps?\s*)?curls?", "Bicep Curl"),
    (r"bench(?:\s*press)?", "Bench Press"),
    (r"overhead\s*press", "Overhead Press"),
    (r"military\s*press", "Military Press"),
    (r"shoulder\s*press", "Shoulder Press"),
    (r"squats?", "Squat"),
    (r"deadlifts?", "Deadlift"),
    (r"lat\s*pull\s*downs?", "Lat Pulldown"),
    (r"pull\s*-?\s*ups?", "Pull-Up"),
    (r"chin\s*-?\s*ups?", "Chin-Up"),
    (r"face\s*pulls?", "Face Pull"),
    (r"(?:calf|calves)\s*raises?", "Calf Raise"),
    (r"lateral\s*raises?", "Lateral Raise"),
    (r"front\s*raises?", "Front Raise"),
    (r"rows?", "Row"),
    (r"lunges?", "Lunge"),
    (r"dips?", "Dip"),
    (r"shrugs?", "Shrug"),
    (r"planks?", "Plank"),
    (r"crunch(?:es)?", "Crunch"),
)

EXERCISE_PATTERNS: tuple[tuple[re.Pattern[str], str], ...] = tuple(
    (re.compile(rf"\b{pattern}\b", re.IGNORECASE), name)
    for pattern, name in EXERCISE_LEXICON
)

# Spoken variants that the lexicon patterns do not already cover
EXERCISE_SYNONYMS: dict[str, str] = {
    "curl": "Bicep Curl",
    "curls": "Bicep Curl",
    "bicep curl": "Bicep Curl",
    "bicep curls": "Bicep Curl",
    "bench": "Bench Press",
    "ohp": "Overhead Press",
    "rdl": "Romanian Deadlift",
    "rdls": "Romanian Deadlift",
    "pullup": "Pull-Up",
    "pullups": "Pull-Up",
    "chinup": "Chin-Up",
    "chinups": "Chin-Up",
    "lat pull down": "Lat Pulldown",
}

CARDIO_ACTIVITIES: tuple[tuple[re.Pattern[str], str], ...] = (
    (re.compile(r"\b(?:ran|run|runs|running|jog|jogs|jogged|jogging)\b", re.I), "Running"),
    (re.compile(r"\b(?:walk|walks|walked|walking|hike|hiked|hiking)\b", re.I), "Walking"),
    (re.compile(r"\b(?:bike|biked|biking|cycle|cycled|cycling|rode)\b", re.I), "Cycling"),
    (re.compile(r"\b(?:swim|swims|swam|swimming)\b", re.I), "Swimming"),
    (re.compile(r"\b(?:rowed|rowing|erg)\b", re.I), "Rowing"),
)

BODY_PART_CONSTRAINTS: dict[str, str] = {
    "knee": "no_knee_flexion",
    "knees": "no_knee_flexion",
    "back": "no_spinal_loading",
    "lower_back": "no_spinal_loading",
    "shoulder": "no_overhead",
    "shoulders": "no_overhead",
    "wrist": "no_grip_intensive",
    "wrists": "no_grip_intensive",
    "elbow": "no_elbow_extension",
    "elbows": "no_elbow_extension",
    "hip": "no_hip_hinge",
    "hips": "no_hip_hinge",
    "ankle": "no_ankle_mobility",
    "ankles": "no_ankle_mobility",
    "neck": "no_neck_strain",
}

LOWER_BACK_PART = "lower_back"

# Words a pain pattern can capture that are not body parts
NOT_BODY_PARTS = frozenset({
    "it", "this", "that", "everything", "everywhere", "all", "so", "really",
    "a", "the", "me", "today", "still", "bit", "little", "kinda", "just",
})

POSITIVE_WORDS = re.compile(
    r"\b(?:great|awesome|amazing|good|nice|love|loving|excited|pumped|ready|"
    r"let'?s\s+go|yeah|yes|yay)\b",
    re.IGNORECASE,
)
NEGATIVE_WORDS = re.compile(
    r"\b(?:bad|terrible|awful|hate|sucks|frustrated|annoyed|angry|ugh|damn|crap)\b",
    re.IGNORECASE,
)


def title_case(text: str) -> str:
    return " ".join(word[:1].upper() + word[1:].lower() for word in text.split())


def find_exercise(text: str) -> str | None:
    """Canonical name of the first lexicon exercise mentioned in *text*."""
    for pattern, name in EXERCISE_PATTERNS:
        if pattern.search(text):
            return name
    return None


def normalize_exercise_name(raw: str) -> str:
    """Map a free-text exercise name to its canonical form.

    Lexicon and synonym hits resolve to the canonical name; anything else
    passes through title-cased.
    """
    cleaned = " ".join(raw.lower().replace("_", " ").split())
    if cleaned in EXERCISE_SYNONYMS:
        return EXERCISE_SYNONYMS[cleaned]
    known = find_exercise(cleaned)
    if known is not None:
        return known
    return title_case(cleaned)


def find_activity(text: str) -> str | None:
    for pattern, activity in CARDIO_ACTIVITIES:
        if pattern.search(text):
            return activity
    return None


def constraint_for(body_part: str) -> str:
    """Machine-actionable movement constraint for a sore or injured body part."""
    return BODY_PART_CONSTRAINTS.get(body_part, f"no_{body_part}_strain")

"""Compiled pattern families for the intent parser.

Each family is an ordered tuple; the first pattern that matches wins.
"""

from __future__ import annotations

import re

_I = re.IGNORECASE
_NUM = r"(\d+(?:\.\d+)?)"

# "3x10", "3 sets of 10 reps", "3 sets at 10", "did 3 sets of 10"
SETS_REPS = (
    re.compile(r"\b(\d+)\s*[x×]\s*(\d+)\b", _I),
    re.compile(r"\b(\d+)\s*sets?\s*(?:of\s*)?(\d+)\s*reps?\b", _I),
    re.compile(r"\b(\d+)\s*sets?\s*(?:@|at|of|x)?\s*(\d+)\b", _I),
)
SETS_ONLY = re.compile(r"\b(\d+)\s*sets?\b", _I)

# (pattern, unit); a None unit means the default weight unit
WEIGHT = (
    (re.compile(rf"{_NUM}\s*(?:lbs?|pounds?)\b", _I), "lbs"),
    (re.compile(rf"{_NUM}\s*(?:kgs?|kilos?|kilograms?)\b", _I), "kg"),
    (re.compile(rf"(?:\bwith|\bat|@)\s*{_NUM}\b(?!\s*(?:reps?|sets?|mins?|minutes?))", _I), None),
)
# "bench 225 for 5"
WEIGHT_FOR_REPS = re.compile(rf"{_NUM}\s+for\s+(\d+)\b", _I)

RPE = (
    re.compile(rf"\brpe\s*(?:of\s*)?{_NUM}", _I),
    re.compile(rf"@\s*{_NUM}\b(?!\s*(?:lbs?|pounds?|kgs?|kilos?))", _I),
)
RPE_MAX = 10.0

# Words that end the free-text exercise name captured around "3x10"
NAME_STOP_WORDS = frozenset({
    "with", "at", "for", "and", "rpe", "lbs", "lb", "kg", "kgs", "pounds",
    "kilos", "each", "per", "then", "in", "on",
})
NAME_FILLER_WORDS = frozenset({
    "of", "reps", "rep", "sets", "set", "x", "did", "done", "just", "i",
    "finished", "completed", "some", "the", "a", "my",
})
NAME_MAX_WORDS = 3
WORD = re.compile(r"[a-z][a-z'\-]*", _I)

# (pattern, unit) for cardio distance
DISTANCE = (
    (re.compile(rf"{_NUM}\s*(?:k|km|kms|kilometers?|kilometres?)\b", _I), "km"),
    (re.compile(rf"{_NUM}\s*(?:mi|miles?)\b", _I), "mi"),
    (re.compile(rf"{_NUM}\s*(?:m|meters?|metres?)\b", _I), "m"),
)

# (pattern, minutes-per-unit); the clock pattern is handled separately
DURATION_CLOCK = re.compile(r"\b(\d+)\s*:\s*(\d{2})\b")
DURATION = (
    (re.compile(rf"{_NUM}\s*(?:mins?|minutes?)\b", _I), 1.0),
    (re.compile(rf"{_NUM}\s*(?:h|hrs?|hours?)\b", _I), 60.0),
    (re.compile(rf"\bin\s+{_NUM}\b(?!\s*(?:k|km|mi|miles?|m|meters?)\b)", _I), 1.0),
)

ADD_EXERCISE = re.compile(
    r"^\s*(?:let'?s\s+|can\s+(?:we|i)\s+|i\s+want\s+to\s+|please\s+)?"
    r"(?:add|throw\s+in|toss\s+in)\s+(?:(?:some|a|an|the|in)\s+)?(?P<rest>.+?)\s*[.!?]*\s*$",
    _I,
)
ADD_VERB = re.compile(r"^\s*(?:add|throw\s+in|toss\s+in)\b", _I)

SKIP_NAMED = re.compile(
    r"\b(?:skip|skipping|pass\s+on)\s+(?:the\s+|my\s+)?(?P<rest>[a-z][a-z\s\-]*?)"
    r"\s*(?:today|for\s+now|please)?\s*[.!?]*\s*$",
    _I,
)
SKIP_FILLER = frozenset({"this", "that", "it", "one", "exercise", "this one", "that one",
                         "over", "ahead", "this exercise", "that exercise", "them"})

PAIN = (
    re.compile(r"(?:\bmy\s+)?\b(\w+)\s+(?:hurts?|is\s+hurting|aches?|is\s+aching|pain)\b", _I),
    re.compile(r"\b(?:pain|ache|sore|soreness)\s+(?:in\s+)?(?:my\s+)?(\w+)", _I),
    re.compile(r"\binjured?\s+(?:my\s+)?(\w+)", _I),
    re.compile(r"\b(\w+)\s+(?:injury|strain|sprain)\b", _I),
    re.compile(r"\b(?:pulled|tweaked|strained)\s+(?:my\s+)?(\w+)", _I),
)
LOWER_BACK = re.compile(r"\blower\s+back\b", _I)

TIME_CRUNCH = (
    re.compile(r"\b(?:running|run)\s+(?:late|short)\b", _I),
    re.compile(r"\b(?:short|low)\s+(?:on\s+)?time\b", _I),
    re.compile(r"\b(?:gotta|have\s+to|need\s+to)\s+(?:go|leave|run)\s+(?:soon|early)\b", _I),
    re.compile(r"\b(?:only\s+have|only\s+got|got)\s+(\d+)\s*(?:mins?|minutes?)\b", _I),
    re.compile(r"\b(?:rush|hurry)\b", _I),
    re.compile(r"\b(?:quick|fast)\s+(?:session|workout)\b", _I),
)
AVAILABLE_MINUTES = re.compile(r"\b(\d+)\s*(?:mins?|minutes?)\b", _I)

FATIGUE = (
    re.compile(r"\b(?:feeling|feel|i'm|im|i\s+am)\s+(?:so\s+|really\s+)?"
               r"(?:tired|exhausted|fatigued|beat|drained|wiped)\b", _I),
    re.compile(r"\b(?:didn't|didnt|did\s+not)\s+(?:sleep|rest)\s+(?:well|good|enough)\b", _I),
    re.compile(r"\b(?:low|no)\s+(?:energy|motivation)\b", _I),
    re.compile(r"\b(?:rough|bad|hard)\s+(?:day|night|week)\b", _I),
    re.compile(r"\b(?:sore|stiff)\s+(?:all\s+over|everywhere)\b", _I),
)

TOO_EASY = (
    re.compile(r"\b(?:too|way\s+too)\s+(?:easy|light)\b", _I),
    re.compile(r"\b(?:not|isn't|isnt)\s+(?:challenging|hard)\s+enough\b", _I),
    re.compile(r"\b(?:can|could)\s+(?:do|go)\s+(?:more|heavier|harder)\b", _I),
    re.compile(r"\b(?:bump|add)\s+(?:up|more)\s+(?:the\s+)?(?:weight|load)\b", _I),
    re.compile(r"\b(?:feels?|feeling)\s+(?:light|easy)\b", _I),
)

TOO_HARD = (
    re.compile(r"\b(?:too|way\s+too)\s+(?:hard|heavy)\b", _I),
    re.compile(r"\b(?:can't|cant|cannot)\s+(?:do|lift|handle)\s+(?:this|that|it)\b", _I),
    re.compile(r"\bstruggl(?:e|ing)\b", _I),
    re.compile(r"\b(?:drop|lower|reduce)\s+(?:the\s+)?(?:weight|load)\b", _I),
    re.compile(r"\b(?:this|that)\s+(?:is|was)\s+(?:brutal|killer|tough)\b", _I),
)

ADD_SET = (
    re.compile(r"\b(?:another|one\s+more|an?\s+extra|extra)\s+set\b", _I),
    re.compile(r"\badd\s+(?:a\s+)?sets?\b", _I),
)

SKIP = (
    re.compile(r"\b(?:skip|pass\s+on)\b", _I),
    re.compile(r"\b(?:don't|dont|do\s+not)\s+(?:want\s+to|wanna)\s+(?:do|try)\s+(?:this|that)\b", _I),
    re.compile(r"\bmove\s+on\b", _I),
    re.compile(r"^\s*next(?:\s+(?:exercise|one))?\s*[.!]*\s*$", _I),
)

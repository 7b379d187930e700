"""Intent parser — free text to structured coaching intents."""

from adaptive_coach.intent.parser import parse_intent, to_modification_kind

__all__ = ["parse_intent", "to_modification_kind"]

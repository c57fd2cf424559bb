"""
Resolvers turn free text into booking fields.

Every resolver is a case-insensitive substring test against the vocabulary,
first match wins. "No match" is a normal result (None or an empty tuple),
the caller turns it into a clarification prompt.
"""

from datetime import date, timedelta
from typing import Callable, Optional, Tuple

from vocabulary import DEFAULT_VOCABULARY, Vocabulary

MONDAY = 0


def next_monday(today: date) -> date:
    """Nearest Monday strictly after today (a week ahead when today is Monday)."""
    return today + timedelta(days=(MONDAY - today.weekday()) % 7 or 7)


class DateResolver:

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY,
                 today: Callable[[], date] = date.today):
        self.vocabulary = vocabulary
        self.today = today

    def resolve(self, text: str) -> Optional[date]:
        lower = text.lower()
        today = self.today()
        if "next monday" in lower:
            return next_monday(today)
        if "tomorrow" in lower:
            return today + timedelta(days=1)
        for phrases, fixed in self.vocabulary.literal_dates:
            if any(p in lower for p in phrases):
                return fixed
        if "today" in lower:
            return today
        return None


class SlotResolver:

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY):
        self.vocabulary = vocabulary

    def resolve(self, text: str) -> Tuple[str, ...]:
        lower = text.lower()
        vocab = self.vocabulary
        if any(p in lower for p in vocab.full_day_phrases):
            return vocab.all_slots
        if "morning" in lower:
            return vocab.morning_slots
        if "afternoon" in lower:
            return vocab.afternoon_slots
        for phrases, labels in vocab.literal_times:
            if any(p in lower for p in phrases):
                return vocab.slot_order(labels)
        return ()


class PurposeResolver:
    """
    Purpose never comes back missing for a non-empty message: anything that
    matches no keyword is a general-purpose booking. Only an empty message
    resolves to None.
    """

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY):
        self.vocabulary = vocabulary

    def resolve(self, text: str) -> Optional[str]:
        lower = text.lower().strip()
        if not lower:
            return None
        for keyword, label in self.vocabulary.purpose_keywords:
            if keyword in lower:
                return label
        return self.vocabulary.default_purpose


class HallResolver:

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY):
        self.vocabulary = vocabulary

    def match(self, text: str) -> Optional[Tuple[str, str]]:
        """Return (hall, matched phrase) for the first hall named in text."""
        lower = text.lower()
        for hall in self.vocabulary.halls:
            if hall.lower() in lower:
                return hall, hall.lower()
        for alias, hall in self.vocabulary.hall_aliases:
            if alias in lower:
                return hall, alias
        return None

    def resolve(self, text: str) -> Optional[str]:
        found = self.match(text)
        return found[0] if found else None

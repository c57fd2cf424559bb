"""
Fixed vocabulary the booking assistant understands: halls, slot catalog,
date and time phrases, purpose keywords.

A Vocabulary is plain immutable data. The resolvers receive one instead of
reading module globals, so tests can hand them a smaller table.
"""

from dataclasses import dataclass, field
from datetime import date
from typing import Dict, Optional, Sequence, Tuple

HALLS = ("Main Auditorium Hall", "Vedhanayagam Hall", "ECE Seminar Hall", "SF Seminar Hall")

HALL_ALIASES = (
    ("main auditorium", "Main Auditorium Hall"),
    ("main hall", "Main Auditorium Hall"),
    ("vedhanayagam", "Vedhanayagam Hall"),
    ("ece seminar", "ECE Seminar Hall"),
    ("sf seminar", "SF Seminar Hall"),
)

MORNING_SLOTS = (
    "8:30 - 9:00", "9:00 - 9:30", "9:30 - 10:00", "10:00 - 10:30",
    "10:30 - 11:00", "11:00 - 11:30", "11:30 - 12:00", "12:00 - 12:30",
)

AFTERNOON_SLOTS = (
    "1:00 - 1:30", "1:30 - 2:00", "2:00 - 2:30", "2:30 - 3:00",
    "3:00 - 3:30", "3:30 - 4:00", "4:00 - 4:30", "After 4:30",
)

FULL_DAY_PHRASES = ("full slots", "all day", "full day")

LITERAL_DATES = (
    (("december 11", "dec 11", "12/11", "12-11"), date(2025, 12, 11)),
)

LITERAL_TIMES = (
    (("10.00", "10:00", "10 am", "10:00am"), ("10:00 - 10:30", "10:30 - 11:00")),
    (("11.30", "11:30", "11:30am"), ("11:30 - 12:00",)),
)

PURPOSE_KEYWORDS = (
    ("training", "training"),
    ("meeting", "meeting"),
    ("seminar", "seminar"),
    ("event", "event"),
    ("inauguration", "inauguration"),
    ("gd", "Group Discussion"),
    ("lunch", "Lunch Meeting"),
    ("workshop", "Workshop"),
)

DEFAULT_PURPOSE = "General Purpose"


@dataclass(frozen=True)
class Vocabulary:
    halls: Tuple[str, ...] = HALLS
    hall_aliases: Tuple[Tuple[str, str], ...] = HALL_ALIASES
    morning_slots: Tuple[str, ...] = MORNING_SLOTS
    afternoon_slots: Tuple[str, ...] = AFTERNOON_SLOTS
    full_day_phrases: Tuple[str, ...] = FULL_DAY_PHRASES
    literal_dates: Tuple[Tuple[Tuple[str, ...], date], ...] = LITERAL_DATES
    literal_times: Tuple[Tuple[Tuple[str, ...], Tuple[str, ...]], ...] = LITERAL_TIMES
    purpose_keywords: Tuple[Tuple[str, str], ...] = PURPOSE_KEYWORDS
    default_purpose: str = DEFAULT_PURPOSE
    _positions: Dict[str, int] = field(init=False, repr=False, compare=False)

    def __post_init__(self):
        # frozen: bypass __setattr__ for the derived lookup table
        object.__setattr__(self, "_positions", {s: i for i, s in enumerate(self.all_slots)})

    @property
    def all_slots(self) -> Tuple[str, ...]:
        return self.morning_slots + self.afternoon_slots

    def is_hall(self, name: str) -> bool:
        return name in self.halls

    def is_slot(self, label: str) -> bool:
        return label in self._positions

    def slot_order(self, slots: Sequence[str]) -> Tuple[str, ...]:
        """Deduplicate known slot labels and sort them in catalog order."""
        return tuple(sorted({s for s in slots if s in self._positions}, key=self._positions.__getitem__))

    def hall_for(self, name: str) -> Optional[str]:
        """Case-insensitive lookup of a canonical hall name."""
        lowered = name.strip().lower()
        for hall in self.halls:
            if hall.lower() == lowered:
                return hall
        return None


DEFAULT_VOCABULARY = Vocabulary()

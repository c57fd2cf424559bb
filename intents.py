"""
Intent dispatcher: classifies a chat message by ordered substring rules.

The rule table is evaluated top to bottom and the first predicate that
matches decides the intent. A message mentioning both "available" and
"book" is therefore an availability check, because that rule comes first.
"""

import enum
import re
from typing import Callable, List, Tuple


class Intent(str, enum.Enum):
    GREETING = "greeting"
    THANKS = "thanks"
    VIEW_BOOKINGS = "view_bookings"
    CHECK_AVAILABILITY = "check_availability"
    CREATE_BOOKING = "create_booking"
    HELP = "help"
    FALLBACK = "fallback"


_THANKS = re.compile(r"^(thanks|thank you|thankyou|thx)")
_GREETING = re.compile(r"^(hi|hello|hey|greetings)")

_VIEW_PHRASES = ("my bookings", "show my bookings", "view bookings", "are you booked")
_AVAILABILITY_PHRASES = ("check availability", "available", "is available", "availability", "check avail")
_BOOKING_PHRASES = ("book", "booking", "reserve", "schedule")
_HELP_PHRASES = ("what can you do", "help", "what help")


def _contains_any(phrases):
    return lambda text: any(p in text for p in phrases)


def _wants_bookings_list(text: str) -> bool:
    return any(p in text for p in _VIEW_PHRASES) or ("show" in text and "booking" in text)


Rule = Tuple[Callable[[str], bool], Intent]

RULES: List[Rule] = [
    (lambda text: bool(_THANKS.match(text)), Intent.THANKS),
    (_wants_bookings_list, Intent.VIEW_BOOKINGS),
    (_contains_any(_AVAILABILITY_PHRASES), Intent.CHECK_AVAILABILITY),
    (_contains_any(_BOOKING_PHRASES), Intent.CREATE_BOOKING),
    (lambda text: bool(_GREETING.match(text)), Intent.GREETING),
    (_contains_any(_HELP_PHRASES), Intent.HELP),
]


def classify(message: str, rules: List[Rule] = RULES) -> Intent:
    text = (message or "").lower().strip()
    if not text:
        return Intent.GREETING
    for predicate, intent in rules:
        if predicate(text):
            return intent
    return Intent.FALLBACK

"""
Rule-based booking assistant behind POST /api/ai-chat.

    message -> intent -> resolvers -> conflict check / store -> replies -> reply

Every path returns a ChatReply. Store failures are reported with
``error=True`` and action "error" so a client can tell them apart from a
normal answer.
"""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Any, Callable, Dict, Optional

from sqlalchemy.exc import SQLAlchemyError

import replies
from intents import Intent, classify
from reservations import BookingConflict, ReservationStore
from resolvers import DateResolver, HallResolver, PurposeResolver, SlotResolver
from vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger(__name__)


@dataclass
class ChatReply:
    response: str
    intent: Intent
    action: Optional[str] = None
    error: bool = False
    fields: Dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        payload = {
            "response": self.response,
            "intent": self.intent.value,
            "action": self.action,
            "error": self.error,
        }
        payload.update(self.fields)
        return payload


class BookingAssistant:

    def __init__(self, vocabulary: Vocabulary = DEFAULT_VOCABULARY,
                 today: Callable[[], date] = date.today):
        self.vocabulary = vocabulary
        self.today = today
        self.halls = HallResolver(vocabulary)
        self.dates = DateResolver(vocabulary, today)
        self.slots = SlotResolver(vocabulary)
        self.purposes = PurposeResolver(vocabulary)
        self._handlers = {
            Intent.THANKS: self._thanks,
            Intent.VIEW_BOOKINGS: self._view_bookings,
            Intent.CHECK_AVAILABILITY: self._check_availability,
            Intent.CREATE_BOOKING: self._create_booking,
            Intent.GREETING: self._greeting,
            Intent.HELP: self._help,
            Intent.FALLBACK: self._fallback,
        }

    def reply(self, message: str, identity, store: ReservationStore) -> ChatReply:
        if not message or not message.strip():
            return ChatReply(replies.empty_message(identity.name), Intent.GREETING)

        intent = classify(message)
        logger.info("Chat message from %s classified as %s", identity.name, intent.value)
        try:
            return self._handlers[intent](message, identity, store)
        except SQLAlchemyError:
            logger.exception("Chat request failed for user %s", identity.user_id)
            if intent is Intent.CREATE_BOOKING:
                text = replies.booking_error()
            else:
                text = replies.general_error()
            return ChatReply(text, intent, action="error", error=True)

    def _thanks(self, message, identity, store):
        return ChatReply(replies.thanks(identity.name), Intent.THANKS)

    def _greeting(self, message, identity, store):
        return ChatReply(replies.greeting(identity.name), Intent.GREETING)

    def _help(self, message, identity, store):
        return ChatReply(replies.help_text(), Intent.HELP)

    def _fallback(self, message, identity, store):
        return ChatReply(replies.fallback(identity.name), Intent.FALLBACK)

    def _view_bookings(self, message, identity, store):
        bookings = store.list_upcoming_by_owner(identity.user_id, self.today())
        return ChatReply(
            replies.booking_list(bookings),
            Intent.VIEW_BOOKINGS,
            action="view_bookings",
            fields={"bookings": [b.to_dict() for b in bookings]},
        )

    def _check_availability(self, message, identity, store):
        hall = self.halls.resolve(message)
        day = self.dates.resolve(message)
        if not hall or not day:
            return ChatReply(
                replies.availability_prompt(self.vocabulary),
                Intent.CHECK_AVAILABILITY,
                action="need_info_for_availability",
                fields={"hall": hall, "date": day.isoformat() if day else None},
            )

        booked = store.booked_slots(hall, day)
        available = tuple(s for s in self.vocabulary.all_slots if s not in booked)
        return ChatReply(
            replies.availability(hall, day, available, booked, self.vocabulary),
            Intent.CHECK_AVAILABILITY,
            action="availability_checked",
            fields={
                "hall": hall,
                "date": day.isoformat(),
                "availableSlots": list(available),
                "bookedSlots": list(booked),
            },
        )

    def _create_booking(self, message, identity, store):
        found = self.halls.match(message)
        hall = found[0] if found else None
        day = self.dates.resolve(message)
        slots = self.slots.resolve(message)
        # the hall's own name ("SF Seminar Hall") must not read as a purpose
        purpose_text = message.lower().replace(found[1], " ") if found else message
        purpose = self.purposes.resolve(purpose_text)

        fields = {
            "hall": hall,
            "date": day.isoformat() if day else None,
            "slots": list(slots),
            "purpose": purpose,
        }
        missing = {"hall": hall is None, "date": day is None, "time": not slots, "purpose": purpose is None}
        if any(missing.values()):
            fields["missingInfo"] = missing
            return ChatReply(
                replies.missing_info(missing, self.vocabulary),
                Intent.CREATE_BOOKING,
                action="need_more_info",
                fields=fields,
            )

        try:
            booking = store.create(identity.user_id, hall, day, slots, purpose)
        except BookingConflict as exc:
            logger.info("Booking conflict for %s: %s", identity.name, exc)
            fields.update({
                "conflictSlots": list(exc.conflict.overlap),
                "availableSlots": list(exc.conflict.available),
                "fullyBooked": exc.conflict.fully_booked,
            })
            return ChatReply(replies.conflict(hall, exc.conflict), Intent.CREATE_BOOKING,
                             action="conflict", fields=fields)

        logger.info("Booking %s created by %s via chat", booking.id, identity.name)
        fields["booking"] = booking.to_dict()
        return ChatReply(
            replies.confirmation(booking.hall, booking.booking_date, booking.slots, booking.purpose,
                                 self.vocabulary),
            Intent.CREATE_BOOKING,
            action="booked",
            fields=fields,
        )

"""
Reservation store and conflict checking.

Reservations for the same hall and date must not share a slot. The store
checks for overlap before inserting, and every reserved slot is also written
as a SlotClaim row under a unique (hall, date, slot) key in the same
transaction. Two concurrent requests that both pass the read therefore
cannot both commit: the loser gets an IntegrityError, which is reported as a
BookingConflict and never leaves a partial reservation behind.
"""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Iterable, List, Optional, Sequence, Tuple

from sqlalchemy.exc import IntegrityError

from database import db
from models import Booking, SlotClaim
from vocabulary import DEFAULT_VOCABULARY, Vocabulary

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class Conflict:
    overlap: Tuple[str, ...]     # requested slots already taken
    available: Tuple[str, ...]   # requested slots still free

    @property
    def fully_booked(self) -> bool:
        return not self.available


class BookingConflict(Exception):

    def __init__(self, hall: str, booking_date: date, conflict: Conflict):
        super().__init__(f"{hall} on {booking_date.isoformat()}: already booked {', '.join(conflict.overlap)}")
        self.hall = hall
        self.booking_date = booking_date
        self.conflict = conflict


def check_conflict(requested: Sequence[str], booked: Iterable[str],
                   vocabulary: Vocabulary = DEFAULT_VOCABULARY) -> Optional[Conflict]:
    """Return the overlap between requested and booked slots, or None if they are disjoint."""
    taken = set(booked)
    overlap = vocabulary.slot_order([s for s in requested if s in taken])
    if not overlap:
        return None
    available = vocabulary.slot_order([s for s in requested if s not in taken])
    return Conflict(overlap=overlap, available=available)


class ReservationStore:

    def __init__(self, session=None, vocabulary: Vocabulary = DEFAULT_VOCABULARY):
        self.session = session if session is not None else db.session
        self.vocabulary = vocabulary

    def list_by_owner(self, owner_id: int) -> List[Booking]:
        return (self.session.query(Booking).filter_by(user_id=owner_id)
                .order_by(Booking.booking_date.desc(), Booking.id.desc()).all())

    def list_upcoming_by_owner(self, owner_id: int, today: date, limit: int = 10) -> List[Booking]:
        return (self.session.query(Booking).filter(Booking.user_id == owner_id, Booking.booking_date >= today)
                .order_by(Booking.booking_date.asc(), Booking.hall.asc()).limit(limit).all())

    def list_by_hall_date(self, hall: str, booking_date: date) -> List[Booking]:
        return (self.session.query(Booking).filter_by(hall=hall, booking_date=booking_date)
                .order_by(Booking.id.asc()).all())

    def booked_slots(self, hall: str, booking_date: date) -> Tuple[str, ...]:
        taken = [slot for b in self.list_by_hall_date(hall, booking_date) for slot in b.slots]
        return self.vocabulary.slot_order(taken)

    def create(self, owner_id: int, hall: str, booking_date: date,
               slots: Sequence[str], purpose: str) -> Booking:
        """
        Insert a reservation, or raise BookingConflict without writing anything.

        Other database errors propagate after the session is rolled back.
        """
        requested = self.vocabulary.slot_order(slots)
        conflict = check_conflict(requested, self.booked_slots(hall, booking_date), self.vocabulary)
        if conflict:
            raise BookingConflict(hall, booking_date, conflict)

        booking = Booking(user_id=owner_id, hall=hall, booking_date=booking_date,
                          slots=list(requested), purpose=purpose)
        booking.claims = [SlotClaim(hall=hall, booking_date=booking_date, slot=s) for s in requested]
        self.session.add(booking)
        try:
            self.session.commit()
        except IntegrityError:
            self.session.rollback()
            # Lost a race against another insert for the same slots.
            conflict = check_conflict(requested, self.booked_slots(hall, booking_date), self.vocabulary)
            if conflict is None:
                raise
            logger.info("Concurrent booking for %s on %s lost on %s", hall, booking_date, conflict.overlap)
            raise BookingConflict(hall, booking_date, conflict)
        except Exception:
            self.session.rollback()
            raise
        return booking

    def delete(self, booking_id: int, owner_id: int) -> bool:
        booking = self.session.query(Booking).filter_by(id=booking_id, user_id=owner_id).first()
        if booking is None:
            return False
        self.session.delete(booking)
        try:
            self.session.commit()
        except Exception:
            self.session.rollback()
            raise
        return True

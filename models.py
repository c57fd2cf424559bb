# models.py
from datetime import datetime, timezone

from database import db


def _utcnow():
    return datetime.now(timezone.utc)


class User(db.Model):
    __tablename__ = 'users'
    id = db.Column(db.Integer, primary_key=True)
    name = db.Column(db.String(100), nullable=False)
    email = db.Column(db.String(255), unique=True, nullable=False)
    phone = db.Column(db.String(30), nullable=True)
    password = db.Column(db.String(255), nullable=False)  # werkzeug hash, never the raw password
    role = db.Column(db.String(20), nullable=False, default="user")  # user / admin
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)

    bookings = db.relationship("Booking", back_populates="owner", cascade="all, delete-orphan")
    feedback = db.relationship("Feedback", back_populates="user")

    def to_dict(self):
        return {"id": self.id, "name": self.name, "email": self.email, "role": self.role}


class Booking(db.Model):
    __tablename__ = 'bookings'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=False, index=True)
    hall = db.Column(db.String(100), nullable=False)
    booking_date = db.Column(db.Date, nullable=False)
    slots = db.Column(db.JSON, nullable=False)  # labels in catalog order
    purpose = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)

    owner = db.relationship("User", back_populates="bookings")
    claims = db.relationship("SlotClaim", back_populates="booking", cascade="all, delete-orphan")

    __table_args__ = (db.Index("ix_bookings_hall_date", "hall", "booking_date"),)

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "hall": self.hall,
            "booking_date": self.booking_date.isoformat(),
            "slots": list(self.slots),
            "purpose": self.purpose,
        }


class SlotClaim(db.Model):
    """One reserved slot of a hall on a date. The unique key keeps reservations disjoint."""
    __tablename__ = 'slot_claims'
    id = db.Column(db.Integer, primary_key=True)
    booking_id = db.Column(db.Integer, db.ForeignKey("bookings.id", ondelete="CASCADE"), nullable=False)
    hall = db.Column(db.String(100), nullable=False)
    booking_date = db.Column(db.Date, nullable=False)
    slot = db.Column(db.String(20), nullable=False)

    booking = db.relationship("Booking", back_populates="claims")

    __table_args__ = (
        db.UniqueConstraint("hall", "booking_date", "slot", name="uq_slot_claims_hall_date_slot"),
    )


class Feedback(db.Model):
    __tablename__ = 'feedback'
    id = db.Column(db.Integer, primary_key=True)
    user_id = db.Column(db.Integer, db.ForeignKey("users.id"), nullable=True)
    name = db.Column(db.String(100), nullable=False)
    feedback = db.Column(db.Text, nullable=False)
    created_at = db.Column(db.DateTime(timezone=True), default=_utcnow, nullable=False)

    user = db.relationship("User", back_populates="feedback")

    def to_dict(self):
        return {
            "id": self.id,
            "user_id": self.user_id,
            "name": self.name,
            "feedback": self.feedback,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }

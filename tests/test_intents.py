import pytest

from intents import Intent, classify


@pytest.mark.parametrize("message, intent", [
    ("Thanks a lot", Intent.THANKS),
    ("thank you!", Intent.THANKS),
    ("thx", Intent.THANKS),
    ("show my bookings", Intent.VIEW_BOOKINGS),
    ("Can you show the booking I made?", Intent.VIEW_BOOKINGS),
    ("view bookings", Intent.VIEW_BOOKINGS),
    ("Is SF Seminar Hall available tomorrow?", Intent.CHECK_AVAILABILITY),
    ("check availability for main hall", Intent.CHECK_AVAILABILITY),
    ("Book Main Auditorium Hall tomorrow", Intent.CREATE_BOOKING),
    ("please reserve the ECE seminar hall", Intent.CREATE_BOOKING),
    ("schedule a workshop", Intent.CREATE_BOOKING),
    ("hello there", Intent.GREETING),
    ("hey", Intent.GREETING),
    ("what can you do?", Intent.HELP),
    ("I need help", Intent.HELP),
    ("what is the weather", Intent.FALLBACK),
])
def test_classification(message, intent):
    assert classify(message) == intent


@pytest.mark.parametrize("message", ["", "   ", None])
def test_empty_message_is_a_greeting(message):
    assert classify(message) == Intent.GREETING


def test_availability_rule_comes_before_booking():
    assert classify("book it if main hall is available tomorrow") == Intent.CHECK_AVAILABILITY


def test_view_rule_comes_before_booking():
    assert classify("show my bookings and book another") == Intent.VIEW_BOOKINGS


def test_thanks_only_matches_at_start():
    assert classify("ok thanks") == Intent.FALLBACK


def test_booking_rule_comes_before_greeting():
    assert classify("hi, book sf seminar hall") == Intent.CREATE_BOOKING


def test_intent_values_are_wire_tags():
    assert Intent.CREATE_BOOKING.value == "create_booking"
    assert Intent.VIEW_BOOKINGS == "view_bookings"

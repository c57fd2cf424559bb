from datetime import date, timedelta

import pytest

from resolvers import DateResolver, HallResolver, PurposeResolver, SlotResolver, next_monday
from vocabulary import AFTERNOON_SLOTS, DEFAULT_VOCABULARY, MORNING_SLOTS, Vocabulary

MONDAY = date(2026, 10, 19)
WEDNESDAY = date(2026, 10, 21)
SUNDAY = date(2026, 10, 25)


def dates_on(day):
    return DateResolver(DEFAULT_VOCABULARY, lambda: day)


class TestDateResolver:

    @pytest.mark.parametrize("phrase", [
        "tomorrow",
        "Book SF Seminar Hall TOMORROW at 10 am",
        "is main hall available tomorrow or today?",
        "tomorrow december 11",
    ])
    def test_tomorrow_wins_over_later_rules(self, phrase):
        assert dates_on(WEDNESDAY).resolve(phrase) == WEDNESDAY + timedelta(days=1)

    def test_next_monday_on_a_monday_is_a_week_ahead(self):
        assert dates_on(MONDAY).resolve("next monday please") == MONDAY + timedelta(days=7)

    def test_next_monday_midweek(self):
        assert dates_on(WEDNESDAY).resolve("Next Monday") == date(2026, 10, 26)

    def test_next_monday_on_sunday_is_the_following_day(self):
        assert dates_on(SUNDAY).resolve("next monday") == date(2026, 10, 26)

    def test_next_monday_beats_tomorrow(self):
        assert dates_on(SUNDAY).resolve("tomorrow, I mean next monday") == date(2026, 10, 26)

    @pytest.mark.parametrize("phrase", ["December 11", "dec 11", "on 12/11", "12-11"])
    def test_literal_dates(self, phrase):
        assert dates_on(MONDAY).resolve(phrase) == date(2025, 12, 11)

    def test_today(self):
        assert dates_on(MONDAY).resolve("today please") == MONDAY

    def test_unresolved_is_none(self):
        assert dates_on(MONDAY).resolve("some time next week") is None

    def test_injected_literal_dates(self):
        vocab = Vocabulary(literal_dates=((("founders day",), date(2027, 1, 5)),))
        resolver = DateResolver(vocab, lambda: MONDAY)
        assert resolver.resolve("book for founders day") == date(2027, 1, 5)
        assert resolver.resolve("december 11") is None

    def test_next_monday_helper(self):
        for offset in range(7):
            day = MONDAY + timedelta(days=offset)
            result = next_monday(day)
            assert result.weekday() == 0
            assert 1 <= (result - day).days <= 7


class TestSlotResolver:

    def test_full_slots_is_whole_catalog_in_order(self):
        resolver = SlotResolver()
        first = resolver.resolve("full slots")
        assert first == MORNING_SLOTS + AFTERNOON_SLOTS
        assert resolver.resolve("full slots") == first
        assert len(first) == 16

    @pytest.mark.parametrize("phrase", ["all day", "Full Day", "full slots in the morning"])
    def test_full_day_phrases_take_precedence(self, phrase):
        assert SlotResolver().resolve(phrase) == DEFAULT_VOCABULARY.all_slots

    def test_morning(self):
        assert SlotResolver().resolve("morning slots") == MORNING_SLOTS

    def test_afternoon(self):
        assert SlotResolver().resolve("in the afternoon") == AFTERNOON_SLOTS

    def test_morning_checked_before_afternoon(self):
        assert SlotResolver().resolve("morning or afternoon") == MORNING_SLOTS

    @pytest.mark.parametrize("phrase", ["10:00", "at 10 am", "10.00", "10:00am"])
    def test_ten_o_clock(self, phrase):
        assert SlotResolver().resolve(phrase) == ("10:00 - 10:30", "10:30 - 11:00")

    def test_eleven_thirty(self):
        assert SlotResolver().resolve("11:30") == ("11:30 - 12:00",)

    def test_no_match_is_empty(self):
        assert SlotResolver().resolve("whenever suits") == ()

    def test_small_fixture_vocabulary(self):
        vocab = Vocabulary(morning_slots=("9 - 10",), afternoon_slots=("2 - 3",), literal_times=())
        resolver = SlotResolver(vocab)
        assert resolver.resolve("all day") == ("9 - 10", "2 - 3")
        assert resolver.resolve("10 am") == ()


class TestPurposeResolver:

    @pytest.mark.parametrize("text, expected", [
        ("for training", "training"),
        ("team meeting", "meeting"),
        ("a seminar", "seminar"),
        ("college event", "event"),
        ("inauguration ceremony", "inauguration"),
        ("for GD", "Group Discussion"),
        ("lunch", "Lunch Meeting"),
        ("hands-on workshop", "Workshop"),
    ])
    def test_keywords(self, text, expected):
        assert PurposeResolver().resolve(text) == expected

    def test_first_keyword_in_table_order_wins(self):
        assert PurposeResolver().resolve("workshop and training") == "training"

    def test_lunch_meeting_reads_as_meeting(self):
        assert PurposeResolver().resolve("lunch meeting") == "meeting"

    def test_unmatched_text_is_general_purpose(self):
        assert PurposeResolver().resolve("book it") == "General Purpose"

    def test_empty_text_is_missing(self):
        assert PurposeResolver().resolve("   ") is None


class TestHallResolver:

    @pytest.mark.parametrize("text, hall", [
        ("Book SF Seminar Hall", "SF Seminar Hall"),
        ("main auditorium tomorrow", "Main Auditorium Hall"),
        ("the main hall", "Main Auditorium Hall"),
        ("VEDHANAYAGAM", "Vedhanayagam Hall"),
        ("ece seminar room", "ECE Seminar Hall"),
        ("sf seminar", "SF Seminar Hall"),
    ])
    def test_names_and_aliases(self, text, hall):
        assert HallResolver().resolve(text) == hall

    def test_match_returns_phrase(self):
        assert HallResolver().match("Book ECE Seminar Hall") == ("ECE Seminar Hall", "ece seminar hall")
        assert HallResolver().match("main hall") == ("Main Auditorium Hall", "main hall")

    def test_unknown_hall(self):
        assert HallResolver().resolve("the cafeteria") is None

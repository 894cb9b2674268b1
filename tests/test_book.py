from __future__ import annotations

from datetime import date

from shiftline.timeline.book import ShiftBook
from shiftline.timeline.hours import BusinessHours

MONDAY = date(2024, 6, 10)


def test_lookup_by_id_and_lane(make_shift):
    book = ShiftBook(
        [
            make_shift("late", start_hour=17.0, end_hour=22.0),
            make_shift("early", start_hour=8.0, end_hour=12.0),
            make_shift("other", "E2"),
        ]
    )
    assert len(book) == 3
    assert "late" in book
    assert book.get("missing") is None
    assert [shift.id for shift in book.for_lane("E1", MONDAY)] == ["early", "late"]
    assert {shift.id for shift in book.for_date(MONDAY)} == {"late", "early", "other"}


def test_overlap_is_half_open(make_shift):
    book = ShiftBook([make_shift()])
    assert not book.has_overlap("E1", MONDAY, 18.0, 19.0)
    assert not book.has_overlap("E1", MONDAY, 11.0, 12.0)
    assert book.has_overlap("E1", MONDAY, 17.75, 18.25)
    assert not book.has_overlap("E2", MONDAY, 12.0, 18.0)
    assert not book.has_overlap("E1", MONDAY, 13.0, 14.0, exclude_id="s1")


def test_blocked_placeholders_do_not_overlap(make_shift):
    book = ShiftBook([make_shift("off", start_hour=0.0, end_hour=24.0, is_blocked=True)])
    assert not book.has_overlap("E1", MONDAY, 9.0, 10.0)
    assert book.has_blocked("E1", MONDAY)
    assert not book.has_blocked("E2", MONDAY)


def test_first_available_slot_prefers_morning(make_shift):
    assert ShiftBook().first_available_slot("E1", MONDAY) == (9.0, 10.0)
    book = ShiftBook([make_shift(start_hour=9.0, end_hour=12.0)])
    assert book.first_available_slot("E1", MONDAY) == (12.0, 13.0)


def test_first_available_slot_falls_back_to_day_start(make_shift):
    book = ShiftBook([make_shift(start_hour=9.0, end_hour=24.0)])
    assert book.first_available_slot("E1", MONDAY) == (0.0, 1.0)


def test_first_available_slot_within_business_hours(make_shift):
    hours = BusinessHours(10.0, 23.0)
    book = ShiftBook([make_shift(start_hour=10.0, end_hour=14.0)])
    assert book.first_available_slot("E1", MONDAY, hours=hours) == (14.0, 15.0)
    assert book.first_available_slot(
        "E1", MONDAY, duration_hours=2.0, step_hours=0.5, hours=BusinessHours(10.0, 15.0)
    ) is None

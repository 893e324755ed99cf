"""Tests for the event quick-input assembler."""

from datetime import date

import pytest

from sisatset.quickinput import DraftEvent, KnownEntity, create_assembler, parse_text


@pytest.fixture
def children():
    return [KnownEntity(id="c1", name="Rara"), KnownEntity(id="c2", name="Bima")]


def _parse(text, children=(), today=date(2025, 10, 1)):
    return parse_text(text, create_assembler("event", children=children, today=today))


class TestEventParser:
    def test_date_and_time_carry_forward(self):
        events = _parse("Sekolah\n26/10/2025\n10:30\nLomba A\nLomba B")

        assert [e.title for e in events] == ["Lomba A", "Lomba B"]
        for event in events:
            assert event.date == "2025-10-26"
            assert event.time == "10:30"
            assert event.category == "Sekolah"

    def test_title_before_date_is_dropped(self):
        events = _parse("Sekolah\nLomba A\n26/10/2025\n10:30\nLomba B")

        assert len(events) == 1
        assert events[0].title == "Lomba B"

    def test_noise_without_dates_detects_nothing(self):
        assert _parse("Halo bunda\nJangan lupa ya\nTerima kasih") == []

    def test_default_category(self):
        events = _parse("28/10/2025\nUjian Piano")
        assert events[0].category == "Lainnya"

    def test_category_switches_for_following_lines(self):
        events = _parse("Sekolah\n26/10/2025\nLomba A\nLes\nUjian Piano")

        assert [(e.title, e.category) for e in events] == [
            ("Lomba A", "Sekolah"),
            ("Ujian Piano", "Les"),
        ]

    def test_child_line_sets_child_and_is_not_a_title(self, children):
        events = _parse(
            "Les\nLomba OMNAS - Rara\n28/10/2025\nUjian Piano", children=children
        )

        assert events == [
            DraftEvent(
                title="Ujian Piano",
                category="Les",
                date="2025-10-28",
                time="",
                notes="",
                child_id="c1",
            )
        ]

    def test_missing_year_follows_current_date(self):
        events = _parse("26/10/2025\nA\n1/11\nB", today=date(2030, 1, 1))

        assert events[0].date == "2025-10-26"
        assert events[1].date == "2025-11-01"

    def test_missing_year_without_context_uses_today(self):
        events = _parse("1/11\nRapat wali murid", today=date(2026, 3, 1))
        assert events[0].date == "2026-11-01"

    def test_two_digit_year(self):
        events = _parse("5/3/25\nPentas seni")
        assert events[0].date == "2025-03-05"

    def test_bullet_stripped_from_title(self):
        events = _parse("26/10/2025\n- Bawa pensil 2B\n• Bawa papan")
        assert [e.title for e in events] == ["Bawa pensil 2B", "Bawa papan"]

    def test_new_date_applies_to_later_lines_only(self):
        events = _parse("26/10/2025\nLomba A\n28/10/2025\n15:00\nUjian Piano")

        assert (events[0].date, events[0].time) == ("2025-10-26", "")
        assert (events[1].date, events[1].time) == ("2025-10-28", "15:00")

    def test_time_line_is_context_not_a_title(self):
        events = _parse("26/10/2025\nLomba A\njam 13:00\nLomba B")

        assert [(e.title, e.time) for e in events] == [
            ("Lomba A", ""),
            ("Lomba B", "13:00"),
        ]

    def test_reparse_is_identical(self, children):
        text = "Sekolah\nRara\n26/10/2025\n10:30\nLomba A\nLomba B"
        assert _parse(text, children) == _parse(text, children)

    def test_to_record_columns(self):
        event = _parse("26/10/2025\n10:30\nLomba A")[0]
        assert event.to_record() == {
            "title": "Lomba A",
            "category": "Lainnya",
            "event_date": "2025-10-26",
            "event_time": "10:30",
            "notes": "",
            "child_id": None,
        }

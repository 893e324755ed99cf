"""Tests for the homework quick-input assembler."""

from datetime import date

import pytest

from sisatset.quickinput import DraftHomework, KnownEntity, create_assembler, parse_text

TODAY = date(2025, 10, 1)


@pytest.fixture
def children():
    return [KnownEntity(id="c1", name="Rara"), KnownEntity(id="c2", name="Bima")]


def _parse(text, children, selected_child=None):
    assembler = create_assembler(
        "homework", children=children, selected_child=selected_child, today=TODAY
    )
    return parse_text(text, assembler)


class TestHomeworkParser:
    def test_subject_blocks_flush_with_deadlines(self, children):
        drafts = _parse(
            "PR Matematika: halaman 5\n25/10/2025\nTugas IPA: laporan\n30/10/2025",
            children,
        )

        assert drafts == [
            DraftHomework(
                child_id="c1",
                subject="Matematika",
                description="halaman 5",
                deadline="2025-10-25",
            ),
            DraftHomework(
                child_id="c1",
                subject="IPA",
                description="laporan",
                deadline="2025-10-30",
            ),
        ]

    def test_default_deadline_is_one_week(self, children):
        drafts = _parse("PR Matematika: halaman 5", children)
        assert drafts[0].deadline == "2025-10-08"

    def test_deadline_resets_for_each_subject(self, children):
        drafts = _parse("PR A: x\n25/10/2025\nPR B: y", children)

        assert drafts[0].deadline == "2025-10-25"
        assert drafts[1].deadline == "2025-10-08"

    def test_deadline_marker_line(self, children):
        drafts = _parse("Tugas IPA: laporan\nDeadline: 30/10", children)
        assert drafts[0].deadline == "2025-10-30"

    def test_unparseable_deadline_marker_is_ignored(self, children):
        drafts = _parse("Tugas IPA: laporan\nSampai: besok", children)

        assert len(drafts) == 1
        assert drafts[0].description == "laporan"
        assert drafts[0].deadline == "2025-10-08"

    def test_continuation_lines_join_description(self, children):
        drafts = _parse("PR Bahasa Indonesia\nMembaca cerpen\nhalaman 10", children)

        assert drafts[0].subject == "Bahasa Indonesia"
        assert drafts[0].description == "Membaca cerpen halaman 10"

    def test_page_range_is_not_a_deadline(self, children):
        drafts = _parse("PR Matematika: Halaman 45-50", children)

        assert drafts[0].subject == "Matematika"
        assert drafts[0].description == "Halaman 45-50"

    def test_child_line_switches_child(self, children):
        drafts = _parse("Bima\nPR IPA: bab 1", children)
        assert drafts[0].child_id == "c2"

    def test_pending_subject_takes_child_at_flush(self, children):
        # The child is sticky and read when the block is completed
        drafts = _parse("PR IPA: bab 1\nBima\nPR IPS: bab 2", children)
        assert [d.child_id for d in drafts] == ["c2", "c2"]

    def test_selected_child_is_initial_child(self, children):
        drafts = _parse("PR IPA: bab 1", children, selected_child="c2")
        assert drafts[0].child_id == "c2"

    def test_line_without_pending_subject_is_ignored(self, children):
        drafts = _parse("Halo bunda\nPR IPA: bab 2", children)
        assert len(drafts) == 1

    def test_no_children_detects_nothing(self):
        assert _parse("PR IPA: bab 2", []) == []

    def test_to_record_marks_incomplete(self, children):
        record = _parse("PR IPA: bab 2", children)[0].to_record()
        assert record["completed"] is False
        assert record["subject"] == "IPA"

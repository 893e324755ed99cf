"""Tests for single-line classification."""

from sisatset.quickinput import KnownEntity, Lookups, classify_line


def test_line_can_match_several_facets():
    lookups = Lookups(
        categories=("Sekolah",), entities=(KnownEntity(id="c1", name="Rara"),)
    )
    tags = classify_line("Sekolah Rara 26/10/2025 10:30", lookups, 2025)

    assert tags.category == "Sekolah"
    assert tags.entity_id == "c1"
    assert tags.date == "2025-10-26"
    assert tags.time == "10:30"
    assert tags.is_plain is False


def test_plain_content_line():
    tags = classify_line("- Bawa pensil", Lookups(categories=("Les",)), 2025)

    assert tags.is_plain is True
    assert tags.content == "Bawa pensil"
    assert tags.text == "- Bawa pensil"


def test_markers_collected_by_kind():
    lookups = Lookups(markers={"deadline": ("deadline:", "tenggat:")})
    tags = classify_line("Tenggat: Jumat", lookups, 2025)

    assert tags.markers == {"deadline": "Jumat"}
    assert tags.is_plain is False

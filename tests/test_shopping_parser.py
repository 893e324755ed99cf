"""Tests for shopping and note quick-input parsing."""

from sisatset.quickinput import (
    DraftNote,
    DraftShoppingItem,
    create_assembler,
    parse_shopping_line,
    parse_text,
)


class TestParseShoppingLine:
    def test_quantity_and_price(self):
        assert parse_shopping_line("Ayam 1kg Rp.35000") == DraftShoppingItem(
            name="Ayam", quantity="1kg", price=35000, category="Daging & Ikan"
        )

    def test_quantity_only(self):
        item = parse_shopping_line("Beras 5kg")
        assert (item.name, item.quantity, item.price) == ("Beras", "5kg", 0)
        assert item.category == "Lainnya"

    def test_upper_case_unit_and_price(self):
        item = parse_shopping_line("Minyak 2 LITER RP 30.000")
        assert (item.name, item.quantity, item.price) == ("Minyak", "2 LITER", 30000)

    def test_defaults(self):
        item = parse_shopping_line("Gula pasir")
        assert item.quantity == "1"
        assert item.price == 0

    def test_unknown_unit_stays_in_name(self):
        item = parse_shopping_line("Sayur bayam 2 ikat")
        assert item.name == "Sayur bayam 2 ikat"
        assert item.quantity == "1"
        assert item.category == "Sayuran"

    def test_separators_and_punctuation_removed(self):
        item = parse_shopping_line("Telur - Rp.28.000")
        assert item.name == "Telur"
        assert item.price == 28000

    def test_price_only_line_is_dropped(self):
        assert parse_shopping_line("Rp.5000") is None


class TestShoppingAssembler:
    def test_every_line_is_an_item(self):
        text = "Beras 5kg\nAyam 1kg Rp.35000\n\nGaram\nBawang merah 250gr"
        items = parse_text(text, create_assembler("shopping"))

        assert [i.name for i in items] == ["Beras", "Ayam", "Garam", "Bawang merah"]
        assert items[3].quantity == "250gr"
        assert items[2].category == "Bumbu Dapur"

    def test_record_is_marked_quick_input(self):
        item = parse_text("Garam", create_assembler("shopping"))[0]
        record = item.to_record()
        assert record["item"] == "Garam"
        assert record["source"] == "quick_input"
        assert record["checked"] is False


def test_note_per_line():
    notes = parse_text("  Beli kado\n\nBayar SPP  ", create_assembler("note"))
    assert notes == [DraftNote(content="Beli kado"), DraftNote(content="Bayar SPP")]

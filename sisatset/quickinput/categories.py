"""Fixed category lists and keyword tables for quick-input parsing."""

from __future__ import annotations

# Order matters: the first label found in a line wins.
EVENT_CATEGORIES: list[str] = [
    "Sekolah",
    "Les",
    "Ekstrakurikuler",
    "Acara Keluarga",
    "Lainnya",
]

EVENT_FALLBACK_CATEGORY = "Lainnya"

SHOPPING_CATEGORIES: list[str] = [
    "Sayuran",
    "Buah",
    "Daging & Ikan",
    "Bumbu Dapur",
    "Kebutuhan Harian",
    "Snack",
    "Lainnya",
]

SHOPPING_FALLBACK_CATEGORY = "Lainnya"

# Keyword → category mapping for guessing shopping item categories
SHOPPING_CATEGORY_KEYWORDS: dict[str, list[str]] = {
    "Sayuran": ["sayur", "brokoli", "wortel", "bayam"],
    "Buah": ["buah", "apel", "pisang", "jeruk"],
    "Daging & Ikan": ["daging", "ayam", "ikan", "sapi"],
    "Bumbu Dapur": ["bumbu", "bawang", "garam", "merica"],
    "Snack": ["snack", "kue", "keripik"],
}

SCHEDULE_DAYS: list[str] = ["senin", "selasa", "rabu", "kamis", "jumat", "sabtu"]

HOMEWORK_DEADLINE_MARKERS: list[str] = ["deadline:", "sampai:", "tenggat:"]
HOMEWORK_SUBJECT_PREFIXES: list[str] = ["pr ", "tugas "]

SCHEDULE_HOURS_MARKERS: list[str] = ["jam"]
SCHEDULE_UNIFORM_MARKERS: list[str] = ["seragam", "baju"]

SHOPPING_UNITS: list[str] = [
    "kg", "gr", "g", "liter", "l", "buah", "biji", "pack", "pcs", "botol", "kaleng",
]

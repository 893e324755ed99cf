"""Single-line classification for quick-input text."""

from __future__ import annotations

from dataclasses import dataclass, field

from .extractors import (
    extract_category,
    extract_date,
    extract_entity,
    extract_marker,
    extract_time,
    has_hours,
    strip_bullet,
)
from .models import KnownEntity


@dataclass(frozen=True)
class Lookups:
    """Per-domain lookup tables consulted while classifying a line."""

    categories: tuple[str, ...] = ()
    entities: tuple[KnownEntity, ...] = ()
    markers: dict[str, tuple[str, ...]] = field(default_factory=dict)


@dataclass(frozen=True)
class LineTags:
    """Everything a line *could* mean. Assemblers decide which facet wins."""

    text: str
    content: str  # text without a leading bullet
    date: str | None = None
    time: str | None = None
    category: str | None = None
    entity_id: str | None = None
    markers: dict[str, str] = field(default_factory=dict)
    clock: bool = False

    @property
    def lower(self) -> str:
        return self.text.lower()

    @property
    def is_plain(self) -> bool:
        """True when no facet matched and the line is free-text content."""
        return not (
            self.date
            or self.time
            or self.category
            or self.entity_id
            or self.markers
        )


def classify_line(line: str, lookups: Lookups, fallback_year: int) -> LineTags:
    """Tag a trimmed line with every facet it matches.

    Args:
        line: One line of pasted text, already trimmed.
        lookups: Category labels, known entities and key:value markers.
        fallback_year: Year used for dates written without one.
    """
    markers: dict[str, str] = {}
    for kind, prefixes in lookups.markers.items():
        value = extract_marker(line, prefixes)
        if value is not None:
            markers[kind] = value

    return LineTags(
        text=line,
        content=strip_bullet(line).strip(),
        date=extract_date(line, fallback_year),
        time=extract_time(line),
        category=extract_category(line, lookups.categories),
        entity_id=extract_entity(line, lookups.entities),
        markers=markers,
        clock=has_hours(line),
    )

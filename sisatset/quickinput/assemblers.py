"""Per-domain assemblers that fold classified lines into draft records.

Each assembler is a small strategy object: ``initial_state()`` builds an
immutable accumulator, ``step()`` returns a new accumulator for one line,
and ``finish()`` turns the final accumulator into drafts. Sticky fields
(category, child, date, current day) live in the accumulator and carry
forward until a later line overwrites them.
"""

from __future__ import annotations

import re
from abc import ABC, abstractmethod
from dataclasses import dataclass, replace
from datetime import date, timedelta
from functools import reduce
from typing import Any, Iterable, Sequence

from .categories import (
    EVENT_CATEGORIES,
    EVENT_FALLBACK_CATEGORY,
    HOMEWORK_DEADLINE_MARKERS,
    HOMEWORK_SUBJECT_PREFIXES,
    SCHEDULE_DAYS,
    SCHEDULE_HOURS_MARKERS,
    SCHEDULE_UNIFORM_MARKERS,
    SHOPPING_FALLBACK_CATEGORY,
)
from .classifier import Lookups, classify_line
from .extractors import (
    extract_date,
    extract_price,
    extract_quantity,
    guess_shopping_category,
)
from .models import (
    DraftEvent,
    DraftHomework,
    DraftNote,
    DraftScheduleDay,
    DraftShoppingItem,
    KnownEntity,
)

DOMAINS: tuple[str, ...] = ("event", "homework", "schedule", "shopping", "note")

_SUBJECT_PREFIX = re.compile(r"^(pr|tugas)\s+", re.IGNORECASE)
_UNIFORM_LABEL = re.compile(r"seragam:?|baju:?", re.IGNORECASE)
_NAME_PUNCTUATION = re.compile(r"[-:]")


class Assembler(ABC):
    """Base class for a domain's fold over quick-input lines."""

    domain: str = ""

    def __init__(self, today: date | None = None) -> None:
        self._today = today or date.today()

    @abstractmethod
    def initial_state(self) -> Any:
        ...

    @abstractmethod
    def step(self, state: Any, line: str) -> Any:
        """Consume one trimmed, non-empty line and return the next state."""
        ...

    @abstractmethod
    def finish(self, state: Any) -> list:
        """Return the drafts accumulated in *state*, in detection order."""
        ...


def split_lines(text: str) -> list[str]:
    """Split pasted text into trimmed, non-empty lines."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def parse_text(text: str, assembler: Assembler) -> list:
    """Run *assembler* over every line of *text* and return its drafts."""
    state = reduce(assembler.step, split_lines(text), assembler.initial_state())
    return assembler.finish(state)


# ── Event ──────────────────────────────────────────────


@dataclass(frozen=True)
class EventState:
    category: str = EVENT_FALLBACK_CATEGORY
    child_id: str | None = None
    date: str = ""
    time: str = ""
    drafts: tuple[DraftEvent, ...] = ()


class EventAssembler(Assembler):
    """One event per content line, stamped with the sticky context.

    A line naming a category only switches the category. Lines naming a
    child, a date or a time update the context and are never titles. A
    title that arrives before any date is dropped.
    """

    domain = "event"

    def __init__(
        self,
        children: Sequence[KnownEntity] = (),
        *,
        categories: Sequence[str] = EVENT_CATEGORIES,
        today: date | None = None,
    ) -> None:
        super().__init__(today)
        self._lookups = Lookups(
            categories=tuple(categories), entities=tuple(children)
        )

    def initial_state(self) -> EventState:
        return EventState()

    def step(self, state: EventState, line: str) -> EventState:
        # Missing years follow the date already in context
        fallback_year = (
            int(state.date[:4]) if state.date else self._today.year
        )
        tags = classify_line(line, self._lookups, fallback_year)

        if tags.category:
            return replace(state, category=tags.category)

        state = replace(
            state,
            child_id=tags.entity_id or state.child_id,
            date=tags.date or state.date,
            time=tags.time or state.time,
        )

        if not tags.is_plain:
            return state

        title = tags.content
        if not title or not state.date:
            return state

        event = DraftEvent(
            title=title,
            category=state.category,
            date=state.date,
            time=state.time,
            notes="",
            child_id=state.child_id,
        )
        return replace(state, drafts=state.drafts + (event,))

    def finish(self, state: EventState) -> list[DraftEvent]:
        return list(state.drafts)


# ── Homework ───────────────────────────────────────────


@dataclass(frozen=True)
class HomeworkState:
    child_id: str | None = None
    subject: str = ""
    description: str = ""
    deadline: str = ""
    drafts: tuple[DraftHomework, ...] = ()


class HomeworkAssembler(Assembler):
    """Group lines into homework blocks headed by "PR ..."/"Tugas ..." lines.

    Starting a new block flushes the pending one. Blocks without a
    deadline are due a week from today.
    """

    domain = "homework"

    def __init__(
        self,
        children: Sequence[KnownEntity] = (),
        *,
        selected_child: str | None = None,
        default_deadline_days: int = 7,
        today: date | None = None,
    ) -> None:
        super().__init__(today)
        self._children = tuple(children)
        self._selected_child = selected_child
        self._default_deadline_days = default_deadline_days
        self._lookups = Lookups(
            entities=self._children,
            markers={"deadline": tuple(HOMEWORK_DEADLINE_MARKERS)},
        )

    def initial_state(self) -> HomeworkState:
        child_id = self._selected_child
        if child_id is None and self._children:
            child_id = self._children[0].id
        return HomeworkState(child_id=child_id)

    def step(self, state: HomeworkState, line: str) -> HomeworkState:
        year = self._today.year
        tags = classify_line(line, self._lookups, year)

        if tags.entity_id:
            return replace(state, child_id=tags.entity_id)

        if tags.date:
            return replace(state, deadline=tags.date)

        if "deadline" in tags.markers:
            value = tags.markers["deadline"]
            deadline = extract_date(value, year) if value else None
            return replace(state, deadline=deadline) if deadline else state

        lower = tags.lower
        if ":" in line or any(p in lower for p in HOMEWORK_SUBJECT_PREFIXES):
            state = self._flush(state)
            _, sep, rest = line.partition(":")
            subject = _SUBJECT_PREFIX.sub("", line).split(":")[0].strip()
            return replace(
                state,
                subject=subject,
                description=rest.strip() if sep else "",
                deadline="",
            )

        if state.subject:
            description = f"{state.description} {line}" if state.description else line
            return replace(state, description=description)

        return state

    def finish(self, state: HomeworkState) -> list[DraftHomework]:
        return list(self._flush(state).drafts)

    def _flush(self, state: HomeworkState) -> HomeworkState:
        if not (state.subject and state.child_id):
            return state
        deadline = state.deadline or (
            self._today + timedelta(days=self._default_deadline_days)
        ).isoformat()
        draft = DraftHomework(
            child_id=state.child_id,
            subject=state.subject,
            description=state.description,
            deadline=deadline,
        )
        return replace(
            state,
            subject="",
            description="",
            deadline="",
            drafts=state.drafts + (draft,),
        )


# ── Schedule ───────────────────────────────────────────


@dataclass(frozen=True)
class _DayBucket:
    day: str
    subjects: tuple[str, ...] = ()
    uniform: str = ""
    hours: str = ""


@dataclass(frozen=True)
class ScheduleState:
    current_day: str = ""
    days: tuple[_DayBucket, ...] = ()


class ScheduleAssembler(Assembler):
    """Collect a weekly timetable, one bucket per day name.

    A day mentioned again reopens its existing bucket, so subjects from
    every occurrence end up in a single record.
    """

    domain = "schedule"

    def __init__(
        self,
        *,
        days: Sequence[str] = SCHEDULE_DAYS,
        today: date | None = None,
    ) -> None:
        super().__init__(today)
        self._lookups = Lookups(
            categories=tuple(days),
            markers={
                "hours": tuple(SCHEDULE_HOURS_MARKERS),
                "uniform": tuple(SCHEDULE_UNIFORM_MARKERS),
            },
        )

    def initial_state(self) -> ScheduleState:
        return ScheduleState()

    def step(self, state: ScheduleState, line: str) -> ScheduleState:
        tags = classify_line(line, self._lookups, self._today.year)

        if tags.category:
            day = tags.category
            days = state.days
            if not any(b.day == day for b in days):
                days = days + (_DayBucket(day=day),)
            return replace(state, current_day=day, days=days)

        if not state.current_day:
            return state

        bucket = next(b for b in state.days if b.day == state.current_day)
        if "hours" in tags.markers or tags.clock:
            bucket = replace(bucket, hours=line)
        elif "uniform" in tags.markers:
            bucket = replace(bucket, uniform=_UNIFORM_LABEL.sub("", line).strip())
        else:
            bucket = replace(bucket, subjects=bucket.subjects + (line,))

        days = tuple(bucket if b.day == bucket.day else b for b in state.days)
        return replace(state, days=days)

    def finish(self, state: ScheduleState) -> list[DraftScheduleDay]:
        drafts = [
            DraftScheduleDay(
                day_of_week=b.day,
                subjects=list(b.subjects),
                uniform=b.uniform,
                school_hours=b.hours,
            )
            for b in state.days
        ]
        return [d for d in drafts if not d.is_empty()]


# ── Shopping ───────────────────────────────────────────


class ShoppingAssembler(Assembler):
    """Every line is one item; quantity and price are cut out of the name."""

    domain = "shopping"

    def initial_state(self) -> tuple[DraftShoppingItem, ...]:
        return ()

    def step(
        self, state: tuple[DraftShoppingItem, ...], line: str
    ) -> tuple[DraftShoppingItem, ...]:
        item = parse_shopping_line(line)
        return state + (item,) if item else state

    def finish(self, state: tuple[DraftShoppingItem, ...]) -> list[DraftShoppingItem]:
        return list(state)


def parse_shopping_line(line: str) -> DraftShoppingItem | None:
    """Parse "Ayam 1kg Rp.35000" style lines into a shopping item."""
    name = line.strip()
    quantity = "1"
    price = 0

    qty = extract_quantity(name)
    if qty:
        quantity = qty
        name = name.replace(qty, "", 1).strip()

    parsed_price = extract_price(line)
    if parsed_price:
        price, matched = parsed_price
        name = name.replace(matched, "", 1).strip()

    name = _NAME_PUNCTUATION.sub("", name).strip()
    if not name:
        return None

    return DraftShoppingItem(
        name=name,
        quantity=quantity,
        price=price,
        category=guess_shopping_category(name) or SHOPPING_FALLBACK_CATEGORY,
    )


# ── Notes ──────────────────────────────────────────────


class NoteAssembler(Assembler):
    domain = "note"

    def initial_state(self) -> tuple[DraftNote, ...]:
        return ()

    def step(self, state: tuple[DraftNote, ...], line: str) -> tuple[DraftNote, ...]:
        return state + (DraftNote(content=line),)

    def finish(self, state: tuple[DraftNote, ...]) -> list[DraftNote]:
        return list(state)


def create_assembler(
    domain: str,
    *,
    children: Iterable[KnownEntity] = (),
    selected_child: str | None = None,
    today: date | None = None,
    default_deadline_days: int = 7,
    event_categories: Sequence[str] = EVENT_CATEGORIES,
    schedule_days: Sequence[str] = SCHEDULE_DAYS,
) -> Assembler:
    """Create the assembler for a quick-input domain."""
    children = tuple(children)

    match domain:
        case "event":
            return EventAssembler(
                children, categories=event_categories, today=today
            )
        case "homework":
            return HomeworkAssembler(
                children,
                selected_child=selected_child,
                default_deadline_days=default_deadline_days,
                today=today,
            )
        case "schedule":
            return ScheduleAssembler(days=schedule_days, today=today)
        case "shopping":
            return ShoppingAssembler(today=today)
        case "note":
            return NoteAssembler(today=today)
        case _:
            raise ValueError(f"Unknown quick-input domain: {domain}")

"""Draft record types produced by the quick-input parsers."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class KnownEntity:
    """A child (or recipe) the caller already knows about."""

    id: str
    name: str


@dataclass
class DraftEvent:
    title: str
    category: str
    date: str  # YYYY-MM-DD
    time: str = ""  # "H:MM" as typed, empty if none seen
    notes: str = ""
    child_id: str | None = None

    def to_record(self) -> dict:
        return {
            "title": self.title,
            "category": self.category,
            "event_date": self.date,
            "event_time": self.time,
            "notes": self.notes,
            "child_id": self.child_id,
        }


@dataclass
class DraftHomework:
    child_id: str
    subject: str
    description: str
    deadline: str  # YYYY-MM-DD

    def to_record(self) -> dict:
        return {
            "child_id": self.child_id,
            "subject": self.subject,
            "description": self.description,
            "deadline": self.deadline,
            "completed": False,
        }


@dataclass
class DraftScheduleDay:
    """One weekday of a child's school timetable."""

    day_of_week: str  # "senin" .. "sabtu"
    subjects: list[str] = field(default_factory=list)
    uniform: str = ""
    school_hours: str = ""

    def is_empty(self) -> bool:
        return not (self.subjects or self.uniform or self.school_hours)

    def to_record(self) -> dict:
        return {
            "day_of_week": self.day_of_week,
            "subjects": list(self.subjects),
            "uniform": self.uniform,
            "school_hours": self.school_hours,
        }


@dataclass
class DraftShoppingItem:
    name: str
    quantity: str = "1"
    price: int = 0
    category: str = "Lainnya"

    def to_record(self) -> dict:
        return {
            "item": self.name,
            "quantity": self.quantity,
            "price": self.price,
            "category": self.category,
            "checked": False,
            "source": "quick_input",
        }


@dataclass
class DraftNote:
    content: str

    def to_record(self) -> dict:
        return {"content": self.content, "pinned": False, "done": False}

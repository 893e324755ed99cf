"""Quick-input parsing: pasted text to draft household records."""

from .assemblers import (
    DOMAINS,
    Assembler,
    EventAssembler,
    HomeworkAssembler,
    NoteAssembler,
    ScheduleAssembler,
    ShoppingAssembler,
    create_assembler,
    parse_shopping_line,
    parse_text,
)
from .classifier import LineTags, Lookups, classify_line
from .models import (
    DraftEvent,
    DraftHomework,
    DraftNote,
    DraftScheduleDay,
    DraftShoppingItem,
    KnownEntity,
)
from .service import QuickInputResult, load_children, parse_quick_input, run_quick_input
from .submit import SubmissionFailure, SubmissionResult, submit_drafts

__all__ = [
    "DOMAINS",
    "Assembler",
    "EventAssembler",
    "HomeworkAssembler",
    "ScheduleAssembler",
    "ShoppingAssembler",
    "NoteAssembler",
    "create_assembler",
    "parse_text",
    "parse_shopping_line",
    "LineTags",
    "Lookups",
    "classify_line",
    "KnownEntity",
    "DraftEvent",
    "DraftHomework",
    "DraftScheduleDay",
    "DraftShoppingItem",
    "DraftNote",
    "QuickInputResult",
    "load_children",
    "parse_quick_input",
    "run_quick_input",
    "SubmissionResult",
    "SubmissionFailure",
    "submit_drafts",
]

"""SiSatSet household organizer: quick-input parsing and record storage."""

from .config import (
    DatabaseConfig,
    HouseholdConfig,
    QuickInputConfig,
    SisatsetConfig,
    load_config,
)
from .db import RecordStore, StoreError
from .notify import SCHEDULE_UPDATED, UpdateNotifier
from .quickinput import (
    DraftEvent,
    DraftHomework,
    DraftNote,
    DraftScheduleDay,
    DraftShoppingItem,
    KnownEntity,
    QuickInputResult,
    SubmissionResult,
    create_assembler,
    parse_quick_input,
    parse_text,
    run_quick_input,
    submit_drafts,
)

__all__ = [
    "SisatsetConfig",
    "DatabaseConfig",
    "HouseholdConfig",
    "QuickInputConfig",
    "load_config",
    "RecordStore",
    "StoreError",
    "UpdateNotifier",
    "SCHEDULE_UPDATED",
    "KnownEntity",
    "DraftEvent",
    "DraftHomework",
    "DraftScheduleDay",
    "DraftShoppingItem",
    "DraftNote",
    "QuickInputResult",
    "SubmissionResult",
    "create_assembler",
    "parse_text",
    "parse_quick_input",
    "run_quick_input",
    "submit_drafts",
]

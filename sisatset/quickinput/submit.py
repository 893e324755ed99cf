"""Persist parsed drafts through the record store."""

from __future__ import annotations

import asyncio
import logging
from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Sequence

from ..db.store import StoreError
from ..notify import SCHEDULE_UPDATED

if TYPE_CHECKING:
    from ..db.store import RecordStore
    from ..notify import UpdateNotifier

logger = logging.getLogger(__name__)

# domain → (table, carries user_id)
_TABLES: dict[str, tuple[str, bool]] = {
    "event": ("events", True),
    "homework": ("homework", False),
    "schedule": ("schedules", False),
    "shopping": ("shopping_list", True),
    "note": ("notes", True),
}

_SCHEDULE_CONFLICT_KEYS = ("child_id", "day_of_week")


@dataclass
class SubmissionFailure:
    index: int  # position in the draft list
    error: str


@dataclass
class SubmissionResult:
    domain: str
    attempted: int = 0
    succeeded: int = 0
    records: list[dict] = field(default_factory=list)
    failures: list[SubmissionFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


async def submit_drafts(
    store: RecordStore,
    domain: str,
    drafts: Sequence,
    *,
    user_id: str,
    child_id: str | None = None,
    notifier: UpdateNotifier | None = None,
) -> SubmissionResult:
    """Write drafts one at a time, in detection order.

    Each write is awaited before the next starts. A failed record is
    logged and recorded, and the remaining records are still written.

    Args:
        store: Record store to write into.
        domain: "event", "homework", "schedule", "shopping" or "note".
        drafts: Drafts from the domain's assembler.
        user_id: Owner of event, shopping and note records.
        child_id: Child the weekly schedule belongs to (schedule only).
        notifier: Receives ``schedule_updated`` after a schedule batch.

    Raises:
        ValueError: Unknown domain, or a schedule without a child.
    """
    if domain not in _TABLES:
        raise ValueError(f"Unknown quick-input domain: {domain}")
    if domain == "schedule" and not child_id:
        raise ValueError("A child is required to save a schedule")

    table, owned = _TABLES[domain]
    result = SubmissionResult(domain=domain)

    for index, draft in enumerate(drafts):
        record = draft.to_record()
        if owned:
            record["user_id"] = user_id
        if domain == "schedule":
            record["child_id"] = child_id

        result.attempted += 1
        try:
            if domain == "schedule":
                stored = await asyncio.to_thread(
                    store.upsert, table, record, _SCHEDULE_CONFLICT_KEYS
                )
            else:
                stored = await asyncio.to_thread(store.insert, table, record)
        except StoreError as e:
            logger.exception("Failed to save %s #%d", domain, index + 1)
            result.failures.append(SubmissionFailure(index=index, error=str(e)))
            continue

        result.succeeded += 1
        result.records.append(stored)

    logger.info(
        "Saved %d/%d %s record(s) to %s",
        result.succeeded,
        result.attempted,
        domain,
        table,
    )

    if domain == "schedule" and notifier is not None:
        notifier.publish(SCHEDULE_UPDATED, child_id=child_id, saved=result.succeeded)

    return result

"""Parse-then-save entry point used by the CLI and the app shell."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import date
from typing import TYPE_CHECKING, Sequence

from .assemblers import create_assembler, parse_text
from .models import KnownEntity
from .submit import SubmissionResult, submit_drafts

if TYPE_CHECKING:
    from ..config import QuickInputConfig
    from ..db.store import RecordStore
    from ..notify import UpdateNotifier

logger = logging.getLogger(__name__)


@dataclass
class QuickInputResult:
    domain: str
    drafts: list
    submission: SubmissionResult | None = None

    @property
    def detected(self) -> bool:
        """False when the text produced no records at all."""
        return bool(self.drafts)

    @property
    def count(self) -> int:
        """Number of records reported back to the user."""
        if self.submission is not None:
            return self.submission.attempted
        return len(self.drafts)


def load_children(store: RecordStore, user_id: str) -> list[KnownEntity]:
    """Read the household's children as known entities, in insertion order."""
    rows = store.query("children", {"user_id": user_id})
    return [KnownEntity(id=r["id"], name=r["name"]) for r in rows]


def parse_quick_input(
    domain: str,
    text: str,
    *,
    children: Sequence[KnownEntity] = (),
    selected_child: str | None = None,
    config: QuickInputConfig | None = None,
    today: date | None = None,
) -> list:
    """Parse *text* into drafts for *domain* without touching storage."""
    kwargs = {}
    if config is not None:
        kwargs = {
            "default_deadline_days": config.homework_deadline_days,
            "event_categories": config.event_categories,
            "schedule_days": config.schedule_days,
        }
    assembler = create_assembler(
        domain,
        children=children,
        selected_child=selected_child,
        today=today,
        **kwargs,
    )
    drafts = parse_text(text, assembler)
    logger.debug("Detected %d %s draft(s)", len(drafts), domain)
    return drafts


async def run_quick_input(
    store: RecordStore,
    domain: str,
    text: str,
    *,
    user_id: str,
    children: Sequence[KnownEntity] = (),
    selected_child: str | None = None,
    config: QuickInputConfig | None = None,
    notifier: UpdateNotifier | None = None,
    dry_run: bool = False,
    today: date | None = None,
) -> QuickInputResult:
    """Parse *text* and, unless nothing was detected, save every draft.

    Nothing is written until the whole text has been parsed. An empty
    parse returns a result with ``detected == False`` instead of raising.
    """
    drafts = parse_quick_input(
        domain,
        text,
        children=children,
        selected_child=selected_child,
        config=config,
        today=today,
    )
    result = QuickInputResult(domain=domain, drafts=drafts)
    if not drafts:
        logger.info("No %s records detected", domain)
        return result
    if dry_run:
        return result

    result.submission = await submit_drafts(
        store,
        domain,
        drafts,
        user_id=user_id,
        child_id=selected_child,
        notifier=notifier,
    )
    return result

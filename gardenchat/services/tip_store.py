"""
Tip store: published gardening articles.

Two lookups: one tip by slug (used to refresh a topic match) and a
keyword search over title/description/body of tips published before now.
"""

from __future__ import annotations

import asyncio
from datetime import datetime
from functools import partial
from typing import Sequence

from sqlalchemy import func, or_, select
from sqlalchemy.orm import sessionmaker

from gardenchat.schemas.retrieval import TipRecord
from gardenchat.sqlite.database import SessionLocal, session_scope
from gardenchat.sqlite.models import Tip
from gardenchat.utils.logging import get_logger
from gardenchat.utils.timing import timed

logger = get_logger("gardenchat.services.tip_store")


def to_record(tip: Tip) -> TipRecord:
    return TipRecord(
        title=tip.title,
        slug=tip.slug,
        description=tip.description,
        published_at=tip.published_at,
    )


class SqlTipStore:
    def __init__(self, session_factory: sessionmaker | None = None):
        self._session_factory = session_factory or SessionLocal

    def get_by_slug(self, slug: str) -> TipRecord | None:
        with session_scope(self._session_factory) as db:
            tip = db.execute(select(Tip).where(Tip.slug == slug)).scalars().first()
            return to_record(tip) if tip is not None else None

    @timed("tip_store.search")
    def search(self, terms: Sequence[str], limit: int, now: datetime | None = None) -> list[TipRecord]:
        """
        Published tips containing any of ``terms`` (case-insensitive) in
        title, description or body, newest first.
        """
        if not terms:
            return []
        now = now or datetime.utcnow()

        matches = []
        for term in terms:
            needle = term.lower()
            for column in (Tip.title, Tip.description, Tip.body):
                matches.append(func.lower(column).contains(needle, autoescape=True))

        stmt = (
            select(Tip)
            .where(Tip.published_at.is_not(None), Tip.published_at < now, or_(*matches))
            .order_by(Tip.published_at.desc())
            .limit(limit)
        )
        with session_scope(self._session_factory) as db:
            records = [to_record(t) for t in db.execute(stmt).scalars().all()]

        logger.debug("Tip search | terms=%d, rows=%d", len(terms), len(records))
        return records

    # ── Async wrappers (default executor) ───────────────────────────
    async def get_by_slug_async(self, slug: str) -> TipRecord | None:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(self.get_by_slug, slug))

    async def search_async(self, terms: Sequence[str], limit: int) -> list[TipRecord]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(self.search, list(terms), limit))

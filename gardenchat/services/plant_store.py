"""
Plant store: executes filter predicate groups against ``plant_full_data``.

Predicate semantics
  - a condition matches when its term is contained, case-insensitively,
    in any of its fields (JSON list columns are matched on their
    serialised text, so element containment works the same way)
  - a group is the AND of its conditions
  - several groups are OR-combined; a single group is used as-is

Calls are synchronous (one short-lived session each); async callers go
through ``search_async`` which runs the query on the default executor.
"""

from __future__ import annotations

import asyncio
from functools import partial
from typing import Sequence

from sqlalchemy import String, and_, cast, func, or_, select
from sqlalchemy.orm import sessionmaker

from gardenchat.schemas.retrieval import FieldCondition, FilterPredicateGroup, PlantCard
from gardenchat.sqlite.database import SessionLocal, session_scope
from gardenchat.sqlite.models import Plant
from gardenchat.utils.logging import get_logger
from gardenchat.utils.timing import timed

logger = get_logger("gardenchat.services.plant_store")


def _condition_clause(condition: FieldCondition):
    term = condition.term.lower()
    clauses = []
    for field in condition.fields:
        column = getattr(Plant, field, None)
        if column is None:
            raise ValueError(f"Unknown plant field: {field}")
        clauses.append(func.lower(cast(column, String)).contains(term, autoescape=True))
    return or_(*clauses)


def _group_clause(group: FilterPredicateGroup):
    return and_(*(_condition_clause(c) for c in group.conditions))


def build_where(groups: Sequence[FilterPredicateGroup]):
    """Combined WHERE clause for ``groups``; None when there is nothing to filter."""
    if not groups:
        return None
    if len(groups) == 1:
        return _group_clause(groups[0])
    return or_(*(_group_clause(g) for g in groups))


def to_card(plant: Plant) -> PlantCard:
    """Display projection: first common name, first tag, first image."""
    common_names = plant.common_names or []
    tags = plant.tags or []
    images = plant.images or []
    first_image = images[0] if images and isinstance(images[0], dict) else {}
    return PlantCard(
        scientific_name=plant.scientific_name,
        common_name=common_names[0] if common_names else None,
        slug=plant.slug,
        first_tag=tags[0] if tags else None,
        first_image=first_image.get("img"),
        first_image_alt_text=first_image.get("alt_text"),
        description=plant.description,
    )


class SqlPlantStore:
    """Read-only plant queries backed by SQLAlchemy."""

    def __init__(self, session_factory: sessionmaker | None = None):
        self._session_factory = session_factory or SessionLocal

    @timed("plant_store.search")
    def search(self, groups: Sequence[FilterPredicateGroup], limit: int) -> list[PlantCard]:
        """Plants matching ``groups`` (all plants when empty), by scientific name."""
        stmt = select(Plant)
        where = build_where(groups)
        if where is not None:
            stmt = stmt.where(where)
        stmt = stmt.order_by(Plant.scientific_name.asc()).limit(limit)

        with session_scope(self._session_factory) as db:
            rows = db.execute(stmt).scalars().all()
            cards = [to_card(p) for p in rows]

        logger.debug("Plant search | groups=%d, rows=%d", len(groups), len(cards))
        return cards

    async def search_async(self, groups: Sequence[FilterPredicateGroup], limit: int) -> list[PlantCard]:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(self.search, list(groups), limit))

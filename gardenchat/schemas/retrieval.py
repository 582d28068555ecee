"""
Schemas for Stage 2 (Retrieval): filter predicates, plant cards, tips.

FilterPredicateGroup is a plain value; the plant store decides how to
execute it.  Groups are frozen so compiling the same intents twice
yields groups that compare equal.
"""

from __future__ import annotations

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, Field

# Plant text fields a plant-name term is tested against.
PLANT_NAME_FIELDS: tuple[str, ...] = ("scientific_name", "common_names", "genus", "species", "family")


class FieldCondition(BaseModel):
    """True when ``term`` is contained (case-insensitively) in any of ``fields``."""

    fields: tuple[str, ...]
    term: str

    class Config:
        frozen = True


class FilterPredicateGroup(BaseModel):
    """One named predicate: the AND of its conditions."""

    name: str
    source: Literal["intent", "profile"] = "intent"
    conditions: tuple[FieldCondition, ...]

    class Config:
        frozen = True

    def describe(self) -> str:
        parts = [f"{'|'.join(c.fields)}~{c.term!r}" for c in self.conditions]
        return f"{self.name}[{self.source}]({' AND '.join(parts)})"


# ── Store projections ───────────────────────────────────────────────
class PlantCard(BaseModel):
    """Display projection of one plant record."""

    scientific_name: str | None = None
    common_name: str | None = None
    slug: str | None = None
    first_tag: str | None = None
    first_image: str | None = None
    first_image_alt_text: str | None = None
    description: str | None = None


class TipRecord(BaseModel):
    title: str
    slug: str
    description: str | None = None
    published_at: datetime | None = None

    def to_wire(self) -> dict:
        payload: dict = {"title": self.title, "slug": {"current": self.slug}}
        if self.description is not None:
            payload["description"] = self.description
        if self.published_at is not None:
            payload["publishedAt"] = self.published_at.isoformat()
        return payload


# ── Static topic dictionary entries ─────────────────────────────────
class TopicTip(BaseModel):
    title: str
    slug: str

    class Config:
        frozen = True


class TopicEntry(BaseModel):
    topic_key: str
    terms: tuple[str, ...] = Field(default_factory=tuple)
    tip: TopicTip

    class Config:
        frozen = True

"""
ChatResult carries everything one pipeline run produced.

The answer is a live stream: the caller iterates it exactly once after
sending (or logging) the retrieved context.
"""

from __future__ import annotations

import time

from pydantic import BaseModel, Field

from gardenchat.schemas.intent import IntentBase
from gardenchat.schemas.retrieval import FilterPredicateGroup, PlantCard, TipRecord
from gardenchat.services.llm import TextStream


class ChatResult(BaseModel):
    question: str

    # ── Stage outputs ───────────────────────────────────────────────
    intents: list[IntentBase] = Field(default_factory=list)
    filters: list[FilterPredicateGroup] = Field(default_factory=list)
    plants: list[PlantCard] = Field(default_factory=list)
    tips: list[TipRecord] = Field(default_factory=list)
    tips_degraded: bool = False

    answer: TextStream

    # ── Timing ──────────────────────────────────────────────────────
    start_time: float = Field(default_factory=time.time)
    stage_timings: dict[str, float] = Field(default_factory=dict)

    class Config:
        arbitrary_types_allowed = True

    @property
    def elapsed_seconds(self) -> float:
        return time.time() - self.start_time

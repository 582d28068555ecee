"""
Pipeline Orchestrator: top-level entry point for one chat question.

  validate → extract intents → compile filters
           → (retrieve plants ‖ match tips) → compose answer stream

Plant retrieval is fatal; tip matching is best-effort and degrades to
an empty list.  Each stage is independently callable.
"""

from __future__ import annotations

import asyncio

from gardenchat.core.exceptions import InputValidationError
from gardenchat.pipeline.filter_compiler import FilterCompiler
from gardenchat.pipeline.intent import IntentExtractor
from gardenchat.pipeline.plant_retriever import PlantRetriever
from gardenchat.pipeline.response_composer import ResponseComposer
from gardenchat.pipeline.tip_matcher import TopicTipMatcher
from gardenchat.schemas.garden import GardenProfile
from gardenchat.schemas.pipeline import ChatResult
from gardenchat.utils.logging import get_logger
from gardenchat.utils.timing import Timer

logger = get_logger("gardenchat.pipeline.orchestrator")


def validate_question(question: object, min_length: int = 3) -> str:
    """Stripped question, or InputValidationError when it is not usable."""
    if not isinstance(question, str) or not question.strip():
        raise InputValidationError("Question is required and must be a string")
    stripped = question.strip()
    if len(stripped) < min_length:
        raise InputValidationError(f"Question must be at least {min_length} characters")
    return stripped


class ChatPipeline:
    def __init__(
        self,
        extractor: IntentExtractor,
        compiler: FilterCompiler,
        retriever: PlantRetriever,
        matcher: TopicTipMatcher,
        composer: ResponseComposer,
        *,
        min_question_length: int = 3,
    ):
        self.extractor = extractor
        self.compiler = compiler
        self.retriever = retriever
        self.matcher = matcher
        self.composer = composer
        self.min_question_length = min_question_length

    async def run(self, question: str, profile: GardenProfile | None = None) -> ChatResult:
        question = validate_question(question, self.min_question_length)
        timings: dict[str, float] = {}
        logger.info("[PIPELINE] Started | question: %s", question[:80])

        # ── Stage 1: Intent extraction ──────────────────────────────
        async with Timer("stage_1_intent") as t1:
            intents = await self.extractor.extract(question)
        timings["intent"] = t1.elapsed_s

        # ── Stage 2: Retrieval (plants ‖ tips) ──────────────────────
        groups = self.compiler.compile(intents, profile)
        entities = intents[0].entity_values() if intents else {}

        async with Timer("stage_2_retrieval") as t2:
            plants, tips = await asyncio.gather(
                self.retriever.retrieve(groups),
                self.matcher.match(question, entities, profile),
                return_exceptions=True,
            )
        timings["retrieval"] = t2.elapsed_s

        if isinstance(plants, BaseException):
            logger.error("[PIPELINE] Plant retrieval failed; aborting: %s", plants)
            raise plants

        tips_degraded = False
        if isinstance(tips, BaseException):
            if not isinstance(tips, Exception):
                raise tips
            logger.warning("[PIPELINE] Tip matching failed; continuing without tips: %s", tips)
            tips, tips_degraded = [], True

        logger.info(
            "[PIPELINE] Retrieval done (%.2fs) | plants=%d, tips=%d%s",
            t2.elapsed_s, len(plants), len(tips), " (degraded)" if tips_degraded else "",
        )

        # ── Stage 3: Compose ────────────────────────────────────────
        async with Timer("stage_3_compose_start") as t3:
            answer = await self.composer.compose(question, intents, plants, tips, profile)
        timings["compose_start"] = t3.elapsed_s

        return ChatResult(
            question=question,
            intents=intents,
            filters=groups,
            plants=plants,
            tips=tips,
            tips_degraded=tips_degraded,
            answer=answer,
            stage_timings=timings,
        )

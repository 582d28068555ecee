"""
Component wiring for the routes.

Each collaborator has its own provider so tests can swap one with
``app.dependency_overrides`` (the LLM client and the stores, usually).
"""

from __future__ import annotations

from functools import lru_cache

from fastapi import Depends

from gardenchat.core.config import settings
from gardenchat.pipeline.catalog import get_catalog
from gardenchat.pipeline.filter_compiler import FilterCompiler
from gardenchat.pipeline.intent import IntentExtractor
from gardenchat.pipeline.orchestrator import ChatPipeline
from gardenchat.pipeline.plant_retriever import PlantRetriever
from gardenchat.pipeline.response_composer import ResponseComposer
from gardenchat.pipeline.tip_matcher import TopicTipMatcher
from gardenchat.services.garden_store import SqlGardenStore
from gardenchat.services.llm import LLMClient
from gardenchat.services.plant_store import SqlPlantStore
from gardenchat.services.tip_store import SqlTipStore


# ── Collaborators (process-wide) ────────────────────────────────────
@lru_cache(maxsize=1)
def get_llm() -> LLMClient:
    return LLMClient()


@lru_cache(maxsize=1)
def get_plant_store() -> SqlPlantStore:
    return SqlPlantStore()


@lru_cache(maxsize=1)
def get_tip_store() -> SqlTipStore:
    return SqlTipStore()


@lru_cache(maxsize=1)
def get_garden_store() -> SqlGardenStore:
    return SqlGardenStore()


# ── Pipeline components ─────────────────────────────────────────────
def get_extractor(llm: LLMClient = Depends(get_llm)) -> IntentExtractor:
    return IntentExtractor(llm)


def get_filter_compiler() -> FilterCompiler:
    return FilterCompiler(get_catalog())


def get_plant_retriever(store: SqlPlantStore = Depends(get_plant_store)) -> PlantRetriever:
    return PlantRetriever(store, page_size=settings.plant_page_size)


def get_tip_matcher(store: SqlTipStore = Depends(get_tip_store)) -> TopicTipMatcher:
    return TopicTipMatcher(
        store,
        get_catalog(),
        threshold=settings.topic_match_threshold,
        search_limit=settings.tip_search_limit,
    )


def get_composer(llm: LLMClient = Depends(get_llm)) -> ResponseComposer:
    return ResponseComposer(
        llm,
        model=settings.answer_model,
        temperature=settings.answer_temperature,
        max_tokens=settings.answer_max_tokens,
        description_budget=settings.description_char_budget,
        field_budget=settings.field_char_budget,
    )


def get_pipeline(
    extractor: IntentExtractor = Depends(get_extractor),
    compiler: FilterCompiler = Depends(get_filter_compiler),
    retriever: PlantRetriever = Depends(get_plant_retriever),
    matcher: TopicTipMatcher = Depends(get_tip_matcher),
    composer: ResponseComposer = Depends(get_composer),
) -> ChatPipeline:
    return ChatPipeline(
        extractor,
        compiler,
        retriever,
        matcher,
        composer,
        min_question_length=settings.min_question_length,
    )

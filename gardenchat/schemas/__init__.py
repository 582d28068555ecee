"""
Pydantic schemas for every pipeline boundary.
Each module covers one pipeline stage or cross-cutting concern.
"""

from gardenchat.schemas.intent import (
    Intent,
    IntentBase,
    parse_intents,
    dump_intents,
)
from gardenchat.schemas.garden import GardenProfile
from gardenchat.schemas.retrieval import (
    FieldCondition,
    FilterPredicateGroup,
    PlantCard,
    TipRecord,
    TopicEntry,
    TopicTip,
)
from gardenchat.schemas.response import (
    ChatRequest,
    ParseQuestionRequest,
    PlantQueryRequest,
    PlantQueryResponse,
    SearchTipsRequest,
)

__all__ = [
    # Intent
    "Intent",
    "IntentBase",
    "parse_intents",
    "dump_intents",
    # Garden
    "GardenProfile",
    # Retrieval
    "FieldCondition",
    "FilterPredicateGroup",
    "PlantCard",
    "TipRecord",
    "TopicEntry",
    "TopicTip",
    # API
    "ChatRequest",
    "ParseQuestionRequest",
    "PlantQueryRequest",
    "PlantQueryResponse",
    "SearchTipsRequest",
]

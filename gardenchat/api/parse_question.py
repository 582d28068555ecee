"""
Thin API route for /parse-question.

Validates the question and returns the extracted intents as
``[{intent, entities}]``.  Classified errors are turned into JSON by the
handlers in api/errors.py.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from gardenchat.api.dependencies import get_extractor
from gardenchat.pipeline.intent import IntentExtractor
from gardenchat.pipeline.orchestrator import validate_question
from gardenchat.schemas.intent import dump_intents
from gardenchat.schemas.response import ParseQuestionRequest
from gardenchat.utils.logging import get_logger

logger = get_logger("gardenchat.api.parse_question")

router = APIRouter(tags=["Chat"])


@router.post("/parse-question")
async def parse_question(
    request: ParseQuestionRequest,
    extractor: IntentExtractor = Depends(get_extractor),
):
    question = validate_question(request.question, min_length=1)
    logger.info("[PARSE] %s", question[:80])
    intents = await extractor.extract(question)
    return dump_intents(intents)

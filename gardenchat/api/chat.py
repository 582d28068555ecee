"""
Thin API route for /chat.

Runs the full pipeline and streams the result as NDJSON, one event per
line:

  {"type": "context", "intents": [...], "plants": [...], "tips": [...], "tipsDegraded": false}
  {"type": "text", "text": "..."}            (one per chunk)
  {"type": "usage", "usage": {...} | null}   (terminal)
  {"type": "error", "error": "..."}          (instead of usage, if generation fails mid-stream)

Errors before the stream starts come back as ordinary JSON responses.
"""

from __future__ import annotations

import json
from collections.abc import AsyncIterator

from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from gardenchat.api.dependencies import get_garden_store, get_pipeline
from gardenchat.api.errors import CHAT_FAILURE_MESSAGE, error_response
from gardenchat.core.exceptions import GardenChatError, ServiceUnavailableError, UpstreamError
from gardenchat.pipeline.orchestrator import ChatPipeline, validate_question
from gardenchat.schemas.intent import dump_intents
from gardenchat.schemas.pipeline import ChatResult
from gardenchat.schemas.response import ChatRequest
from gardenchat.services.garden_store import SqlGardenStore
from gardenchat.utils.logging import get_logger

logger = get_logger("gardenchat.api.chat")

router = APIRouter(tags=["Chat"])

NDJSON_MEDIA_TYPE = "application/x-ndjson"


def _line(event: dict) -> str:
    return json.dumps(event, ensure_ascii=False) + "\n"


def context_event(result: ChatResult) -> dict:
    return {
        "type": "context",
        "intents": dump_intents(result.intents),
        "plants": [p.model_dump() for p in result.plants],
        "tips": [t.to_wire() for t in result.tips],
        "tipsDegraded": result.tips_degraded,
    }


async def stream_events(result: ChatResult) -> AsyncIterator[str]:
    try:
        yield _line(context_event(result))
        async for chunk in result.answer:
            yield _line({"type": "text", "text": chunk})
    except GardenChatError as e:
        logger.error("[CHAT] Stream failed after %d chars: %s", len(result.answer.text), e)
        message = e.message if isinstance(e, ServiceUnavailableError) else CHAT_FAILURE_MESSAGE
        yield _line({"type": "error", "error": message})
        return
    finally:
        await result.answer.aclose()

    usage = result.answer.usage
    logger.info(
        "[CHAT] Done in %.2fs | %d chars, tokens=%s",
        result.elapsed_seconds,
        len(result.answer.text),
        usage.total_tokens if usage else "n/a",
    )
    yield _line({"type": "usage", "usage": usage.model_dump() if usage else None})


@router.post("/chat")
async def chat(
    request: ChatRequest,
    pipeline: ChatPipeline = Depends(get_pipeline),
    gardens: SqlGardenStore = Depends(get_garden_store),
):
    """
    Answer a gardening question with plants, tips and a streamed reply.

    The question is checked before any garden lookup. ``userGarden`` in
    the body wins over ``gardenId``; an unknown ``gardenId`` is a 404.
    """
    validate_question(request.question, pipeline.min_question_length)
    profile = request.user_garden
    if profile is None and request.garden_id is not None:
        profile = await gardens.get_profile_async(request.garden_id)

    try:
        result = await pipeline.run(request.question, profile)
    except UpstreamError as e:
        logger.error("[CHAT] Pipeline failed: %s", e)
        return error_response(e, message=CHAT_FAILURE_MESSAGE)

    return StreamingResponse(stream_events(result), media_type=NDJSON_MEDIA_TYPE)

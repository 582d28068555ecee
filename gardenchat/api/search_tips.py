"""
Thin API route for /search-tips.
"""

from __future__ import annotations

from fastapi import APIRouter, Depends

from gardenchat.api.dependencies import get_tip_matcher
from gardenchat.pipeline.orchestrator import validate_question
from gardenchat.pipeline.tip_matcher import TopicTipMatcher
from gardenchat.schemas.response import SearchTipsRequest

router = APIRouter(tags=["Tips"])


@router.post("/search-tips")
async def search_tips(
    request: SearchTipsRequest,
    matcher: TopicTipMatcher = Depends(get_tip_matcher),
):
    """Related tips for a question: one topic match, else a keyword search."""
    question = validate_question(request.question, min_length=1)
    tips = await matcher.match(question, request.entities, request.user_garden)
    return {"tips": [t.to_wire() for t in tips]}

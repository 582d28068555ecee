"""
Pipeline Stage 1: Intent extraction.

One JSON-object LLM call, validated against the intent tagged union.
No retries: quota exhaustion surfaces as ServiceUnavailableError (503),
anything else as IntentExtractionError.
"""

from __future__ import annotations

from typing import Any

from pydantic import ValidationError

from gardenchat.core.exceptions import IntentExtractionError, ServiceUnavailableError
from gardenchat.prompts.intent_parser import SYSTEM_PROMPT, build_intent_prompt
from gardenchat.schemas.intent import IntentBase, parse_intents
from gardenchat.services.llm import LLMClient, is_quota_exhausted
from gardenchat.utils.logging import get_logger

logger = get_logger("gardenchat.pipeline.intent")


def normalize_intent_payload(raw: Any) -> list[Any]:
    """
    Accept the shapes models actually return: ``{"intents": [...]}``, a
    bare list, or a single intent object.
    """
    if isinstance(raw, list):
        return raw
    if isinstance(raw, dict):
        if "intents" in raw and "intent" not in raw:
            inner = raw["intents"]
            return inner if isinstance(inner, list) else [inner]
        return [raw]
    raise IntentExtractionError(details=f"Unexpected payload type: {type(raw).__name__}")


class IntentExtractor:
    def __init__(self, llm: LLMClient):
        self.llm = llm

    async def extract(self, question: str) -> list[IntentBase]:
        """Classify ``question`` into a non-empty list of intents."""
        try:
            raw = await self.llm.generate_json(
                system=SYSTEM_PROMPT,
                prompt=build_intent_prompt(question),
            )
        except Exception as e:
            if is_quota_exhausted(e):
                logger.error("[INTENT] Generation quota exhausted: %s", e)
                raise ServiceUnavailableError() from e
            logger.error("[INTENT] Extraction call failed: %s", e)
            raise IntentExtractionError(details=str(e)) from e

        try:
            intents = parse_intents(normalize_intent_payload(raw))
        except ValidationError as e:
            logger.warning("[INTENT] Model output failed validation: %s", e.errors()[:3])
            raise IntentExtractionError(details="Model output did not match the intent schema") from e

        if not intents:
            raise IntentExtractionError(details="No intents returned")

        logger.info("[INTENT] %s", ", ".join(i.name for i in intents))
        return intents

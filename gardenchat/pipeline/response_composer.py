"""
Pipeline Stage 3: Response composition.

Builds the answer prompt from the retrieved context and starts a
streamed generation.  Plant cards are trimmed before they go into the
prompt: descriptions to ``description_budget`` characters, every other
string to ``field_budget``, keys camel-cased, empty values dropped.
"""

from __future__ import annotations

from typing import Any, Sequence

from gardenchat.prompts.answer_generator import SYSTEM_PROMPT, build_answer_prompt
from gardenchat.schemas.garden import GardenProfile
from gardenchat.schemas.intent import IntentBase, dump_intents
from gardenchat.schemas.retrieval import PlantCard, TipRecord
from gardenchat.services.llm import LLMClient, TextStream, classify_generation_error
from gardenchat.utils.logging import get_logger
from gardenchat.utils.text import camelize, truncate

logger = get_logger("gardenchat.pipeline.response_composer")


def trim_plant(plant: PlantCard, description_budget: int = 300, field_budget: int = 100) -> dict[str, Any]:
    trimmed: dict[str, Any] = {}
    for key, value in plant.model_dump(exclude_none=True).items():
        if isinstance(value, str):
            value = truncate(value, description_budget if key == "description" else field_budget)
        trimmed[camelize(key)] = value
    return trimmed


class ResponseComposer:
    def __init__(
        self,
        llm: LLMClient,
        *,
        model: str | None = None,
        temperature: float | None = None,
        max_tokens: int | None = None,
        description_budget: int = 300,
        field_budget: int = 100,
    ):
        self.llm = llm
        self.model = model
        self.temperature = temperature
        self.max_tokens = max_tokens
        self.description_budget = description_budget
        self.field_budget = field_budget

    def build_prompt(
        self,
        question: str,
        intents: Sequence[IntentBase],
        plants: Sequence[PlantCard],
        tips: Sequence[TipRecord],
        profile: GardenProfile | None = None,
    ) -> str:
        return build_answer_prompt(
            question=question,
            intents=dump_intents(list(intents)),
            plants=[trim_plant(p, self.description_budget, self.field_budget) for p in plants],
            tips=[{"title": t.title, "slug": t.slug} for t in tips],
            profile_summary=profile.summary() if profile is not None else None,
        )

    async def compose(
        self,
        question: str,
        intents: Sequence[IntentBase],
        plants: Sequence[PlantCard],
        tips: Sequence[TipRecord],
        profile: GardenProfile | None = None,
    ) -> TextStream:
        """Start the answer stream; iterate the result once to read it."""
        prompt = self.build_prompt(question, intents, plants, tips, profile)
        logger.info(
            "[COMPOSE] Prompt ready | %d chars, plants=%d, tips=%d, personalised=%s",
            len(prompt), len(plants), len(tips), profile is not None,
        )
        try:
            return await self.llm.stream_text(
                system=SYSTEM_PROMPT,
                prompt=prompt,
                model=self.model,
                temperature=self.temperature,
                max_tokens=self.max_tokens,
            )
        except Exception as e:
            logger.error("[COMPOSE] Generation failed to start: %s", e)
            raise classify_generation_error(e) from e

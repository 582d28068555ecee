"""
Request and response schemas for the API layer.

Request bodies keep the field names the web client already sends
(``userGarden``, ``gardenId``).  ``question`` is typed loosely so the
routes can answer with a 400 and a readable message instead of a
generic validation error.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field

from gardenchat.core.exceptions import InputValidationError
from gardenchat.schemas.garden import GardenProfile
from gardenchat.schemas.retrieval import PlantCard


# ── Requests ────────────────────────────────────────────────────────
class ParseQuestionRequest(BaseModel):
    question: Any = None


class SearchTipsRequest(BaseModel):
    question: Any = None
    entities: dict[str, Any] | None = None
    user_garden: GardenProfile | None = Field(default=None, alias="userGarden")

    class Config:
        populate_by_name = True


class ChatRequest(BaseModel):
    question: Any = None
    user_garden: GardenProfile | None = Field(default=None, alias="userGarden")
    garden_id: int | None = Field(default=None, alias="gardenId")

    class Config:
        populate_by_name = True


class PlantQueryRequest(BaseModel):
    """
    Normalised query-builder body.

    Accepted shapes: a bare list of intents, a single intent object,
    ``{"intents": [...], "userGarden": {...}}`` and the parse-question
    wrapper ``{"intents": {"intents": [...]}}``.
    """

    intents: list[dict[str, Any]]
    user_garden: GardenProfile | None = None

    @classmethod
    def from_payload(cls, body: Any) -> "PlantQueryRequest":
        garden = None
        if isinstance(body, list):
            items: Any = body
        elif isinstance(body, dict) and "intent" in body and "intents" not in body:
            items = [body]
        elif isinstance(body, dict) and body.get("intents") is not None:
            items = body["intents"]
            garden = body.get("userGarden")
        else:
            raise InputValidationError("Invalid request format. Expected an array of intents.")

        if not isinstance(items, list):
            if isinstance(items, dict) and isinstance(items.get("intents"), list):
                items = items["intents"]
            else:
                items = [items]

        if not all(isinstance(item, dict) and "intent" in item for item in items):
            raise InputValidationError("Invalid filter format. Each intent must have an 'intent' property.")

        return cls(
            intents=[{"intent": item["intent"], "entities": item.get("entities") or {}} for item in items],
            user_garden=GardenProfile.model_validate(garden) if garden else None,
        )


# ── Responses ───────────────────────────────────────────────────────
class PlantQueryResponse(BaseModel):
    query: str = "Plant search based on filters"
    filters: list[str] = Field(default_factory=list)
    data: list[PlantCard] = Field(default_factory=list)

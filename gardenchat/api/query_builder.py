"""
Thin API route for /query-builder.

Accepts intents in any of the shapes the web client sends, compiles
them (plus an optional garden profile) into filters and returns the
first page of matching plants.
"""

from __future__ import annotations

from typing import Any

from fastapi import APIRouter, Body, Depends
from pydantic import ValidationError

from gardenchat.api.dependencies import get_filter_compiler, get_plant_retriever
from gardenchat.core.exceptions import InputValidationError
from gardenchat.pipeline.filter_compiler import FilterCompiler
from gardenchat.pipeline.plant_retriever import PlantRetriever
from gardenchat.schemas.intent import parse_intents
from gardenchat.schemas.response import PlantQueryRequest, PlantQueryResponse
from gardenchat.utils.logging import get_logger

logger = get_logger("gardenchat.api.query_builder")

router = APIRouter(tags=["Plants"])


@router.post("/query-builder", response_model=PlantQueryResponse)
async def query_builder(
    body: Any = Body(...),
    compiler: FilterCompiler = Depends(get_filter_compiler),
    retriever: PlantRetriever = Depends(get_plant_retriever),
):
    try:
        request = PlantQueryRequest.from_payload(body)
        intents = parse_intents(request.intents, coerce_unknown=True)
    except ValidationError as e:
        details = [{"loc": list(err.get("loc", ())), "msg": err.get("msg")} for err in e.errors()]
        raise InputValidationError("Invalid filter format.", details=details) from e

    groups = compiler.compile(intents, request.user_garden)
    plants = await retriever.retrieve(groups)
    return PlantQueryResponse(filters=[g.name for g in groups], data=plants)

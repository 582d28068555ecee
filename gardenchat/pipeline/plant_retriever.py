"""
Pipeline Stage 2b: Plant retrieval.

Runs the compiled groups against the plant store.  No groups means the
default query (first page of all plants by scientific name).  Failures
are fatal for the chat flow and surface as PlantRetrievalError.
"""

from __future__ import annotations

from typing import Sequence

from gardenchat.core.exceptions import GardenChatError, PlantRetrievalError
from gardenchat.schemas.retrieval import FilterPredicateGroup, PlantCard
from gardenchat.services.plant_store import SqlPlantStore
from gardenchat.utils.logging import get_logger
from gardenchat.utils.timing import Timer

logger = get_logger("gardenchat.pipeline.plant_retriever")


class PlantRetriever:
    def __init__(self, store: SqlPlantStore, page_size: int = 6):
        self.store = store
        self.page_size = page_size

    async def retrieve(self, groups: Sequence[FilterPredicateGroup]) -> list[PlantCard]:
        try:
            async with Timer() as t:
                plants = await self.store.search_async(groups, self.page_size)
        except GardenChatError:
            raise
        except Exception as e:
            logger.error("[PLANTS] Query failed: %s", e, exc_info=True)
            raise PlantRetrievalError(details=str(e)) from e

        logger.info(
            "[PLANTS] %d plant(s) in %.1fms | %s",
            len(plants),
            t.elapsed_ms,
            "default query" if not groups else f"{len(groups)} group(s)",
        )
        return plants

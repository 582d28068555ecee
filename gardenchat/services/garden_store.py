"""Garden store: loads a stored garden profile by id (read-only)."""

from __future__ import annotations

import asyncio
from functools import partial

from sqlalchemy.orm import sessionmaker

from gardenchat.core.exceptions import GardenNotFoundError
from gardenchat.schemas.garden import GardenProfile
from gardenchat.sqlite.database import SessionLocal, session_scope
from gardenchat.sqlite.models import UserGarden
from gardenchat.utils.logging import get_logger

logger = get_logger("gardenchat.services.garden_store")


class SqlGardenStore:
    def __init__(self, session_factory: sessionmaker | None = None):
        self._session_factory = session_factory or SessionLocal

    def get_profile(self, garden_id: int) -> GardenProfile:
        with session_scope(self._session_factory) as db:
            garden = db.get(UserGarden, garden_id)
            if garden is None:
                logger.info("[GARDEN] Garden %s not found", garden_id)
                raise GardenNotFoundError(details={"gardenId": garden_id})
            data = dict(garden.preferences or {})
            data.setdefault("name", garden.name)
        return GardenProfile.model_validate(data)

    async def get_profile_async(self, garden_id: int) -> GardenProfile:
        loop = asyncio.get_running_loop()
        return await loop.run_in_executor(None, partial(self.get_profile, garden_id))

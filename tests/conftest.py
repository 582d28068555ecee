"""
Pytest configuration for gardenchat tests.

Provides a seeded SQLite database (one file per test), store instances
bound to it, and a scripted stand-in for the generation capability.
"""

from __future__ import annotations

from datetime import datetime

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from gardenchat.pipeline.catalog import get_catalog
from gardenchat.pipeline.filter_compiler import FilterCompiler
from gardenchat.pipeline.intent import IntentExtractor
from gardenchat.pipeline.orchestrator import ChatPipeline
from gardenchat.pipeline.plant_retriever import PlantRetriever
from gardenchat.pipeline.response_composer import ResponseComposer
from gardenchat.pipeline.tip_matcher import TopicTipMatcher
from gardenchat.services.garden_store import SqlGardenStore
from gardenchat.services.llm import StreamUsage, TextStream
from gardenchat.services.plant_store import SqlPlantStore
from gardenchat.services.tip_store import SqlTipStore
from gardenchat.sqlite import models
from gardenchat.sqlite.database import Base

FULL_SUN = "Full Sun (6 or more hours of direct sunlight a day)"
PART_SHADE = "Partial Shade (2-6 hours of direct sunlight)"
DEEP_SHADE = "Deep shade (Less than 2 hours to no direct sunlight)"

LONG_DESCRIPTION = (
    "A compact, disease-resistant shrub rose that flowers in flushes from late spring until frost. "
    "It needs no deadheading, tolerates heat and humidity, and fits foundation beds, mixed borders "
    "and large containers. Feed lightly after each flush and prune hard in late winter to keep the "
    "plant dense and about three feet tall."
)

PLANTS = [
    dict(
        slug="rosa-radrazz", scientific_name="Rosa 'Radrazz'", common_names=["Knock Out Rose"],
        genus="Rosa", species="", family="Rosaceae", description=LONG_DESCRIPTION,
        tags=["Shrub", "Flowering"], images=[{"img": "https://img.example/rose.jpg", "alt_text": "Red shrub rose"}],
        light_requirements=[FULL_SUN], soil_drainage=["Good Drainage"], nc_regions=["Coastal", "Piedmont"],
        usda_zones=["5a", "6a", "7a", "7b", "8a"], flower_colors=["Red"], plant_types=["Shrub"],
    ),
    dict(
        slug="hosta-plantaginea", scientific_name="Hosta plantaginea", common_names=["August Lily"],
        genus="Hosta", species="plantaginea", family="Asparagaceae", description="Fragrant shade perennial.",
        tags=["Perennial"], images=[],
        light_requirements=[DEEP_SHADE, PART_SHADE], soil_texture=["Clay", "Loam (Silt)"],
        nc_regions=["Mountains"], usda_zones=["3a", "4a", "5a", "6a", "7a"], flower_colors=["White"],
        plant_types=["Herbaceous Perennial"],
    ),
    dict(
        slug="opuntia-humifusa", scientific_name="Opuntia humifusa", common_names=["Eastern Prickly Pear"],
        genus="Opuntia", species="humifusa", family="Cactaceae", description="Native low cactus.",
        tags=["Native"], images=[{"img": "https://img.example/opuntia.jpg", "alt_text": "Prickly pear pads"}],
        light_requirements=[FULL_SUN], soil_drainage=["Very Dry", "Good Drainage"], soil_texture=["Sand"],
        resistance_to_challenges=["Drought", "Deer"], nc_regions=["Coastal", "Piedmont"],
        usda_zones=["4a", "5a", "6a", "7a", "8a", "9a"], plant_types=["Cactus"],
    ),
    dict(
        slug="echinacea-purpurea", scientific_name="Echinacea purpurea", common_names=["Purple Coneflower"],
        genus="Echinacea", species="purpurea", family="Asteraceae", description="Long-blooming prairie perennial.",
        tags=["Pollinator"], images=[],
        light_requirements=[FULL_SUN, PART_SHADE], attracts=["Butterflies", "Bees"],
        nc_regions=["Mountains", "Piedmont", "Coastal"], usda_zones=["3a", "5a", "7a", "8a"],
        flower_colors=["Purple/Lavender"], plant_types=["Herbaceous Perennial"],
    ),
    dict(
        slug="acer-rubrum", scientific_name="Acer rubrum", common_names=["Red Maple"],
        genus="Acer", species="rubrum", family="Sapindaceae", description="Fast-growing shade tree.",
        tags=["Tree"], images=[],
        light_requirements=[FULL_SUN, PART_SHADE], leaf_fall_color=["Red", "Orange"], growth_rate="Rapid",
        nc_regions=["Mountains", "Piedmont", "Coastal"], usda_zones=["3a", "5a", "7a", "9a"], plant_types=["Tree"],
    ),
    dict(
        slug="salvia-rosmarinus", scientific_name="Salvia rosmarinus", common_names=["Rosemary"],
        genus="Salvia", species="rosmarinus", family="Lamiaceae", description="Evergreen culinary herb.",
        tags=["Herb"], images=[],
        light_requirements=[FULL_SUN], soil_drainage=["Good Drainage"], soil_texture=["Sand"],
        nc_regions=["Coastal"], usda_zones=["7a", "8a", "9a"], plant_types=["Herb"],
    ),
    dict(
        slug="lavandula-angustifolia", scientific_name="Lavandula angustifolia", common_names=["English Lavender"],
        genus="Lavandula", species="angustifolia", family="Lamiaceae", description="Fragrant sub-shrub.",
        tags=["Herb"], images=[],
        light_requirements=[FULL_SUN], soil_drainage=["Good Drainage"], nc_regions=["Piedmont"],
        usda_zones=["5a", "6a", "7a", "8a"], flower_colors=["Purple/Lavender"], plant_types=["Herb"],
    ),
    dict(
        slug="zinnia-elegans", scientific_name="Zinnia elegans", common_names=["Common Zinnia"],
        genus="Zinnia", species="elegans", family="Asteraceae", description="Easy cut-flower annual.",
        tags=["Annual"], images=[],
        light_requirements=[FULL_SUN], attracts=["Butterflies"], nc_regions=["Piedmont", "Coastal"],
        usda_zones=["7a", "8a"], flower_colors=["Pink", "Orange"], plant_types=["Annual"],
    ),
]

TIPS = [
    dict(
        title="Fertilizing Rose Bushes (Updated)", slug="fertilizing-rose-bushes-guide",
        description="Feed roses in early spring and after each flush.", body="Use a balanced granular feed.",
        published_at=datetime(2025, 3, 1),
    ),
    dict(
        title="Mulching Basics", slug="mulching-basics",
        description="How deep to spread mulch.", body="Spread mulch two inches deep and keep it off stems.",
        published_at=datetime(2024, 5, 1),
    ),
    dict(
        title="Five Mulch Mistakes", slug="mulch-mistakes",
        description="Volcano mulching and other errors.", body="Never pile mulch against trunks.",
        published_at=datetime(2025, 1, 10),
    ),
    dict(
        title="Mulch Trends Next Decade", slug="mulch-future",
        description="Scheduled post.", body="Mulch of the future.",
        published_at=datetime(2999, 1, 1),
    ),
    dict(
        title="Mulch Draft", slug="mulch-draft",
        description="Unpublished draft.", body="Mulch draft body.",
        published_at=None,
    ),
]

GARDEN_PREFERENCES = {
    "ncRegionsIds": ["Piedmont"],
    "usda_zones_ids": ["7b"],
    "sunlightIds": [FULL_SUN],
    "soilTextureIds": ["Clay"],
    "soilPhIds": None,
    "resistanceChallengeIds": ["Drought"],
    "plantTypeIds": ["Herb"],
}


# ── Database ────────────────────────────────────────────────────────
@pytest.fixture
def session_factory(tmp_path):
    """Fresh seeded database file per test."""
    engine = create_engine(f"sqlite:///{tmp_path / 'gardenchat-test.db'}", connect_args={"check_same_thread": False})
    Base.metadata.create_all(bind=engine)
    factory = sessionmaker(bind=engine, autocommit=False, autoflush=False, expire_on_commit=False)

    db = factory()
    try:
        db.add_all(models.Plant(**p) for p in PLANTS)
        db.add_all(models.Tip(**t) for t in TIPS)
        db.add(models.UserGarden(id=1, user_id="user-1", name="Back yard", preferences=GARDEN_PREFERENCES))
        db.commit()
    finally:
        db.close()

    yield factory
    engine.dispose()


@pytest.fixture
def plant_store(session_factory):
    return SqlPlantStore(session_factory)


@pytest.fixture
def tip_store(session_factory):
    return SqlTipStore(session_factory)


@pytest.fixture
def garden_store(session_factory):
    return SqlGardenStore(session_factory)


@pytest.fixture
def catalog():
    return get_catalog()


# ── Generation capability ───────────────────────────────────────────
class QuotaError(Exception):
    """Provider refusal shaped like an HTTP 402 from an OpenAI-compatible API."""

    status_code = 402


class FakeLLM:
    """
    Scripted generation capability.

    ``payload`` is returned from ``generate_json``; ``chunks`` are streamed
    by ``stream_text`` followed by a usage record (or ``stream_error``).
    """

    def __init__(
        self,
        payload=None,
        chunks=("Feed your roses ", "in early spring."),
        json_error: Exception | None = None,
        start_error: Exception | None = None,
        stream_error: Exception | None = None,
    ):
        self.payload = payload if payload is not None else {"intents": [{"intent": "general_description", "entities": {}}]}
        self.chunks = list(chunks)
        self.json_error = json_error
        self.start_error = start_error
        self.stream_error = stream_error
        self.json_calls: list[str] = []
        self.stream_calls: list[str] = []
        self.closed: list[bool] = []

    async def generate_json(self, *, system, prompt, model=None, temperature=None):
        self.json_calls.append(prompt)
        if self.json_error is not None:
            raise self.json_error
        return self.payload

    async def stream_text(self, *, system, prompt, model=None, temperature=None, max_tokens=None):
        self.stream_calls.append(prompt)
        if self.start_error is not None:
            raise self.start_error

        async def source():
            for chunk in self.chunks:
                yield chunk
            if self.stream_error is not None:
                raise self.stream_error
            yield StreamUsage(prompt_tokens=120, completion_tokens=8, total_tokens=128)

        async def on_close():
            self.closed.append(True)

        return TextStream(source(), on_close=on_close)


@pytest.fixture
def fake_llm():
    return FakeLLM()


@pytest.fixture
def make_pipeline(plant_store, tip_store, catalog):
    """Build a ChatPipeline around a given FakeLLM (and optional store overrides)."""

    def _make(llm, *, plants=None, tips=None):
        return ChatPipeline(
            IntentExtractor(llm),
            FilterCompiler(catalog),
            PlantRetriever(plants or plant_store, page_size=6),
            TopicTipMatcher(tips or tip_store, catalog),
            ResponseComposer(llm),
        )

    return _make


@pytest.fixture
def llm_factory():
    """The FakeLLM class, for tests that script their own responses."""
    return FakeLLM


@pytest.fixture
def quota_error():
    return QuotaError("Insufficient Balance")

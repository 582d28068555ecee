"""
Static pipeline configuration.

Topic dictionary, stop words, the intent → plant-attribute mapping and
the garden-profile rules.  Built once per process (``get_catalog``) and
handed to the components that need it; nothing here is mutated after
import.

Topic order matters: the tip matcher keeps the first topic that reaches
the highest score, so ties go to whichever entry is listed first.
"""

from __future__ import annotations

from dataclasses import dataclass
from functools import lru_cache
from types import MappingProxyType
from typing import Mapping

from gardenchat.schemas.retrieval import TopicEntry, TopicTip


@dataclass(frozen=True)
class FilterMapping:
    """
    How one intent filters plants.

    ``slot`` is the categorical entity tested against plant column
    ``field``.  ``None`` for both means the intent only filters by plant name.
    """

    intent: str
    slot: str | None
    field: str | None


@dataclass(frozen=True)
class ProfileFilter:
    """Garden-profile attribute that implies a filter when no intent covers it."""

    attribute: str
    intent: str
    slot: str


@dataclass(frozen=True)
class ProfileRelevanceRule:
    """
    Topic bonus rule.  Applies when ``topic_fragment`` is in the topic key
    and one of ``attributes`` is non-empty (or, with ``needle``, holds a
    value containing it).
    """

    topic_fragment: str
    attributes: tuple[str, ...]
    needle: str | None = None


# ── Filter mapping ──────────────────────────────────────────────────
FILTER_MAPPINGS: tuple[FilterMapping, ...] = (
    FilterMapping("light_requirements", "light_level", "light_requirements"),
    FilterMapping("soil_texture", "soil_texture", "soil_texture"),
    FilterMapping("soil_ph", "soil_ph_value", "soil_ph"),
    FilterMapping("soil_drainage", "soil_drainage_type", "soil_drainage"),
    FilterMapping("available_space", "space_requirement", "available_space_to_plant"),
    FilterMapping("nc_regions", "region", "nc_regions"),
    FilterMapping("usda_zones", "usda_zone", "usda_zones"),
    FilterMapping("landscape_location", "location_type", "landscape_location"),
    FilterMapping("landscape_theme", "theme_type", "landscape_theme"),
    FilterMapping("attracts", "wildlife_type", "attracts"),
    FilterMapping("resistance_to_challenges", "challenge_type", "resistance_to_challenges"),
    FilterMapping("problems", "problem_type", "problems"),
    FilterMapping("plant_type", "type", "plant_types"),
    FilterMapping("woody_plant_leaf_characteristics", "leaf_type", "leaf_characteristics"),
    FilterMapping("habit_form", "growth_habit", "plant_habit"),
    FilterMapping("growth_rate", "growth_speed", "growth_rate"),
    FilterMapping("maintenance", "maintenance_level", "maintenance"),
    FilterMapping("texture", "texture_type", "texture"),
    FilterMapping("flower_color", "flower_color", "flower_colors"),
    FilterMapping("flower_value", "flower_trait", "flower_value_to_gardener"),
    FilterMapping("flower_bloom_time", "bloom_season", "flower_bloom_time"),
    FilterMapping("leaf_color", "leaf_color", "leaf_color"),
    FilterMapping("leaf_value", "leaf_trait", "leaf_value_to_gardener"),
    FilterMapping("leaf_fall_color", "fall_color", "leaf_fall_color"),
    FilterMapping("general_description", None, None),
)

PROFILE_FILTERS: tuple[ProfileFilter, ...] = (
    ProfileFilter("nc_regions_ids", "nc_regions", "region"),
    ProfileFilter("usda_zones_ids", "usda_zones", "usda_zone"),
    ProfileFilter("sunlight_ids", "light_requirements", "light_level"),
    ProfileFilter("soil_texture_ids", "soil_texture", "soil_texture"),
    ProfileFilter("soil_ph_ids", "soil_ph", "soil_ph_value"),
    ProfileFilter("soil_drainage_ids", "soil_drainage", "soil_drainage_type"),
    ProfileFilter("space_available_ids", "available_space", "space_requirement"),
)


# ── Topic dictionary ────────────────────────────────────────────────
def _topic(key: str, terms: tuple[str, ...], title: str, slug: str) -> TopicEntry:
    return TopicEntry(topic_key=key, terms=terms, tip=TopicTip(title=title, slug=slug))


TOPICS: tuple[TopicEntry, ...] = (
    _topic(
        "rose fertilizer",
        ("rose", "roses", "fertilize", "fertilizer", "fertilizing", "feed", "feeding", "nutrients", "blooms"),
        "Fertilizing Your Rose Bushes: The Ultimate Guide for Vibrant Blooms",
        "fertilizing-rose-bushes-guide",
    ),
    _topic(
        "succulent watering",
        ("succulent", "succulents", "water", "watering", "drought", "overwater", "underwater"),
        "Best Indoor Plants for Low-Light: Thrive in Dim Conditions",
        "top-indoor-plants-low-light-conditions",
    ),
    _topic(
        "plant sunlight",
        ("sunlight", "light", "bright", "dim", "shade", "sun", "sunny", "lighting", "window"),
        "Optimizing Plant Growth: Essential Sunlight Requirements",
        "understanding-sunlight-needs-for-plants",
    ),
    _topic(
        "plant identification",
        ("identify", "identification", "recognize", "what plant", "which plant", "type of plant", "species", "variety"),
        "Identifying Plants: A Comprehensive Guide to Recognizing Flora by Leaves and Flower Shapes",
        "identifying-plants-leaves-flowers-guide",
    ),
    _topic(
        "repotting",
        ("repot", "repotting", "pot", "root bound", "rootbound", "bigger pot", "larger pot", "transplant"),
        "Mastering the Art of Repotting Root-Bound Houseplants for Thriving Indoor Gardens",
        "repotting-root-bound-houseplants-guide",
    ),
    _topic(
        "monstera care",
        ("monstera", "swiss cheese plant", "deliciosa", "fenestration", "split leaf"),
        "Ultimate Guide: How to Grow Big and Healthy Monstera Plants",
        "growing-healthy-monstera-plants-guide",
    ),
    _topic(
        "companion herbs",
        ("herb", "herbs", "companion", "together", "container", "pot", "planter", "kitchen herbs"),
        "Companion Herbs: Growing Herbs Together in the Same Container",
        "companion-herbs-container-growing",
    ),
    _topic(
        "pothos propagation",
        ("pothos", "propagate", "propagation", "cutting", "cuttings", "water propagation", "root", "node"),
        "Comprehensive Guide to Successfully Propagating Pothos Cuttings",
        "propagating-pothos-cuttings-guide",
    ),
    _topic(
        "cactus soil",
        ("cactus", "cacti", "soil", "mix", "potting", "drain", "drainage", "gritty", "sandy"),
        "Create the Perfect Soil Mix for Cactus Plants: A Comprehensive Guide",
        "perfect-soil-mix-cactus-plants",
    ),
    _topic(
        "orchid problems",
        ("orchid", "orchids", "yellow", "yellowing", "leaves", "wilting", "dropping", "spots"),
        "Addressing Yellowing Leaves on Orchids - Understanding the Causes and Solutions",
        "orchid-yellowing-leaves-solutions",
    ),
    _topic(
        "drought tolerant",
        ("drought", "dry", "xeriscape", "low water", "water efficient", "arid", "heat", "sun", "hot climate"),
        "Top Drought-Tolerant Plants for Your Outdoor Garden: Thriving in Dry Conditions",
        "drought-tolerant-plants-outdoor-garden",
    ),
)

# Matched against topic *names*; renaming a topic silently drops its bonus.
PROFILE_RELEVANCE_RULES: tuple[ProfileRelevanceRule, ...] = (
    ProfileRelevanceRule("sunlight", ("sunlight_ids",)),
    ProfileRelevanceRule("soil", ("soil_texture_ids", "soil_ph_ids", "soil_drainage_ids")),
    ProfileRelevanceRule("drought", ("resistance_challenge_ids",), "drought"),
    ProfileRelevanceRule("rose", ("specific_plant_ids",), "rose"),
    ProfileRelevanceRule("herb", ("plant_type_ids",), "herb"),
    ProfileRelevanceRule("cactus", ("plant_type_ids",), "succulent"),
)

STOP_WORDS: frozenset[str] = frozenset({
    "what", "when", "where", "which", "how", "does", "can", "will", "should",
    "would", "could", "about", "have", "need", "want", "like", "many", "much",
    "best", "good", "better", "well", "often", "frequency", "type", "kind",
    "sort", "tips", "ways", "methods", "techniques",
})


# ── Catalog ─────────────────────────────────────────────────────────
@dataclass(frozen=True)
class PipelineCatalog:
    filter_mappings: Mapping[str, FilterMapping]
    profile_filters: tuple[ProfileFilter, ...]
    topics: tuple[TopicEntry, ...]
    relevance_rules: tuple[ProfileRelevanceRule, ...]
    stop_words: frozenset[str]


def build_catalog() -> PipelineCatalog:
    return PipelineCatalog(
        filter_mappings=MappingProxyType({m.intent: m for m in FILTER_MAPPINGS}),
        profile_filters=PROFILE_FILTERS,
        topics=TOPICS,
        relevance_rules=PROFILE_RELEVANCE_RULES,
        stop_words=STOP_WORDS,
    )


@lru_cache(maxsize=1)
def get_catalog() -> PipelineCatalog:
    """Process-wide catalog instance."""
    return build_catalog()

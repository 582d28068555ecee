"""Unit tests for the filter compiler

Tests cover:
- Categorical slot -> attribute condition
- Plant-name condition alongside the attribute
- Intents without a mapping or without slots are skipped
- Profile-implied filters and their fixed order
- Explicit intents take precedence over the profile
- Determinism
"""

from __future__ import annotations

import pytest

from gardenchat.pipeline.filter_compiler import FilterCompiler
from gardenchat.schemas.garden import GardenProfile
from gardenchat.schemas.intent import parse_intents
from gardenchat.schemas.retrieval import PLANT_NAME_FIELDS, FieldCondition

FULL_SUN = "Full Sun (6 or more hours of direct sunlight a day)"


@pytest.fixture
def compiler(catalog):
    return FilterCompiler(catalog)


def test_light_intent_compiles_expanded_light_level(compiler):
    intents = parse_intents([{"intent": "light_requirements", "entities": {"light_level": "high"}}])

    groups = compiler.compile(intents)

    assert len(groups) == 1
    assert groups[0].name == "light_requirements"
    assert groups[0].source == "intent"
    assert groups[0].conditions == (FieldCondition(fields=("light_requirements",), term=FULL_SUN),)


def test_plant_name_adds_name_condition(compiler):
    intents = parse_intents([
        {"intent": "soil_drainage", "entities": {"soil_drainage_type": "Good Drainage", "plant": "lavender"}}
    ])

    (group,) = compiler.compile(intents)

    assert group.conditions == (
        FieldCondition(fields=("soil_drainage",), term="Good Drainage"),
        FieldCondition(fields=PLANT_NAME_FIELDS, term="lavender"),
    )


def test_single_character_plant_name_is_ignored(compiler):
    intents = parse_intents([
        {"intent": "soil_drainage", "entities": {"soil_drainage_type": "Good Drainage", "plant": " a "}}
    ])

    (group,) = compiler.compile(intents)

    assert group.conditions == (FieldCondition(fields=("soil_drainage",), term="Good Drainage"),)


def test_short_name_falls_through_to_next_slot(compiler):
    intents = parse_intents([
        {"intent": "general_description", "entities": {"scientific_name": "x", "plant": "coneflower"}}
    ])

    (group,) = compiler.compile(intents)

    assert group.conditions == (FieldCondition(fields=PLANT_NAME_FIELDS, term="coneflower"),)


def test_scientific_name_wins_over_plant(compiler):
    intents = parse_intents([
        {"intent": "general_description", "entities": {"plant": "coneflower", "scientific_name": "Echinacea"}}
    ])

    (group,) = compiler.compile(intents)

    assert group.conditions == (FieldCondition(fields=PLANT_NAME_FIELDS, term="Echinacea"),)


def test_intent_without_mapping_is_skipped(compiler):
    intents = parse_intents([
        {"intent": "fertilizer_requirements", "entities": {"plant": "rose"}},
        {"intent": "unknown", "entities": {}},
    ])

    assert compiler.compile(intents) == []


def test_intent_without_slots_is_skipped(compiler):
    intents = parse_intents([{"intent": "flower_color", "entities": {}}])

    assert compiler.compile(intents) == []


def test_profile_filters_follow_fixed_order(compiler):
    profile = GardenProfile.model_validate({
        "spaceAvailableIds": ["3 feet-6 feet"],
        "soilTextureIds": ["Clay", "Sand"],
        "sunlightIds": [FULL_SUN],
        "usda_zones_ids": ["7b"],
        "ncRegionsIds": ["Piedmont"],
    })

    groups = compiler.compile([], profile)

    assert [g.name for g in groups] == [
        "nc_regions",
        "usda_zones",
        "light_requirements",
        "soil_texture",
        "available_space",
    ]
    assert all(g.source == "profile" for g in groups)
    # Only the first list element is used
    soil = next(g for g in groups if g.name == "soil_texture")
    assert soil.conditions == (FieldCondition(fields=("soil_texture",), term="Clay"),)


def test_explicit_intent_suppresses_profile_filter(compiler):
    intents = parse_intents([
        {"intent": "light_requirements", "entities": {"light_level": "low"}}
    ])
    profile = GardenProfile.model_validate({"sunlightIds": [FULL_SUN], "ncRegionsIds": ["Coastal"]})

    groups = compiler.compile(intents, profile)

    light_groups = [g for g in groups if g.name == "light_requirements"]
    assert len(light_groups) == 1
    assert light_groups[0].source == "intent"
    assert FULL_SUN not in light_groups[0].conditions[0].term
    assert [g.name for g in groups] == ["light_requirements", "nc_regions"]


def test_explicit_intent_name_blocks_profile_even_when_skipped(compiler):
    # Precedence is decided on intent names, not on whether the intent produced a group
    intents = parse_intents([{"intent": "usda_zones", "entities": {}}])
    profile = GardenProfile.model_validate({"usda_zones_ids": ["7b"]})

    assert compiler.compile(intents, profile) == []


def test_blank_profile_values_are_ignored(compiler):
    profile = GardenProfile.model_validate({"sunlightIds": ["  "], "soilPhIds": None})

    assert compiler.compile([], profile) == []


def test_compile_is_deterministic(compiler):
    payload = [
        {"intent": "attracts", "entities": {"wildlife_type": "Butterflies"}},
        {"intent": "flower_color", "entities": {"flower_color": "Red", "plant": "rose"}},
    ]
    profile = GardenProfile.model_validate({"ncRegionsIds": ["Piedmont"], "soilDrainageIds": ["Moist"]})

    first = compiler.compile(parse_intents(payload), profile)
    second = compiler.compile(parse_intents(payload), profile)

    assert first == second
    assert [g.describe() for g in first] == [g.describe() for g in second]

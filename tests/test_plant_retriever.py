"""Tests for the plant store and the plant retriever

Tests cover:
- Default query when there are no filters (ordered, capped)
- Case-insensitive containment over JSON list columns
- AND within a group, OR across groups
- Card projection
- Store failures surface as PlantRetrievalError
"""

from __future__ import annotations

import asyncio

import pytest

from gardenchat.core.exceptions import PlantRetrievalError
from gardenchat.pipeline.plant_retriever import PlantRetriever
from gardenchat.schemas.retrieval import PLANT_NAME_FIELDS, FieldCondition, FilterPredicateGroup


def group(name, *conditions):
    return FilterPredicateGroup(name=name, conditions=tuple(conditions))


def names(cards):
    return [c.scientific_name for c in cards]


class TestSqlPlantStore:
    def test_no_groups_returns_first_page_by_scientific_name(self, plant_store):
        cards = plant_store.search([], limit=6)

        assert names(cards) == [
            "Acer rubrum",
            "Echinacea purpurea",
            "Hosta plantaginea",
            "Lavandula angustifolia",
            "Opuntia humifusa",
            "Rosa 'Radrazz'",
        ]

    def test_containment_is_case_insensitive(self, plant_store):
        cards = plant_store.search(
            [group("resistance_to_challenges", FieldCondition(fields=("resistance_to_challenges",), term="DROUGHT"))],
            limit=6,
        )

        assert names(cards) == ["Opuntia humifusa"]

    def test_conditions_in_a_group_are_anded(self, plant_store):
        cards = plant_store.search(
            [group(
                "flower_color",
                FieldCondition(fields=("flower_colors",), term="Purple/Lavender"),
                FieldCondition(fields=PLANT_NAME_FIELDS, term="lamiaceae"),
            )],
            limit=6,
        )

        assert names(cards) == ["Lavandula angustifolia"]

    def test_groups_are_ored(self, plant_store):
        cards = plant_store.search(
            [
                group("leaf_fall_color", FieldCondition(fields=("leaf_fall_color",), term="Red")),
                group("plant_type", FieldCondition(fields=("plant_types",), term="Cactus")),
            ],
            limit=6,
        )

        assert names(cards) == ["Acer rubrum", "Opuntia humifusa"]

    def test_plant_name_matches_common_names(self, plant_store):
        cards = plant_store.search(
            [group("general_description", FieldCondition(fields=PLANT_NAME_FIELDS, term="coneflower"))],
            limit=6,
        )

        assert names(cards) == ["Echinacea purpurea"]

    def test_wildcard_characters_are_literal(self, plant_store):
        cards = plant_store.search(
            [group("general_description", FieldCondition(fields=PLANT_NAME_FIELDS, term="%"))],
            limit=6,
        )

        assert cards == []

    def test_card_projection(self, plant_store):
        (card,) = plant_store.search(
            [group("general_description", FieldCondition(fields=PLANT_NAME_FIELDS, term="Knock Out"))],
            limit=6,
        )

        assert card.scientific_name == "Rosa 'Radrazz'"
        assert card.common_name == "Knock Out Rose"
        assert card.slug == "rosa-radrazz"
        assert card.first_tag == "Shrub"
        assert card.first_image == "https://img.example/rose.jpg"
        assert card.first_image_alt_text == "Red shrub rose"

    def test_unknown_field_raises(self, plant_store):
        with pytest.raises(ValueError):
            plant_store.search([group("x", FieldCondition(fields=("no_such_column",), term="a"))], limit=6)


class TestPlantRetriever:
    def test_retrieve_caps_at_page_size(self, plant_store):
        retriever = PlantRetriever(plant_store, page_size=3)

        cards = asyncio.run(retriever.retrieve([]))

        assert len(cards) == 3

    def test_retrieve_filters(self, plant_store):
        retriever = PlantRetriever(plant_store)
        groups = [group("attracts", FieldCondition(fields=("attracts",), term="Butterflies"))]

        cards = asyncio.run(retriever.retrieve(groups))

        assert names(cards) == ["Echinacea purpurea", "Zinnia elegans"]

    def test_store_failure_becomes_plant_retrieval_error(self):
        class BrokenStore:
            async def search_async(self, groups, limit):
                raise RuntimeError("database is locked")

        with pytest.raises(PlantRetrievalError) as exc_info:
            asyncio.run(PlantRetriever(BrokenStore()).retrieve([]))

        assert exc_info.value.message == "Failed to execute query"
        assert "database is locked" in exc_info.value.details

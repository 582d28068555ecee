"""Unit tests for intent schemas and the intent extractor

Tests cover:
- Tagged-union validation and light-level expansion
- Passthrough slots and unknown-name coercion
- Payload normalisation (wrapper, list, single object)
- Error classification (quota -> 503, everything else -> extraction error)
"""

from __future__ import annotations

import asyncio

import pytest
from pydantic import ValidationError

from gardenchat.core.exceptions import IntentExtractionError, ServiceUnavailableError
from gardenchat.pipeline.intent import IntentExtractor, normalize_intent_payload
from gardenchat.schemas.intent import (
    LightRequirementsIntent,
    UnknownIntent,
    dump_intents,
    parse_intents,
)


class TestIntentSchema:
    def test_light_level_token_is_expanded(self):
        (intent,) = parse_intents([{"intent": "light_requirements", "entities": {"light_level": "Medium"}}])

        assert isinstance(intent, LightRequirementsIntent)
        assert intent.entities.light_level == "Partial Shade (2-6 hours of direct sunlight)"

    def test_full_light_description_is_accepted(self):
        value = "Dappled Sunlight (Shade through upper canopy all day)"
        (intent,) = parse_intents([{"intent": "light_requirements", "entities": {"light_level": value}}])

        assert intent.entities.light_level == value

    def test_out_of_vocabulary_value_is_rejected(self):
        with pytest.raises(ValidationError):
            parse_intents([{"intent": "soil_ph", "entities": {"soil_ph_value": "very acidic"}}])

    def test_unknown_intent_name_is_rejected_by_default(self):
        with pytest.raises(ValidationError):
            parse_intents([{"intent": "watering_schedule", "entities": {}}])

    def test_unknown_intent_name_can_be_coerced(self):
        (intent,) = parse_intents([{"intent": "watering_schedule", "entities": {}}], coerce_unknown=True)

        assert isinstance(intent, UnknownIntent)

    def test_extra_slots_pass_through(self):
        (intent,) = parse_intents([
            {"intent": "attracts", "entities": {"wildlife_type": "Bees", "season": "summer"}}
        ])

        assert intent.entity_values() == {"wildlife_type": "Bees", "season": "summer"}

    def test_null_entities_become_empty(self):
        (intent,) = parse_intents([{"intent": "general_description", "entities": None}])

        assert intent.entity_values() == {}
        assert intent.plant_name() is None

    def test_dump_drops_empty_slots(self):
        intents = parse_intents([
            {"intent": "flower_color", "entities": {"flower_color": "Red", "plant": "", "common_name": None}}
        ])

        assert dump_intents(intents) == [{"intent": "flower_color", "entities": {"flower_color": "Red"}}]


class TestNormalizePayload:
    def test_wrapper_object(self):
        assert normalize_intent_payload({"intents": [{"intent": "unknown"}]}) == [{"intent": "unknown"}]

    def test_bare_list(self):
        assert normalize_intent_payload([{"intent": "unknown"}]) == [{"intent": "unknown"}]

    def test_single_object(self):
        assert normalize_intent_payload({"intent": "unknown", "entities": {}}) == [
            {"intent": "unknown", "entities": {}}
        ]

    def test_scalar_is_an_error(self):
        with pytest.raises(IntentExtractionError):
            normalize_intent_payload("light_requirements")


class TestIntentExtractor:
    def test_extracts_multiple_intents(self, llm_factory):
        llm = llm_factory(payload={"intents": [
            {"intent": "flower_color", "entities": {"flower_color": "Red"}},
            {"intent": "light_requirements", "entities": {"light_level": "high"}},
        ]})

        intents = asyncio.run(IntentExtractor(llm).extract("Red flowers for full sun?"))

        assert [i.name for i in intents] == ["flower_color", "light_requirements"]
        assert "Red flowers for full sun?" in llm.json_calls[0]

    def test_quota_error_maps_to_service_unavailable(self, llm_factory, quota_error):
        llm = llm_factory(json_error=quota_error)

        with pytest.raises(ServiceUnavailableError) as exc_info:
            asyncio.run(IntentExtractor(llm).extract("How much sun do roses need?"))

        assert exc_info.value.status_code == 503

    def test_insufficient_balance_message_maps_to_service_unavailable(self, llm_factory):
        llm = llm_factory(json_error=RuntimeError("Error: Insufficient Balance"))

        with pytest.raises(ServiceUnavailableError):
            asyncio.run(IntentExtractor(llm).extract("How much sun do roses need?"))

    def test_provider_error_maps_to_extraction_error(self, llm_factory):
        llm = llm_factory(json_error=ConnectionError("connection reset"))

        with pytest.raises(IntentExtractionError) as exc_info:
            asyncio.run(IntentExtractor(llm).extract("How much sun do roses need?"))

        assert exc_info.value.status_code == 500
        assert exc_info.value.message == "Failed to parse question"

    def test_schema_mismatch_maps_to_extraction_error(self, llm_factory):
        llm = llm_factory(payload={"intents": [{"intent": "soil_ph", "entities": {"soil_ph_value": "sour"}}]})

        with pytest.raises(IntentExtractionError):
            asyncio.run(IntentExtractor(llm).extract("Is my soil acidic?"))

    def test_empty_result_is_an_error(self, llm_factory):
        llm = llm_factory(payload={"intents": []})

        with pytest.raises(IntentExtractionError):
            asyncio.run(IntentExtractor(llm).extract("Anything?"))

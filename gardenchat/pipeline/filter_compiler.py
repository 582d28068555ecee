"""
Pipeline Stage 2a: Filter compilation.

Turns intents (plus, optionally, a garden profile) into predicate groups
for the plant store.  Pure: no I/O, and identical inputs always yield
identical groups.

Explicit intents win over the profile: a profile-implied group is only
added when no intent of the same name is present.
"""

from __future__ import annotations

from typing import Sequence

from gardenchat.pipeline.catalog import PipelineCatalog
from gardenchat.schemas.garden import GardenProfile
from gardenchat.schemas.intent import IntentBase
from gardenchat.schemas.retrieval import PLANT_NAME_FIELDS, FieldCondition, FilterPredicateGroup
from gardenchat.utils.logging import get_logger

logger = get_logger("gardenchat.pipeline.filter_compiler")


class FilterCompiler:
    def __init__(self, catalog: PipelineCatalog):
        self.catalog = catalog

    def compile(
        self,
        intents: Sequence[IntentBase],
        profile: GardenProfile | None = None,
    ) -> list[FilterPredicateGroup]:
        groups: list[FilterPredicateGroup] = []
        for intent in intents:
            group = self._group_for_intent(intent)
            if group is not None:
                groups.append(group)

        if profile is not None:
            groups.extend(self._profile_groups(intents, profile))

        logger.info(
            "[FILTERS] %d group(s): %s",
            len(groups),
            "; ".join(g.describe() for g in groups) or "none",
        )
        return groups

    def _group_for_intent(self, intent: IntentBase) -> FilterPredicateGroup | None:
        mapping = self.catalog.filter_mappings.get(intent.name)
        if mapping is None:
            logger.debug("[FILTERS] No mapping for intent %s; skipped", intent.name)
            return None

        conditions: list[FieldCondition] = []
        if mapping.slot is not None:
            value = intent.entity_values().get(mapping.slot)
            if isinstance(value, str) and value.strip():
                conditions.append(FieldCondition(fields=(mapping.field,), term=value.strip()))

        plant_name = intent.plant_name()
        if plant_name:
            conditions.append(FieldCondition(fields=PLANT_NAME_FIELDS, term=plant_name))

        if not conditions:
            logger.debug("[FILTERS] Intent %s has no usable slots; skipped", intent.name)
            return None
        return FilterPredicateGroup(name=intent.name, source="intent", conditions=tuple(conditions))

    def _profile_groups(
        self,
        intents: Sequence[IntentBase],
        profile: GardenProfile,
    ) -> list[FilterPredicateGroup]:
        explicit = {i.name for i in intents}
        groups: list[FilterPredicateGroup] = []
        for rule in self.catalog.profile_filters:
            if rule.intent in explicit:
                continue
            value = profile.first(rule.attribute)
            if value is None:
                continue
            mapping = self.catalog.filter_mappings[rule.intent]
            groups.append(
                FilterPredicateGroup(
                    name=rule.intent,
                    source="profile",
                    conditions=(FieldCondition(fields=(mapping.field,), term=value.strip()),),
                )
            )
        return groups

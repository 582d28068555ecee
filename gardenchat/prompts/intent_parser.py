"""
Prompt templates for Stage 1: intent extraction.

The model is asked for a single JSON object ``{"intents": [...]}``; the
allowed intent names and slot vocabularies are rendered from the same
Literal types the response is validated against, so the prompt and the
schema cannot drift apart.
"""

from __future__ import annotations

from typing import get_args

from gardenchat.schemas.vocabulary import (
    INTENT_NAMES,
    BloomSeason,
    ChallengeType,
    Color,
    DiagnosticType,
    FallColor,
    FertilizerFrequency,
    FertilizerType,
    FlowerTrait,
    GrowthHabit,
    GrowthSpeed,
    LeafTrait,
    LeafType,
    LocationType,
    MaintenanceLevel,
    PlantType,
    ProblemType,
    Region,
    SoilDrainage,
    SoilPh,
    SoilTexture,
    SpaceRequirement,
    TextureType,
    ThemeType,
    UsdaZone,
    WildlifeType,
)

SYSTEM_PROMPT = (
    "You are a gardening assistant that helps users find plants and gardening "
    "information. You classify questions; you never answer them. "
    "Reply with JSON only."
)

# Categorical slots each intent may fill (plant name slots are always allowed).
INTENT_SLOTS: dict[str, tuple[str, ...]] = {
    "light_requirements": ("light_level", "diagnostic_type"),
    "soil_texture": ("soil_texture",),
    "soil_ph": ("soil_ph_value",),
    "soil_drainage": ("soil_drainage_type",),
    "available_space": ("space_requirement",),
    "nc_regions": ("region",),
    "usda_zones": ("usda_zone",),
    "fertilizer_requirements": ("fertilizer_frequency", "fertilizer_type"),
    "landscape_location": ("location_type",),
    "landscape_theme": ("theme_type",),
    "attracts": ("wildlife_type",),
    "resistance_to_challenges": ("challenge_type",),
    "problems": ("problem_type",),
    "plant_type": ("type",),
    "woody_plant_leaf_characteristics": ("leaf_type",),
    "habit_form": ("growth_habit",),
    "growth_rate": ("growth_speed",),
    "maintenance": ("maintenance_level",),
    "texture": ("texture_type",),
    "flower_color": ("flower_color",),
    "flower_value": ("flower_trait",),
    "flower_bloom_time": ("bloom_season",),
    "leaf_color": ("leaf_color",),
    "leaf_value": ("leaf_trait",),
    "leaf_fall_color": ("fall_color",),
    "general_description": (),
    "unknown": (),
}

SLOT_VALUES: dict[str, tuple[str, ...]] = {
    "light_level": ("low", "medium", "high"),
    "diagnostic_type": get_args(DiagnosticType),
    "soil_texture": get_args(SoilTexture),
    "soil_ph_value": get_args(SoilPh),
    "soil_drainage_type": get_args(SoilDrainage),
    "space_requirement": get_args(SpaceRequirement),
    "region": get_args(Region),
    "usda_zone": get_args(UsdaZone),
    "fertilizer_frequency": get_args(FertilizerFrequency),
    "fertilizer_type": get_args(FertilizerType),
    "location_type": get_args(LocationType),
    "theme_type": get_args(ThemeType),
    "wildlife_type": get_args(WildlifeType),
    "challenge_type": get_args(ChallengeType),
    "problem_type": get_args(ProblemType),
    "type": get_args(PlantType),
    "leaf_type": get_args(LeafType),
    "growth_habit": get_args(GrowthHabit),
    "growth_speed": get_args(GrowthSpeed),
    "maintenance_level": get_args(MaintenanceLevel),
    "texture_type": get_args(TextureType),
    "flower_color": get_args(Color),
    "flower_trait": get_args(FlowerTrait),
    "bloom_season": get_args(BloomSeason),
    "leaf_color": get_args(Color),
    "leaf_trait": get_args(LeafTrait),
    "fall_color": get_args(FallColor),
}


def _render_taxonomy() -> str:
    lines = []
    for name in INTENT_NAMES:
        slots = INTENT_SLOTS.get(name, ())
        lines.append(f"- {name}: {', '.join(slots) if slots else '(plant name only)'}")
    return "\n".join(lines)


def _render_vocabularies() -> str:
    return "\n".join(
        f"- {slot}: {' | '.join(values)}" for slot, values in SLOT_VALUES.items()
    )


def build_intent_prompt(question: str) -> str:
    """User message for intent extraction."""
    return f"""Parse the following question to identify the user's intent and any relevant entities.

Question: "{question}"

Identify:
1. The primary intent (what information the user is looking for), plus any
   secondary intents the question clearly asks about
2. Any entities mentioned (plants, conditions, preferences, etc.)

INTENTS (name: slots it may fill):
{_render_taxonomy()}

Every intent may also fill the free-text slots "plant", "scientific_name"
and "common_name" when the question names a plant.

SLOT VALUES (use these exact strings; leave a slot out when unsure):
{_render_vocabularies()}

Use "general_description" for questions about one named plant that fit no
other intent, and "unknown" when the question is not about plants.

Respond with ONE JSON object of this shape:
{{"intents": [{{"intent": "<intent name>", "entities": {{"<slot>": "<value>"}}}}]}}"""

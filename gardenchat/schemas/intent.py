"""
Schema for Stage 1 (Intent Extraction) output.

An Intent is a closed tagged union discriminated on ``intent``: each
intent name owns an entities model holding only the slots relevant to
it.  Free-text plant-name slots are shared by every intent; any extra
slot the model emits is kept as-is (not validated).
"""

from __future__ import annotations

from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, Field, TypeAdapter, field_validator, model_validator

from gardenchat.schemas.vocabulary import (
    INTENT_NAMES,
    LIGHT_LEVEL_MAPPING,
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
    LightLevel,
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

# Checked in this order when an intent names a specific plant.
PLANT_NAME_SLOTS: tuple[str, ...] = ("scientific_name", "plant", "common_name")
MIN_PLANT_NAME_LENGTH = 2


# ── Entities ────────────────────────────────────────────────────────
class Entities(BaseModel):
    """Slots every intent may carry.  Unknown slots pass through."""

    plant: str | None = None
    scientific_name: str | None = None
    common_name: str | None = None

    class Config:
        extra = "allow"


class LightEntities(Entities):
    light_level: LightLevel | None = None
    diagnostic_type: DiagnosticType | None = None

    @field_validator("light_level", mode="before")
    @classmethod
    def _expand_light_level(cls, value: Any) -> Any:
        """Expand the coarse ``low|medium|high`` token into its full description."""
        if isinstance(value, str):
            return LIGHT_LEVEL_MAPPING.get(value.strip().lower(), value)
        return value


class SoilTextureEntities(Entities):
    soil_texture: SoilTexture | None = None


class SoilPhEntities(Entities):
    soil_ph_value: SoilPh | None = None


class SoilDrainageEntities(Entities):
    soil_drainage_type: SoilDrainage | None = None


class SpaceEntities(Entities):
    space_requirement: SpaceRequirement | None = None


class RegionEntities(Entities):
    region: Region | None = None


class ZoneEntities(Entities):
    usda_zone: UsdaZone | None = None


class FertilizerEntities(Entities):
    fertilizer_frequency: FertilizerFrequency | None = None
    fertilizer_type: FertilizerType | None = None


class LocationEntities(Entities):
    location_type: LocationType | None = None


class ThemeEntities(Entities):
    theme_type: ThemeType | None = None


class WildlifeEntities(Entities):
    wildlife_type: WildlifeType | None = None


class ChallengeEntities(Entities):
    challenge_type: ChallengeType | None = None


class ProblemEntities(Entities):
    problem_type: ProblemType | None = None


class PlantTypeEntities(Entities):
    type: PlantType | None = None


class LeafTypeEntities(Entities):
    leaf_type: LeafType | None = None


class HabitEntities(Entities):
    growth_habit: GrowthHabit | None = None


class GrowthRateEntities(Entities):
    growth_speed: GrowthSpeed | None = None


class MaintenanceEntities(Entities):
    maintenance_level: MaintenanceLevel | None = None


class TextureEntities(Entities):
    texture_type: TextureType | None = None


class FlowerColorEntities(Entities):
    flower_color: Color | None = None


class FlowerValueEntities(Entities):
    flower_trait: FlowerTrait | None = None


class BloomTimeEntities(Entities):
    bloom_season: BloomSeason | None = None


class LeafColorEntities(Entities):
    leaf_color: Color | None = None


class LeafValueEntities(Entities):
    leaf_trait: LeafTrait | None = None


class FallColorEntities(Entities):
    fall_color: FallColor | None = None


# ── Intents ─────────────────────────────────────────────────────────
class IntentBase(BaseModel):
    intent: str
    entities: Entities = Field(default_factory=Entities)

    @model_validator(mode="before")
    @classmethod
    def _default_entities(cls, data: Any) -> Any:
        if isinstance(data, dict) and data.get("entities") is None:
            data = {**data, "entities": {}}
        return data

    @property
    def name(self) -> str:
        return self.intent

    def entity_values(self) -> dict[str, Any]:
        """Non-empty slot values, passthrough slots included."""
        return {
            key: value
            for key, value in self.entities.model_dump(exclude_none=True).items()
            if value != ""
        }

    def plant_name(self) -> str | None:
        """First usable plant name; names shorter than two characters are ignored."""
        values = self.entity_values()
        for slot in PLANT_NAME_SLOTS:
            value = values.get(slot)
            if isinstance(value, str) and len(value.strip()) >= MIN_PLANT_NAME_LENGTH:
                return value.strip()
        return None


class LightRequirementsIntent(IntentBase):
    intent: Literal["light_requirements"]
    entities: LightEntities = Field(default_factory=LightEntities)


class SoilTextureIntent(IntentBase):
    intent: Literal["soil_texture"]
    entities: SoilTextureEntities = Field(default_factory=SoilTextureEntities)


class SoilPhIntent(IntentBase):
    intent: Literal["soil_ph"]
    entities: SoilPhEntities = Field(default_factory=SoilPhEntities)


class SoilDrainageIntent(IntentBase):
    intent: Literal["soil_drainage"]
    entities: SoilDrainageEntities = Field(default_factory=SoilDrainageEntities)


class AvailableSpaceIntent(IntentBase):
    intent: Literal["available_space"]
    entities: SpaceEntities = Field(default_factory=SpaceEntities)


class RegionIntent(IntentBase):
    intent: Literal["nc_regions"]
    entities: RegionEntities = Field(default_factory=RegionEntities)


class UsdaZoneIntent(IntentBase):
    intent: Literal["usda_zones"]
    entities: ZoneEntities = Field(default_factory=ZoneEntities)


class FertilizerIntent(IntentBase):
    intent: Literal["fertilizer_requirements"]
    entities: FertilizerEntities = Field(default_factory=FertilizerEntities)


class LandscapeLocationIntent(IntentBase):
    intent: Literal["landscape_location"]
    entities: LocationEntities = Field(default_factory=LocationEntities)


class LandscapeThemeIntent(IntentBase):
    intent: Literal["landscape_theme"]
    entities: ThemeEntities = Field(default_factory=ThemeEntities)


class AttractsIntent(IntentBase):
    intent: Literal["attracts"]
    entities: WildlifeEntities = Field(default_factory=WildlifeEntities)


class ResistanceIntent(IntentBase):
    intent: Literal["resistance_to_challenges"]
    entities: ChallengeEntities = Field(default_factory=ChallengeEntities)


class ProblemsIntent(IntentBase):
    intent: Literal["problems"]
    entities: ProblemEntities = Field(default_factory=ProblemEntities)


class PlantTypeIntent(IntentBase):
    intent: Literal["plant_type"]
    entities: PlantTypeEntities = Field(default_factory=PlantTypeEntities)


class LeafCharacteristicsIntent(IntentBase):
    intent: Literal["woody_plant_leaf_characteristics"]
    entities: LeafTypeEntities = Field(default_factory=LeafTypeEntities)


class HabitFormIntent(IntentBase):
    intent: Literal["habit_form"]
    entities: HabitEntities = Field(default_factory=HabitEntities)


class GrowthRateIntent(IntentBase):
    intent: Literal["growth_rate"]
    entities: GrowthRateEntities = Field(default_factory=GrowthRateEntities)


class MaintenanceIntent(IntentBase):
    intent: Literal["maintenance"]
    entities: MaintenanceEntities = Field(default_factory=MaintenanceEntities)


class TextureIntent(IntentBase):
    intent: Literal["texture"]
    entities: TextureEntities = Field(default_factory=TextureEntities)


class FlowerColorIntent(IntentBase):
    intent: Literal["flower_color"]
    entities: FlowerColorEntities = Field(default_factory=FlowerColorEntities)


class FlowerValueIntent(IntentBase):
    intent: Literal["flower_value"]
    entities: FlowerValueEntities = Field(default_factory=FlowerValueEntities)


class FlowerBloomTimeIntent(IntentBase):
    intent: Literal["flower_bloom_time"]
    entities: BloomTimeEntities = Field(default_factory=BloomTimeEntities)


class LeafColorIntent(IntentBase):
    intent: Literal["leaf_color"]
    entities: LeafColorEntities = Field(default_factory=LeafColorEntities)


class LeafValueIntent(IntentBase):
    intent: Literal["leaf_value"]
    entities: LeafValueEntities = Field(default_factory=LeafValueEntities)


class LeafFallColorIntent(IntentBase):
    intent: Literal["leaf_fall_color"]
    entities: FallColorEntities = Field(default_factory=FallColorEntities)


class GeneralDescriptionIntent(IntentBase):
    intent: Literal["general_description"]


class UnknownIntent(IntentBase):
    intent: Literal["unknown"]


Intent = Annotated[
    Union[
        LightRequirementsIntent,
        SoilTextureIntent,
        SoilPhIntent,
        SoilDrainageIntent,
        AvailableSpaceIntent,
        RegionIntent,
        UsdaZoneIntent,
        FertilizerIntent,
        LandscapeLocationIntent,
        LandscapeThemeIntent,
        AttractsIntent,
        ResistanceIntent,
        ProblemsIntent,
        PlantTypeIntent,
        LeafCharacteristicsIntent,
        HabitFormIntent,
        GrowthRateIntent,
        MaintenanceIntent,
        TextureIntent,
        FlowerColorIntent,
        FlowerValueIntent,
        FlowerBloomTimeIntent,
        LeafColorIntent,
        LeafValueIntent,
        LeafFallColorIntent,
        GeneralDescriptionIntent,
        UnknownIntent,
    ],
    Field(discriminator="intent"),
]

IntentListAdapter: TypeAdapter[list[Intent]] = TypeAdapter(list[Intent])


def parse_intents(items: list[Any], *, coerce_unknown: bool = False) -> list[IntentBase]:
    """
    Validate raw intent payloads against the tagged union.

    With ``coerce_unknown`` an unrecognised intent name is turned into
    ``unknown`` instead of failing; callers that accept intents from
    HTTP clients use it so a stale client never breaks a search.
    Raises ``pydantic.ValidationError`` on any other mismatch.
    """
    if coerce_unknown:
        items = [
            {**item, "intent": "unknown"}
            if isinstance(item, dict) and item.get("intent") not in INTENT_NAMES
            else item
            for item in items
        ]
    return IntentListAdapter.validate_python(items)


def dump_intents(intents: list[IntentBase]) -> list[dict[str, Any]]:
    """Wire shape: ``[{intent, entities}]`` with empty slots dropped."""
    return [{"intent": i.intent, "entities": i.entity_values()} for i in intents]

"""
GardenProfile: the user's stored growing conditions and preferences.

Read-only inside the pipeline.  Field aliases match the wire names the
garden tracker already stores, so a profile can be validated straight
from a request body or a ``user_gardens`` row.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, Field, model_validator


class GardenProfile(BaseModel):
    name: str | None = None

    # Region & zone
    nc_regions_ids: list[str] = Field(default_factory=list, alias="ncRegionsIds")
    usda_zones_ids: list[str] = Field(default_factory=list, alias="usda_zones_ids")

    # Light & soil
    sunlight_ids: list[str] = Field(default_factory=list, alias="sunlightIds")
    soil_texture_ids: list[str] = Field(default_factory=list, alias="soilTextureIds")
    soil_ph_ids: list[str] = Field(default_factory=list, alias="soilPhIds")
    soil_drainage_ids: list[str] = Field(default_factory=list, alias="soilDrainageIds")
    space_available_ids: list[str] = Field(default_factory=list, alias="spaceAvailableIds")

    # Landscape & style
    location_ids: list[str] = Field(default_factory=list, alias="locationIds")
    garden_theme_ids: list[str] = Field(default_factory=list, alias="gardenThemeIds")
    design_feature_ids: list[str] = Field(default_factory=list, alias="designFeatureIds")

    # Wildlife & resistance
    wildlife_attraction_ids: list[str] = Field(default_factory=list, alias="wildlifeAttractionIds")
    resistance_challenge_ids: list[str] = Field(default_factory=list, alias="resistanceChallengeIds")
    problems_to_exclude_ids: list[str] = Field(default_factory=list, alias="problemsToExcludeIds")

    # Whole plant traits
    growth_rate_id: int | str | None = Field(default=None, alias="growthRateId")
    maintenance_level_id: int | str | None = Field(default=None, alias="maintenanceLevelId")
    texture_preference_id: int | str | None = Field(default=None, alias="texturePreferenceId")
    habit_form_ids: list[str] = Field(default_factory=list, alias="habitFormIds")
    plant_type_ids: list[str] = Field(default_factory=list, alias="plantTypeIds")
    specific_plant_ids: list[str] = Field(default_factory=list, alias="specificPlantIds")

    # Flowers & foliage
    flower_color_ids: list[str] = Field(default_factory=list, alias="flowerColorIds")
    flower_bloom_time_ids: list[str] = Field(default_factory=list, alias="flowerBloomTimeIds")
    flower_value_ids: list[str] = Field(default_factory=list, alias="flowerValueIds")
    leaf_feel_ids: list[str] = Field(default_factory=list, alias="leafFeelIds")
    leaf_color_ids: list[str] = Field(default_factory=list, alias="leafColorIds")
    leaf_value_ids: list[str] = Field(default_factory=list, alias="leafValueIds")
    fall_color_ids: list[str] = Field(default_factory=list, alias="fallColorIds")
    year_round_interest: bool = Field(default=False, alias="yearRoundInterest")

    class Config:
        populate_by_name = True
        extra = "ignore"

    @model_validator(mode="before")
    @classmethod
    def _drop_nulls(cls, data: Any) -> Any:
        # Unset preferences arrive as null from the garden tracker.
        if isinstance(data, dict):
            return {k: v for k, v in data.items() if v is not None}
        return data

    def first(self, attribute: str) -> str | None:
        """First non-blank element of a list attribute, or None."""
        values = getattr(self, attribute, None) or []
        for value in values:
            if isinstance(value, str) and value.strip():
                return value
        return None

    def summary(self) -> dict[str, Any]:
        """Condensed view embedded in the answer prompt."""
        return {
            "zones": self.usda_zones_ids,
            "regions": self.nc_regions_ids,
            "sunlight": self.sunlight_ids,
            "soilTexture": self.soil_texture_ids,
            "soilPh": self.soil_ph_ids,
            "soilDrainage": self.soil_drainage_ids,
            "gardenLocations": self.location_ids,
            "gardenThemes": self.garden_theme_ids,
            "spaceAvailable": self.space_available_ids,
            "wildlifeAttraction": self.wildlife_attraction_ids,
            "resistanceChallenges": self.resistance_challenge_ids,
            "problemsToExclude": self.problems_to_exclude_ids,
            "plantTypes": self.plant_type_ids,
            "flowerColors": self.flower_color_ids,
            "flowerBloomTimes": self.flower_bloom_time_ids,
            "leafColors": self.leaf_color_ids,
            "growthRate": self.growth_rate_id,
            "maintenanceLevel": self.maintenance_level_id,
            "yearRoundInterest": self.year_round_interest,
        }

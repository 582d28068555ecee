"""
Closed vocabularies for intent names and categorical entity slots.

These values mirror the plant database's attribute vocabularies, so an
extracted entity can be matched against plant records verbatim.
"""

from __future__ import annotations

from typing import Literal, get_args


IntentName = Literal[
    # Cultural conditions
    "light_requirements",
    "soil_texture",
    "soil_ph",
    "soil_drainage",
    "available_space",
    "nc_regions",
    "usda_zones",
    "fertilizer_requirements",
    # Landscape
    "landscape_location",
    "landscape_theme",
    # Wildlife and resistance
    "attracts",
    "resistance_to_challenges",
    "problems",
    # Whole plant traits
    "plant_type",
    "woody_plant_leaf_characteristics",
    "habit_form",
    "growth_rate",
    "maintenance",
    "texture",
    # Flowers
    "flower_color",
    "flower_value",
    "flower_bloom_time",
    # Leaves
    "leaf_color",
    "leaf_value",
    "leaf_fall_color",
    # General
    "general_description",
    "unknown",
]

INTENT_NAMES: tuple[str, ...] = get_args(IntentName)


# ── Light ───────────────────────────────────────────────────────────
LIGHT_LEVEL_MAPPING: dict[str, str] = {
    "low": "Deep shade (Less than 2 hours to no direct sunlight)",
    "medium": "Partial Shade (2-6 hours of direct sunlight)",
    "high": "Full Sun (6 or more hours of direct sunlight a day)",
}

LightLevel = Literal[
    "Dappled Sunlight (Shade through upper canopy all day)",
    "Deep shade (Less than 2 hours to no direct sunlight)",
    "Full Sun (6 or more hours of direct sunlight a day)",
    "Partial Shade (2-6 hours of direct sunlight)",
]

DiagnosticType = Literal["too_much", "too_little", "both", "general"]


# ── Soil, space, region ─────────────────────────────────────────────
SoilTexture = Literal["Clay", "Loam (Silt)", "Sand", "High Organic Matter", "Shallow Rocky"]

SoilPh = Literal["Acid (<6.0)", "Neutral (6.0-8.0)", "Alkaline (>8.0)"]

SoilDrainage = Literal[
    "Frequent Standing Water",
    "Good Drainage",
    "Moist",
    "Occasional Flooding",
    "Occasionally Dry",
    "Occasionally Wet",
    "Very Dry",
]

SpaceRequirement = Literal[
    "Less than 12 inches",
    "12 inches-3 feet",
    "3 feet-6 feet",
    "6 feet-12 feet",
    "12-24 feet",
    "24-60 feet",
    "more than 60 feet",
]

Region = Literal["Coastal", "Mountains", "Piedmont"]

UsdaZone = Literal[
    "1a", "1b", "2a", "2b", "3a", "3b", "4a", "4b", "5a", "5b", "6a", "6b", "7a",
    "7b", "8a", "8b", "9a", "9b", "10a", "10b", "11a", "11b", "12a", "12b", "13a", "13b",
]


# ── Fertilizer ──────────────────────────────────────────────────────
FertilizerFrequency = Literal[
    "Weekly", "Bi-weekly", "Monthly", "Quarterly", "Annually",
    "Growing Season", "Spring", "Summer", "Fall", "Winter",
]

FertilizerType = Literal[
    "Balanced (NPK)",
    "High Nitrogen",
    "High Phosphorus",
    "High Potassium",
    "Organic",
    "Slow Release",
    "Water Soluble",
]


# ── Landscape ───────────────────────────────────────────────────────
LocationType = Literal[
    "Coastal", "Container", "Hanging Baskets", "Houseplants", "Lawn", "Meadow",
    "Naturalized Area", "Near Septic", "Patio", "Pond", "Pool/Hardscape",
    "Recreational Play Area", "Riparian", "Rock Wall", "Slope/Bank",
    "Small Space", "Vertical Spaces", "Walkways", "Woodland",
]

ThemeType = Literal[
    "Asian Garden", "Butterfly Garden", "Children's Garden", "Cottage Garden",
    "Cutting Garden", "Drought Tolerant Garden", "Edible Garden", "English Garden",
    "Fairy Garden", "Garden for the Blind", "Native Garden", "Nighttime Garden",
    "Pollinator Garden", "Rain Garden", "Rock Garden", "Shade Garden",
    "Water Garden", "Winter Garden",
]


# ── Wildlife, challenges, problems ──────────────────────────────────
WildlifeType = Literal[
    "Bats", "Bees", "Butterflies", "Frogs", "Hummingbirds", "Moths", "Pollinators",
    "Predatory Insects", "Reptiles", "Small Mammals", "Songbirds", "Specialized Bees",
]

ChallengeType = Literal[
    "Black Walnut", "Compaction", "Deer", "Diseases", "Drought", "Dry Soil",
    "Erosion", "Fire", "Foot Traffic", "Heat", "Heavy Shade", "Humidity",
    "Insect Pests", "Pollution", "Poor Soil", "Rabbits", "Salt", "Slugs",
    "Squirrels", "Storm Damage", "Urban Conditions", "Voles", "Wet Soil", "Wind",
]

ProblemType = Literal[
    "Allelopathic", "Contact Dermatitis", "Frequent Disease Problems",
    "Frequent Insect Problems", "Invasive Species", "Malodorous", "Messy",
    "Poisonous to Humans", "Problem for Cats", "Problem for Children",
    "Problem for Dogs", "Problem for Horses", "Short-lived", "Spines/Thorns",
    "Weak Wood", "Weedy",
]


# ── Whole plant traits ──────────────────────────────────────────────
PlantType = Literal[
    "Annual", "Bulb", "Carnivorous", "Cool Season Vegetable", "Edible", "Epiphyte",
    "Fern", "Grass", "Ground Cover", "Herb", "Herbaceous Perennial", "Houseplant",
    "Mushroom", "Native Plant", "Ornamental Grasses and Sedges", "Perennial",
    "Poisonous", "Rose", "Shrub", "Succulent", "Tree", "Turfgrass", "Vegetable",
    "Vine", "Warm Season Vegetable", "Water Plant", "Weed", "Wildflower",
]

LeafType = Literal["Broadleaf Evergreen", "Deciduous", "Needled Evergreen", "Semi-evergreen"]

GrowthHabit = Literal[
    "Arching", "Ascending", "Broad", "Cascading", "Climbing", "Clumping",
    "Columnar", "Conical", "Creeping", "Dense", "Erect", "Horizontal",
    "Irregular", "Mounding", "Multi-stemmed", "Multi-trunked", "Open", "Oval",
    "Prostrate", "Pyramidal", "Rounded", "Spreading", "Vase", "Weeping",
]

GrowthSpeed = Literal["Slow", "Medium", "Rapid"]

MaintenanceLevel = Literal["High", "Low", "Medium"]

TextureType = Literal["Fine", "Medium", "Coarse"]


# ── Flowers and leaves ──────────────────────────────────────────────
Color = Literal[
    "Black", "Blue", "Brown/Copper", "Cream/Tan", "Gold/Yellow", "Gray/Silver",
    "Green", "Insignificant", "Orange", "Pink", "Purple/Lavender",
    "Red/Burgundy", "Variegated", "White",
]

FlowerTrait = Literal[
    "Edible", "Fragrant", "Good Cut", "Good Dried", "Long Bloom Season",
    "Long-lasting", "Showy",
]

BloomSeason = Literal["Fall", "Spring", "Summer", "Winter"]

LeafTrait = Literal["Edible", "Fragrant", "Good Cut", "Good Dried", "Long-lasting", "Showy"]

FallColor = Literal[
    "Brown/Copper", "Cream/Tan", "Gold/Yellow", "Gray/Silver", "Insignificant",
    "Orange", "Pink", "Purple/Lavender", "Red/Burgundy",
]

from datetime import datetime

from sqlalchemy import JSON, Boolean, Column, DateTime, Integer, String, Text

from gardenchat.sqlite.database import Base


class Plant(Base):
    """Read model of the plant database (one row per plant, list attributes as JSON)."""

    __tablename__ = "plant_full_data"

    id = Column(Integer, primary_key=True, index=True)
    slug = Column(String, unique=True, index=True, nullable=False)
    scientific_name = Column(String, index=True, nullable=False)
    common_names = Column(JSON, nullable=True)  # ["Garden Rose", ...]
    genus = Column(String, nullable=True)
    species = Column(String, nullable=True)
    family = Column(String, nullable=True)
    description = Column(Text, nullable=True)
    tags = Column(JSON, nullable=True)
    images = Column(JSON, nullable=True)  # [{"img": url, "alt_text": str}, ...]

    # Cultural conditions
    light_requirements = Column(JSON, nullable=True)
    soil_texture = Column(JSON, nullable=True)
    soil_ph = Column(JSON, nullable=True)
    soil_drainage = Column(JSON, nullable=True)
    available_space_to_plant = Column(JSON, nullable=True)
    nc_regions = Column(JSON, nullable=True)
    usda_zones = Column(JSON, nullable=True)

    # Landscape
    landscape_location = Column(JSON, nullable=True)
    landscape_theme = Column(JSON, nullable=True)
    design_feature = Column(JSON, nullable=True)

    # Wildlife and resistance
    attracts = Column(JSON, nullable=True)
    resistance_to_challenges = Column(JSON, nullable=True)
    problems = Column(JSON, nullable=True)

    # Whole plant traits
    plant_types = Column(JSON, nullable=True)
    leaf_characteristics = Column(JSON, nullable=True)
    plant_habit = Column(JSON, nullable=True)
    growth_rate = Column(String, nullable=True)
    maintenance = Column(String, nullable=True)
    texture = Column(String, nullable=True)

    # Flowers and leaves
    flower_colors = Column(JSON, nullable=True)
    flower_value_to_gardener = Column(JSON, nullable=True)
    flower_bloom_time = Column(JSON, nullable=True)
    leaf_color = Column(JSON, nullable=True)
    leaf_value_to_gardener = Column(JSON, nullable=True)
    leaf_fall_color = Column(JSON, nullable=True)


class Tip(Base):
    """Published gardening article."""

    __tablename__ = "tips"

    id = Column(Integer, primary_key=True, index=True)
    title = Column(String, nullable=False)
    slug = Column(String, unique=True, index=True, nullable=False)
    description = Column(Text, nullable=True)
    body = Column(Text, nullable=True)
    published_at = Column(DateTime, nullable=True, index=True)


class UserGarden(Base):
    """Garden profile as stored by the garden tracker (owned elsewhere, read here)."""

    __tablename__ = "user_gardens"

    id = Column(Integer, primary_key=True, index=True)
    user_id = Column(String, index=True, nullable=True)
    name = Column(String, nullable=False)
    preferences = Column(JSON, nullable=False, default=dict)
    wants_recommendations = Column(Boolean, default=True, nullable=False)
    created_at = Column(DateTime, default=datetime.utcnow, nullable=False)
    updated_at = Column(DateTime, default=datetime.utcnow, nullable=False)

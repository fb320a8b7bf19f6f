from enum import Enum

from sqlalchemy import Column, String, Integer, Text, JSON, CheckConstraint, Index

from models.base_model import BaseModel, Base
from models.item import constrained_enum


class Difficulty(str, Enum):
    EASY = "Easy"
    MEDIUM = "Medium"
    HARD = "Hard"


class Recipe(BaseModel, Base):
    __tablename__ = "recipes"

    name = Column(String(255), nullable=False)
    description = Column(Text, nullable=True)
    servings = Column(Integer, nullable=False)
    prep_time = Column(Integer, nullable=False)  # minutes
    cook_time = Column(Integer, nullable=False)  # minutes
    # [{"item_id", "quantity", "unit", "notes"}]
    ingredients = Column(JSON, nullable=False, default=list)
    # [{"step_number", "description", "duration"}]
    steps = Column(JSON, nullable=False, default=list)
    categories = Column(JSON, nullable=True, default=list)
    difficulty = Column(constrained_enum(Difficulty, "recipe_difficulty"), nullable=False)
    image_url = Column(String(1024), nullable=True)
    rating = Column(Integer, nullable=True)
    notes = Column(Text, nullable=True)

    __table_args__ = (
        CheckConstraint("servings >= 1", name="ck_recipes_servings_positive"),
        CheckConstraint("prep_time >= 0", name="ck_recipes_prep_time_nonnegative"),
        CheckConstraint("cook_time >= 0", name="ck_recipes_cook_time_nonnegative"),
        CheckConstraint("(rating IS NULL) OR (rating BETWEEN 1 AND 5)", name="ck_recipes_rating_range"),
        Index("ix_recipes_name", "name"),
    )

from typing import List, Optional
from datetime import datetime, date
from uuid import UUID
from sqlmodel import SQLModel, Field
from pydantic import field_validator

from app.db.schema import EcoLetter, RecyclabilityLevel, SustainabilityLevel
from app.models.eco_score import EnvironmentalProfile


def _split_ingredients(value):
    # Admin forms send a comma separated string
    if value is None:
        return value
    if isinstance(value, str):
        return [item.strip() for item in value.split(",") if item.strip()]
    return value


class ProductBase(SQLModel):
    name: str = Field(min_length=1, max_length=200)
    category: Optional[str] = None
    image_url: Optional[str] = None
    analysis_date: Optional[date] = None


class ProductCreate(ProductBase):
    ingredients: List[str] = []
    uploaded_by: Optional[str] = None
    environmental: EnvironmentalProfile = Field(
        default_factory=EnvironmentalProfile)

    @field_validator("ingredients", mode="before")
    @classmethod
    def split_ingredients(cls, value):
        return _split_ingredients(value) or []


class ProductUpdate(SQLModel):
    """
    Partial update. Only the environmental fields actually sent are merged
    into the stored profile.
    """
    name: Optional[str] = Field(default=None, min_length=1, max_length=200)
    category: Optional[str] = None
    image_url: Optional[str] = None
    analysis_date: Optional[date] = None
    ingredients: Optional[List[str]] = None
    environmental: Optional[EnvironmentalProfile] = None

    @field_validator("ingredients", mode="before")
    @classmethod
    def split_ingredients(cls, value):
        return _split_ingredients(value)

    @field_validator("name")
    @classmethod
    def name_not_null(cls, value):
        # Omit the field to keep the name; it cannot be cleared
        if value is None:
            raise ValueError("name cannot be null")
        return value


class ProductRead(ProductBase):
    id: UUID
    ingredients: List[str] = []
    uploaded_by: Optional[str] = None
    environmental: EnvironmentalProfile
    eco_score: Optional[float] = None
    eco_letter: Optional[EcoLetter] = None
    eco_display: str
    eco_color: Optional[str] = None
    created_at: datetime
    updated_at: datetime


class CategorizedProductsRead(SQLModel):
    """Products grouped by their overall environmental impact level."""
    low: List[ProductRead] = []
    medium: List[ProductRead] = []
    high: List[ProductRead] = []
    unrated: List[ProductRead] = []


class RecomputeSummary(SQLModel):
    scanned: int
    changed: int


class AlternativeRead(SQLModel):
    id: UUID
    name: str
    category: Optional[str] = None
    image_url: Optional[str] = None
    eco_score: Optional[float] = None
    eco_letter: Optional[EcoLetter] = None
    eco_display: str
    sustainability_level: Optional[SustainabilityLevel] = None
    recyclability_level: Optional[RecyclabilityLevel] = None
    is_related: bool
    is_better: bool


class AlternativesRead(SQLModel):
    base_product_id: UUID
    base_eco_score: Optional[float] = None
    alternatives: List[AlternativeRead] = []

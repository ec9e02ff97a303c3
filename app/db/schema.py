from typing import Optional, List
from datetime import datetime, date
import uuid
from sqlmodel import SQLModel, Field, JSON, Column
from enum import Enum


class ImpactLevel(str, Enum):
    """Shared taxonomy for waste/pollution and overall environmental impact."""
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class ChemicalLevel(str, Enum):
    MINIMAL = "minimal"
    MODERATE = "moderate"
    SEVERE = "severe"


class RecyclabilityLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class SustainabilityLevel(str, Enum):
    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"


class EcoLetter(str, Enum):
    A = "A"
    B = "B"
    C = "C"
    D = "D"
    E = "E"


class TimestampMixin(SQLModel):
    """
    Provides standard audit timestamps for database records.
    """
    created_at: datetime = Field(
        default_factory=datetime.utcnow,
        description="The exact UTC timestamp when this record was first persisted in the database. Example: '2023-10-27 14:30:00'"
    )
    updated_at: datetime = Field(
        default_factory=datetime.utcnow,
        sa_column_kwargs={"onupdate": datetime.utcnow},
        description="The exact UTC timestamp when this record was last modified. Updates automatically."
    )


class Product(TimestampMixin, SQLModel, table=True):
    """
    A catalogue entry together with its raw environmental attributes.
    The raw attributes are the source of truth. 'eco_score' and 'eco_letter'
    are a denormalised cache of the Eco-Score Engine output and are
    recomputed in full whenever any attribute changes.
    """
    id: uuid.UUID = Field(
        default_factory=uuid.uuid4,
        primary_key=True,
        description="The persistent unique identifier for the product."
    )
    name: str = Field(
        index=True,
        description="Display name of the product. Example: 'Bamboo Toothbrush'"
    )
    category: Optional[str] = Field(
        default=None,
        index=True,
        description="Catalogue category. Example: 'Personal Care'"
    )
    image_url: Optional[str] = Field(
        default=None,
        description="Public URL of the product image."
    )
    analysis_date: Optional[date] = Field(
        default=None,
        description="Date the environmental analysis was carried out."
    )
    ingredients: List[str] = Field(
        default_factory=list,
        sa_column=Column(JSON),
        description="Ingredient or material list. Example: ['bamboo', 'nylon-4']"
    )
    uploaded_by: Optional[str] = Field(
        default=None,
        index=True,
        description="Reference of the user who submitted the product."
    )

    # Raw environmental attributes (all optional)
    carbon_footprint_kg: Optional[float] = Field(
        default=None, description="kg CO2-equivalent per unit.")
    water_consumption_liters: Optional[float] = Field(
        default=None, description="Liters of water per unit.")
    energy_usage_kwh: Optional[float] = Field(
        default=None, description="kWh per unit.")
    waste_pollution_level: Optional[ImpactLevel] = None
    chemical_usage_level: Optional[ChemicalLevel] = None
    recyclability_level: Optional[RecyclabilityLevel] = None
    environmental_impact_level: Optional[ImpactLevel] = Field(
        default=None, index=True)
    sustainability_level: Optional[SustainabilityLevel] = None

    # Derived, recomputable projection
    eco_score: Optional[float] = Field(
        default=None,
        index=True,
        description="Composite eco-score in [0, 95]. Null when no attribute was usable."
    )
    eco_letter: Optional[EcoLetter] = Field(
        default=None,
        description="A-E band of 'eco_score'."
    )


class SearchLog(SQLModel, table=True):
    """
    One row per catalogue search, used for the user's search history and
    the average eco-score of what they looked up.
    """
    id: uuid.UUID = Field(default_factory=uuid.uuid4, primary_key=True)
    user_id: Optional[str] = Field(default=None, index=True)
    query: str
    product_id: Optional[uuid.UUID] = Field(
        default=None,
        description="First matching product, if any. Not a foreign key so logs survive product deletion."
    )
    searched_product_name: Optional[str] = None
    is_found: bool = False
    eco_score: Optional[float] = None
    eco_letter: Optional[EcoLetter] = None
    created_at: datetime = Field(default_factory=datetime.utcnow, index=True)

import math
import re
from typing import Any, List, Optional, Sequence, Tuple, Type, TypeVar
from enum import Enum
from pydantic import BaseModel, ConfigDict, Field, AliasChoices, field_validator

from app.db.schema import (
    ImpactLevel, ChemicalLevel, RecyclabilityLevel, SustainabilityLevel, EcoLetter
)

L = TypeVar("L", bound=Enum)

_NON_NUMERIC = re.compile(r"[^0-9.\-]+")
_LEADING_NUMBER = re.compile(r"^-?(?:\d+\.?\d*|\.\d+)")

# Keyword -> level, checked in order. Order matters for mixed text such as
# "low to high".
IMPACT_KEYWORDS: Sequence[Tuple[str, ImpactLevel]] = (
    ("low", ImpactLevel.LOW),
    ("high", ImpactLevel.HIGH),
    ("medium", ImpactLevel.MEDIUM),
    ("moderate", ImpactLevel.MEDIUM),
    ("med", ImpactLevel.MEDIUM),
)
CHEMICAL_KEYWORDS: Sequence[Tuple[str, ChemicalLevel]] = (
    ("minimal", ChemicalLevel.MINIMAL),
    ("moderate", ChemicalLevel.MODERATE),
    ("severe", ChemicalLevel.SEVERE),
    ("high", ChemicalLevel.SEVERE),
)
RECYCLABILITY_KEYWORDS: Sequence[Tuple[str, RecyclabilityLevel]] = (
    ("high", RecyclabilityLevel.HIGH),
    ("medium", RecyclabilityLevel.MEDIUM),
    ("low", RecyclabilityLevel.LOW),
)
SUSTAINABILITY_KEYWORDS: Sequence[Tuple[str, SustainabilityLevel]] = (
    ("high", SustainabilityLevel.HIGH),
    ("medium", SustainabilityLevel.MEDIUM),
    ("moderate", SustainabilityLevel.MEDIUM),
    ("low", SustainabilityLevel.LOW),
)


def parse_quantity(value: Any) -> Optional[float]:
    """
    Parses a non-negative measurement.

    - 12 -> 12.0
    - "1,200 L" -> 1200.0
    - "12.5kg CO2e" -> 12.5
    - "~40 kg" -> 40.0
    - "-3", "n/a", True, None -> None
    """
    if value is None or isinstance(value, bool):
        return None

    if isinstance(value, (int, float)):
        literal = value
    elif isinstance(value, str):
        text = value.strip().replace(",", "")
        # Prefer the leading literal so digits in units ("CO2e") are ignored.
        # Stripping everything first would read "120 kg CO2" as 1202.
        match = _LEADING_NUMBER.match(text) or _LEADING_NUMBER.match(
            _NON_NUMERIC.sub("", text))
        if not match:
            return None
        literal = match.group(0)
    else:
        return None

    try:
        number = float(literal)
    except (OverflowError, ValueError):
        return None

    if math.isnan(number) or math.isinf(number) or number < 0:
        return None
    return number


def parse_level(value: Any, enum_cls: Type[L], keywords: Sequence[Tuple[str, L]]) -> Optional[L]:
    """Maps free text onto a level by case-insensitive substring match."""
    if isinstance(value, enum_cls):
        return value
    if not isinstance(value, str) or not value:
        return None

    text = value.lower()
    for keyword, level in keywords:
        if keyword in text:
            return level
    return None


class EnvironmentalProfile(BaseModel):
    """
    Raw environmental attributes of a product. Every field is optional and
    bad values degrade to None instead of failing validation.
    """
    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    carbon_footprint_kg: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices(
            "carbonFootprintKg", "carbon_footprint_kg", "carbonFootprint"),
        serialization_alias="carbonFootprintKg",
    )
    water_consumption_liters: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices(
            "waterConsumptionLiters", "water_consumption_liters", "waterConsumption"),
        serialization_alias="waterConsumptionLiters",
    )
    energy_usage_kwh: Optional[float] = Field(
        default=None,
        validation_alias=AliasChoices(
            "energyUsageKwh", "energy_usage_kwh", "energyUsage"),
        serialization_alias="energyUsageKwh",
    )
    waste_pollution_level: Optional[ImpactLevel] = Field(
        default=None,
        validation_alias=AliasChoices(
            "wastePollutionLevel", "waste_pollution_level", "wastePollution"),
        serialization_alias="wastePollutionLevel",
    )
    chemical_usage_level: Optional[ChemicalLevel] = Field(
        default=None,
        validation_alias=AliasChoices(
            "chemicalUsageLevel", "chemical_usage_level", "chemicalUsage"),
        serialization_alias="chemicalUsageLevel",
    )
    recyclability_level: Optional[RecyclabilityLevel] = Field(
        default=None,
        validation_alias=AliasChoices(
            "recyclabilityLevel", "recyclability_level", "recyclability"),
        serialization_alias="recyclabilityLevel",
    )
    environmental_impact_level: Optional[ImpactLevel] = Field(
        default=None,
        validation_alias=AliasChoices(
            "environmentalImpactLevel", "environmental_impact_level", "environmentalImpact"),
        serialization_alias="environmentalImpactLevel",
    )
    sustainability_level: Optional[SustainabilityLevel] = Field(
        default=None,
        validation_alias=AliasChoices(
            "sustainabilityLevel", "sustainability_level"),
        serialization_alias="sustainabilityLevel",
    )

    @field_validator(
        "carbon_footprint_kg", "water_consumption_liters", "energy_usage_kwh",
        mode="before")
    @classmethod
    def _parse_quantity(cls, value: Any) -> Optional[float]:
        return parse_quantity(value)

    @field_validator("waste_pollution_level", "environmental_impact_level", mode="before")
    @classmethod
    def _parse_impact(cls, value: Any) -> Optional[ImpactLevel]:
        return parse_level(value, ImpactLevel, IMPACT_KEYWORDS)

    @field_validator("chemical_usage_level", mode="before")
    @classmethod
    def _parse_chemical(cls, value: Any) -> Optional[ChemicalLevel]:
        return parse_level(value, ChemicalLevel, CHEMICAL_KEYWORDS)

    @field_validator("recyclability_level", mode="before")
    @classmethod
    def _parse_recyclability(cls, value: Any) -> Optional[RecyclabilityLevel]:
        return parse_level(value, RecyclabilityLevel, RECYCLABILITY_KEYWORDS)

    @field_validator("sustainability_level", mode="before")
    @classmethod
    def _parse_sustainability(cls, value: Any) -> Optional[SustainabilityLevel]:
        return parse_level(value, SustainabilityLevel, SUSTAINABILITY_KEYWORDS)


class EcoScoreResult(BaseModel):
    score: Optional[float] = None
    letter: Optional[EcoLetter] = None


class SubScoreRead(BaseModel):
    attribute: str
    sub_score: Optional[float] = None
    weight: int
    effective_weight: int


class EcoScoreBreakdownRead(EcoScoreResult):
    raw_score: Optional[float] = None
    total_weight: int = 0
    sub_scores: List[SubScoreRead] = []
import math

import pytest

from app.db.schema import ImpactLevel, ChemicalLevel, RecyclabilityLevel, SustainabilityLevel
from app.models.eco_score import EnvironmentalProfile, parse_quantity


@pytest.mark.parametrize("value,expected", [
    (12, 12.0),
    (0, 0.0),
    (3.5, 3.5),
    ("40", 40.0),
    ("12.5kg CO2e", 12.5),
    ("1,200 L", 1200.0),
    ("~40 kg", 40.0),
    (".5", 0.5),
    ("120 kg CO2", 120.0),
])
def test_parse_quantity_accepts_numbers_and_numeric_text(value, expected):
    assert parse_quantity(value) == expected


@pytest.mark.parametrize("value", [
    None, "", "n/a", "unknown", "-3", -3, "--5", True, False,
    math.nan, math.inf, [40], {"kg": 40},
    10**400, -10**400, "1" + "0" * 400,
])
def test_parse_quantity_rejects_unusable_values(value):
    assert parse_quantity(value) is None


def test_profile_parses_free_text_into_levels():
    profile = EnvironmentalProfile.model_validate({
        "wastePollutionLevel": "Moderate waste",
        "chemicalUsageLevel": "HIGH",
        "recyclabilityLevel": "Low",
        "environmentalImpactLevel": "low impact",
        "sustainabilityLevel": "medium",
    })

    assert profile.waste_pollution_level == ImpactLevel.MEDIUM
    assert profile.chemical_usage_level == ChemicalLevel.SEVERE
    assert profile.recyclability_level == RecyclabilityLevel.LOW
    assert profile.environmental_impact_level == ImpactLevel.LOW
    assert profile.sustainability_level == SustainabilityLevel.MEDIUM


def test_low_takes_precedence_in_mixed_impact_text():
    profile = EnvironmentalProfile.model_validate({"wastePollutionLevel": "low to high"})

    assert profile.waste_pollution_level == ImpactLevel.LOW


def test_profile_never_fails_on_bad_values():
    profile = EnvironmentalProfile.model_validate({
        "carbonFootprintKg": "lots",
        "waterConsumptionLiters": {"value": 3},
        "energyUsageKwh": -1,
        "chemicalUsageLevel": "unknown",
        "recyclabilityLevel": 5,
        "unrelated": "ignored",
    })

    assert profile.model_dump() == {field: None for field in EnvironmentalProfile.model_fields}


def test_profile_accepts_snake_case_and_enum_members():
    profile = EnvironmentalProfile(
        carbon_footprint_kg=10,
        recyclability_level=RecyclabilityLevel.HIGH,
    )

    assert profile.carbon_footprint_kg == 10.0
    assert profile.recyclability_level == RecyclabilityLevel.HIGH


def test_profile_serialises_with_camel_case_keys():
    profile = EnvironmentalProfile.model_validate(
        {"carbonFootprintKg": "40", "recyclabilityLevel": "high"})

    dumped = profile.model_dump(by_alias=True, exclude_none=True, mode="json")

    assert dumped == {"carbonFootprintKg": 40.0, "recyclabilityLevel": "high"}


def test_profile_tracks_which_fields_were_sent():
    profile = EnvironmentalProfile.model_validate({"carbonFootprintKg": None, "energyUsageKwh": 4})

    assert profile.model_fields_set == {"carbon_footprint_kg", "energy_usage_kwh"}

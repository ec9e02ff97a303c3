"""
Eco-Score Engine.

Turns a product's raw environmental attributes into a composite 0-95 score
and an A-E letter grade. Pure and total: no I/O, no shared state, and any
unusable attribute is dropped from the weighted average instead of raising.
"""
import math
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple, Union

from pydantic import ValidationError

from app.db.schema import (
    ImpactLevel, ChemicalLevel, RecyclabilityLevel, SustainabilityLevel, EcoLetter
)
from app.models.eco_score import (
    EnvironmentalProfile, EcoScoreResult, EcoScoreBreakdownRead, SubScoreRead
)

Curve = Sequence[Tuple[float, float]]
ProfileInput = Union[EnvironmentalProfile, Mapping[str, Any], None]

# (value, score) control points. At or below the first value scores 100,
# beyond the last value scores the last score (0).
CARBON_CURVE: Curve = ((50, 100), (100, 60), (200, 30), (400, 0))
WATER_CURVE: Curve = ((500, 100), (1500, 50), (3000, 20), (6000, 0))
ENERGY_CURVE: Curve = ((5, 100), (20, 50), (50, 10), (100, 0))

IMPACT_SCORES = {
    ImpactLevel.LOW: 100,
    ImpactLevel.MEDIUM: 60,
    ImpactLevel.HIGH: 0,
}
CHEMICAL_SCORES = {
    ChemicalLevel.MINIMAL: 100,
    ChemicalLevel.MODERATE: 60,
    ChemicalLevel.SEVERE: 0,
}
# Low recyclability floors at 20, not 0: it is recoverable downstream,
# unlike active pollution or chemical harm.
RECYCLABILITY_SCORES = {
    RecyclabilityLevel.HIGH: 100,
    RecyclabilityLevel.MEDIUM: 60,
    RecyclabilityLevel.LOW: 20,
}
SUSTAINABILITY_SCORES = {
    SustainabilityLevel.HIGH: 100,
    SustainabilityLevel.MEDIUM: 60,
    SustainabilityLevel.LOW: 20,
}

WEIGHTS: Dict[str, int] = {
    "carbon": 30,
    "energy": 20,
    "water": 15,
    "recyclability": 10,
    "waste": 10,
    "chemical": 10,
    "environmental_impact": 3,
    "sustainability": 2,
}

SCORE_CAP = 95.0

# Lower bound (inclusive) -> letter, highest first
LETTER_BANDS: Sequence[Tuple[float, EcoLetter]] = (
    (90, EcoLetter.A),
    (75, EcoLetter.B),
    (55, EcoLetter.C),
    (30, EcoLetter.D),
    (0, EcoLetter.E),
)


def _clamp(value: float, low: float, high: float) -> float:
    return max(low, min(high, value))


def _round2(value: float) -> float:
    # Half-up, not banker's rounding
    return math.floor(value * 100 + 0.5) / 100


def _lerp(value: float, v1: float, v2: float, s1: float, s2: float) -> float:
    if v1 == v2:
        return s2
    ratio = (value - v1) / (v2 - v1)
    return _clamp(s1 + ratio * (s2 - s1), 0, 100)


def interpolate(value: Optional[float], curve: Curve) -> Optional[float]:
    """
    Piecewise-linear lookup of `value` on `curve`, clamped to [0, 100].
    Returns None when there is no value.
    """
    if value is None:
        return None

    first_value, first_score = curve[0]
    if value <= first_value:
        return _clamp(first_score, 0, 100)

    for (v1, s1), (v2, s2) in zip(curve, curve[1:]):
        if value <= v2:
            return _lerp(value, v1, v2, s1, s2)

    return _clamp(curve[-1][1], 0, 100)


def carbon_sub_score(kg: Optional[float]) -> Optional[float]:
    return interpolate(kg, CARBON_CURVE)


def water_sub_score(liters: Optional[float]) -> Optional[float]:
    return interpolate(liters, WATER_CURVE)


def energy_sub_score(kwh: Optional[float]) -> Optional[float]:
    return interpolate(kwh, ENERGY_CURVE)


def impact_sub_score(level: Optional[ImpactLevel]) -> Optional[float]:
    return IMPACT_SCORES.get(level) if level is not None else None


def chemical_sub_score(level: Optional[ChemicalLevel]) -> Optional[float]:
    return CHEMICAL_SCORES.get(level) if level is not None else None


def recyclability_sub_score(level: Optional[RecyclabilityLevel]) -> Optional[float]:
    return RECYCLABILITY_SCORES.get(level) if level is not None else None


def sustainability_sub_score(level: Optional[SustainabilityLevel]) -> Optional[float]:
    return SUSTAINABILITY_SCORES.get(level) if level is not None else None


def to_profile(data: ProfileInput) -> EnvironmentalProfile:
    """
    Normalises caller input into an EnvironmentalProfile.
    Anything that is not a mapping counts as an empty profile.
    """
    if isinstance(data, EnvironmentalProfile):
        return data
    if not isinstance(data, Mapping):
        return EnvironmentalProfile()

    try:
        return EnvironmentalProfile.model_validate(dict(data))
    except ValidationError:
        # Field validators are total; this only trips on non-string keys
        return EnvironmentalProfile()


def compute_sub_scores(data: ProfileInput) -> Dict[str, Optional[float]]:
    """Attribute name -> 0-100 sub-score, or None when the attribute is unusable."""
    profile = to_profile(data)
    return {
        "carbon": carbon_sub_score(profile.carbon_footprint_kg),
        "energy": energy_sub_score(profile.energy_usage_kwh),
        "water": water_sub_score(profile.water_consumption_liters),
        "recyclability": recyclability_sub_score(profile.recyclability_level),
        "waste": impact_sub_score(profile.waste_pollution_level),
        "chemical": chemical_sub_score(profile.chemical_usage_level),
        "environmental_impact": impact_sub_score(profile.environmental_impact_level),
        "sustainability": sustainability_sub_score(profile.sustainability_level),
    }


def letter_for_score(score: Optional[float]) -> Optional[EcoLetter]:
    if score is None:
        return None
    for lower_bound, letter in LETTER_BANDS:
        if score >= lower_bound:
            return letter
    return EcoLetter.E


def explain_eco_score(data: ProfileInput) -> EcoScoreBreakdownRead:
    """
    Computes the eco-score and reports how each attribute contributed.

    Attributes without a sub-score get an effective weight of 0, so the
    weighted average is taken only over what is present. With nothing
    present the result is score=None, letter=None.
    """
    sub_scores = compute_sub_scores(data)

    rows = []
    weighted_sum = 0.0
    total_weight = 0
    for attribute, weight in WEIGHTS.items():
        sub_score = sub_scores[attribute]
        effective_weight = weight if sub_score is not None else 0
        if effective_weight:
            weighted_sum += sub_score * effective_weight
            total_weight += effective_weight
        rows.append(SubScoreRead(
            attribute=attribute,
            sub_score=sub_score,
            weight=weight,
            effective_weight=effective_weight,
        ))

    if not total_weight:
        return EcoScoreBreakdownRead(sub_scores=rows)

    raw_score = _round2(weighted_sum / total_weight)
    score = _clamp(raw_score, 0, SCORE_CAP)

    return EcoScoreBreakdownRead(
        score=score,
        letter=letter_for_score(score),
        raw_score=raw_score,
        total_weight=total_weight,
        sub_scores=rows,
    )


def compute_eco_score(data: ProfileInput) -> EcoScoreResult:
    breakdown = explain_eco_score(data)
    return EcoScoreResult(score=breakdown.score, letter=breakdown.letter)

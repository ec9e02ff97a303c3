from fastapi import APIRouter, status

from app.models.eco_score import EnvironmentalProfile, EcoScoreBreakdownRead
from app.services.eco_score import explain_eco_score

router = APIRouter()


@router.post(
    "/",
    response_model=EcoScoreBreakdownRead,
    status_code=status.HTTP_200_OK,
    summary="Preview an eco-score",
)
def preview_eco_score(profile: EnvironmentalProfile):
    """
    Scores a set of environmental attributes without saving anything.
    Used by the admin product form to show the grade while typing.

    Unrecognised or malformed attribute values are ignored, never rejected.
    If nothing usable is sent, `score` and `letter` are null.
    """
    return explain_eco_score(profile)

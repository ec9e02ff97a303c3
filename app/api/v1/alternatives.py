from typing import Optional
from uuid import UUID
from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_alternative_service
from app.services.alternatives import AlternativeService
from app.models.product import AlternativesRead

router = APIRouter()


@router.get(
    "/",
    response_model=AlternativesRead,
    summary="Suggest greener alternatives",
)
def get_alternatives(
    product_id: Optional[UUID] = Query(None, description="Base product ID"),
    product_name: Optional[str] = Query(
        None, description="Base product name (exact, case-insensitive)"),
    count: Optional[int] = Query(
        None, ge=1, description="Number of suggestions (capped server-side)"),
    service: AlternativeService = Depends(get_alternative_service)
):
    """
    Related products with a better eco-score come first, then other related
    products, then the rest of the catalogue, each ranked by eco-score.
    """
    return service.find_alternatives(
        product_id=product_id, product_name=product_name, count=count)

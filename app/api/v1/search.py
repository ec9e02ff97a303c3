from typing import List, Optional
from fastapi import APIRouter, Depends, Query

from app.core.dependencies import get_search_service
from app.services.search import SearchService
from app.models.product import ProductRead
from app.models.search import SearchLogRead, SearchSummaryRead

router = APIRouter()


@router.get("/", response_model=List[ProductRead])
def search_products(
    q: str = Query("", description="Text to match against product names"),
    user_id: Optional[str] = Query(None),
    service: SearchService = Depends(get_search_service)
):
    """
    Search products by name. The search is recorded in the user's history.
    """
    return service.search_products(q, user_id=user_id)


@router.get("/suggestions", response_model=List[str])
def get_suggestions(
    q: str = Query(""),
    service: SearchService = Depends(get_search_service)
):
    return service.suggest_names(q)


@router.get("/history", response_model=List[SearchLogRead])
def get_search_history(
    user_id: Optional[str] = Query(None),
    limit: int = Query(20, ge=1, le=100),
    service: SearchService = Depends(get_search_service)
):
    return service.get_search_history(user_id, limit=limit)


@router.get("/summary", response_model=SearchSummaryRead)
def get_search_summary(
    user_id: Optional[str] = Query(None),
    service: SearchService = Depends(get_search_service)
):
    """
    Number of searches and the average eco-score of the products found.
    """
    return service.get_search_summary(user_id)

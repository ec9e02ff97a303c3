from fastapi import Depends, Request
from sqlmodel import Session

from app.core.cache import TTLCache
from app.db.core import get_session

from app.services.product import ProductService
from app.services.alternatives import AlternativeService
from app.services.search import SearchService


def get_cache(request: Request) -> TTLCache:
    """The application-wide cache created in app.main."""
    return request.app.state.cache


def get_product_service(
    session: Session = Depends(get_session),
    cache: TTLCache = Depends(get_cache)
) -> ProductService:
    return ProductService(session=session, cache=cache)


def get_alternative_service(session: Session = Depends(get_session)) -> AlternativeService:
    return AlternativeService(session=session)


def get_search_service(session: Session = Depends(get_session)) -> SearchService:
    return SearchService(session=session)

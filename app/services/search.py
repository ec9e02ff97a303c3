from typing import List, Optional
from sqlmodel import Session, select, col, func
from loguru import logger

from app.core.config import settings
from app.db.schema import Product, SearchLog
from app.models.product import ProductRead
from app.models.search import SearchSummaryRead
from app.services.product import to_product_read


class SearchService:
    def __init__(self, session: Session):
        self.session = session

    def search_products(self, query: str, user_id: Optional[str] = None) -> List[ProductRead]:
        """
        Case-insensitive name search. Every non-blank search is logged along
        with the first hit and its cached eco-score.
        """
        if not query or not query.strip():
            return []

        term = query.strip()
        products = self.session.exec(
            select(Product)
            .where(func.lower(Product.name).contains(term.lower()))
            .order_by(col(Product.created_at).desc())
            .limit(settings.search_result_limit)
        ).all()

        first = products[0] if products else None
        self.session.add(SearchLog(
            user_id=user_id,
            query=term,
            product_id=first.id if first else None,
            searched_product_name=first.name if first else None,
            is_found=first is not None,
            eco_score=first.eco_score if first else None,
            eco_letter=first.eco_letter if first else None,
        ))
        self.session.commit()

        logger.info(
            f"Search logged: '{term}' by user {user_id}, found: {len(products)}")
        return [to_product_read(p) for p in products]

    def suggest_names(self, query: str) -> List[str]:
        """Distinct product names for autocomplete."""
        if not query or not query.strip():
            return []

        names = self.session.exec(
            select(Product.name)
            .where(func.lower(Product.name).contains(query.strip().lower()))
            .distinct()
            .order_by(Product.name)
            .limit(settings.suggestion_limit)
        ).all()
        return list(names)

    def get_search_history(self, user_id: Optional[str], limit: int = 20) -> List[SearchLog]:
        return self.session.exec(
            select(SearchLog)
            .where(SearchLog.user_id == user_id)
            .order_by(col(SearchLog.created_at).desc())
            .limit(limit)
        ).all()

    def get_search_summary(self, user_id: Optional[str]) -> SearchSummaryRead:
        """
        Search count and the average eco-score of the products the user
        found. Searches whose hit had no score are left out of the average.
        """
        logs = self.session.exec(
            select(SearchLog).where(SearchLog.user_id == user_id)
        ).all()

        found = [log for log in logs if log.is_found]
        scores = [log.eco_score for log in found if log.eco_score is not None]
        average = round(sum(scores) / len(scores), 2) if scores else None

        return SearchSummaryRead(
            user_id=user_id,
            total_searches=len(logs),
            found_searches=len(found),
            average_eco_score=average,
        )

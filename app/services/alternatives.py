import re
from uuid import UUID
from typing import List, Optional, Set
from fastapi import HTTPException, status
from sqlmodel import Session, select, col, func
from loguru import logger

from app.core.config import settings
from app.db.schema import Product
from app.models.product import AlternativeRead, AlternativesRead
from app.services.eco_score import compute_eco_score
from app.services.product import profile_from_product
from app.utils.eco_display import format_eco_score

STOP_WORDS = {
    "the", "and", "with", "for", "from", "by", "new", "series", "model",
    "edition", "speaker", "pack", "set", "size", "color", "case", "cover",
    "brand", "motif", "pattern",
}

_NON_TOKEN = re.compile(r"[^a-z0-9\s\-]")
_BRAND = re.compile(r"^([A-Z][A-Za-z0-9\-]+)")


def name_tokens(name: Optional[str]) -> Set[str]:
    text = _NON_TOKEN.sub(" ", (name or "").lower())
    return {t for t in text.split() if len(t) >= 2 and t not in STOP_WORDS}


def guess_brand(name: Optional[str]) -> Optional[str]:
    """Leading capitalised word, e.g. 'Samsung' in 'Samsung Galaxy A55'."""
    if not name:
        return None
    match = _BRAND.match(name.strip())
    return match.group(1).lower() if match else None


def is_related(base: Product, candidate: Product) -> bool:
    base_category = (base.category or "").lower().strip()
    candidate_category = (candidate.category or "").lower().strip()
    if base_category and base_category == candidate_category:
        return True

    if name_tokens(base.name) & name_tokens(candidate.name):
        return True

    base_brand = guess_brand(base.name)
    return base_brand is not None and base_brand == guess_brand(candidate.name)


def effective_score(product: Product) -> Optional[float]:
    """Cached eco-score, falling back to a fresh computation."""
    if product.eco_score is not None:
        return product.eco_score
    return compute_eco_score(profile_from_product(product)).score


def _rank_key(scored) -> float:
    score = scored[1]
    return score if score is not None else float("-inf")


class AlternativeService:
    """
    Suggests products to consider instead of a given one, preferring related
    products with a better eco-score.
    """

    def __init__(self, session: Session):
        self.session = session

    def _find_base(self, product_id: Optional[UUID], product_name: Optional[str]) -> Product:
        if product_id is None and not product_name:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST,
                detail="product_id or product_name is required."
            )

        base = None
        if product_id is not None:
            base = self.session.get(Product, product_id)

        if base is None and product_name:
            base = self.session.exec(
                select(Product)
                .where(func.lower(Product.name) == product_name.strip().lower())
                .order_by(col(Product.created_at))
            ).first()

        if base is None:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Base product not found."
            )
        return base

    def find_alternatives(
        self,
        product_id: Optional[UUID] = None,
        product_name: Optional[str] = None,
        count: Optional[int] = None,
    ) -> AlternativesRead:
        """
        Ranks the rest of the catalogue against a base product.

        Output tiers, each sorted by eco-score descending (stable, so ties
        keep creation order):
        1. related and strictly better than the base,
        2. the remaining related products,
        3. everything else.
        Unscored products sort after scored ones. When the base itself has
        no score, any scored related product counts as better.
        """
        base = self._find_base(product_id, product_name)
        base_score = effective_score(base)

        if count is None:
            count = settings.alternatives_default_count
        count = max(1, min(count, settings.alternatives_max_count))

        candidates = self.session.exec(
            select(Product)
            .where(Product.id != base.id)
            .order_by(col(Product.created_at))
        ).all()

        related_better, related_other, unrelated = [], [], []
        for candidate in candidates:
            score = effective_score(candidate)
            entry = (candidate, score)

            if not is_related(base, candidate):
                unrelated.append(entry)
            elif score is not None and (base_score is None or score > base_score):
                related_better.append(entry)
            else:
                related_other.append(entry)

        alternatives: List[AlternativeRead] = []
        tiers = (
            (related_better, True, True),
            (related_other, True, False),
            (unrelated, False, False),
        )
        for entries, related, better in tiers:
            for candidate, score in sorted(entries, key=_rank_key, reverse=True):
                if len(alternatives) >= count:
                    break
                alternatives.append(self._to_alternative(candidate, score, related, better))

        logger.info(
            f"Alternatives for {base.id}: {len(alternatives)} of {len(candidates)} candidates")
        return AlternativesRead(
            base_product_id=base.id,
            base_eco_score=base_score,
            alternatives=alternatives,
        )

    def _to_alternative(self, product: Product, score: Optional[float], related: bool, better: bool) -> AlternativeRead:
        letter = product.eco_letter
        if product.eco_score is None and score is not None:
            letter = compute_eco_score(profile_from_product(product)).letter

        return AlternativeRead(
            id=product.id,
            name=product.name,
            category=product.category,
            image_url=product.image_url,
            eco_score=score,
            eco_letter=letter,
            eco_display=format_eco_score(score),
            sustainability_level=product.sustainability_level,
            recyclability_level=product.recyclability_level,
            is_related=related,
            is_better=better,
        )

from uuid import UUID
from typing import List
from fastapi import HTTPException, status
from sqlmodel import Session, select, col
from loguru import logger

from app.core.cache import TTLCache
from app.db.schema import Product, ImpactLevel
from app.models.eco_score import EnvironmentalProfile
from app.models.product import (
    ProductCreate, ProductUpdate, ProductRead, CategorizedProductsRead, RecomputeSummary
)
from app.services.eco_score import compute_eco_score
from app.utils.eco_display import format_eco_score, letter_color

ALL_PRODUCTS_KEY = "all_products"
CATEGORIZED_PRODUCTS_KEY = "categorized_products"

# Product columns that mirror EnvironmentalProfile fields one-to-one
PROFILE_FIELDS = tuple(EnvironmentalProfile.model_fields)


def profile_from_product(product: Product) -> EnvironmentalProfile:
    return EnvironmentalProfile(
        **{field: getattr(product, field) for field in PROFILE_FIELDS})


def apply_eco_score(product: Product) -> bool:
    """
    Recomputes the cached eco-score of a product from its raw attributes.
    Returns True when the cached score or letter changed.
    """
    result = compute_eco_score(profile_from_product(product))
    changed = (product.eco_score, product.eco_letter) != (result.score, result.letter)
    product.eco_score = result.score
    product.eco_letter = result.letter
    return changed


def to_product_read(product: Product) -> ProductRead:
    return ProductRead(
        id=product.id,
        name=product.name,
        category=product.category,
        image_url=product.image_url,
        analysis_date=product.analysis_date,
        ingredients=list(product.ingredients or []),
        uploaded_by=product.uploaded_by,
        environmental=profile_from_product(product),
        eco_score=product.eco_score,
        eco_letter=product.eco_letter,
        eco_display=format_eco_score(product.eco_score),
        eco_color=letter_color(product.eco_letter),
        created_at=product.created_at,
        updated_at=product.updated_at,
    )


class ProductService:
    """
    Catalogue persistence. Keeps each product's cached eco-score in step with
    its raw environmental attributes and invalidates list caches on writes.
    """

    def __init__(self, session: Session, cache: TTLCache):
        self.session = session
        self.cache = cache

    def _invalidate_cache(self):
        self.cache.delete(ALL_PRODUCTS_KEY)
        self.cache.delete(CATEGORIZED_PRODUCTS_KEY)
        logger.debug("Product caches invalidated")

    def _get_product_or_404(self, product_id: UUID) -> Product:
        product = self.session.get(Product, product_id)
        if not product:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="Product not found."
            )
        return product

    def _all_products(self) -> List[Product]:
        query = select(Product).order_by(col(Product.created_at).desc())
        return self.session.exec(query).all()

    def list_products(self) -> List[ProductRead]:
        cached = self.cache.get(ALL_PRODUCTS_KEY)
        if cached is not None:
            return cached

        products = [to_product_read(p) for p in self._all_products()]
        self.cache.set(ALL_PRODUCTS_KEY, products)
        logger.info(f"Fetched {len(products)} products from database")
        return products

    def get_product(self, product_id: UUID) -> ProductRead:
        return to_product_read(self._get_product_or_404(product_id))

    def create_product(self, data: ProductCreate) -> ProductRead:
        product = Product(
            **data.model_dump(exclude={"environmental"}),
            **data.environmental.model_dump(),
        )
        apply_eco_score(product)

        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)
        self._invalidate_cache()

        logger.info(
            f"Product {product.id} created with eco-score {product.eco_score} ({product.eco_letter})")
        return to_product_read(product)

    def update_product(self, product_id: UUID, data: ProductUpdate) -> ProductRead:
        """
        Applies a partial update. Environmental fields are merged into the
        stored record and the eco-score is recomputed from the merged result,
        so a change to any attribute always refreshes the cached score.
        """
        product = self._get_product_or_404(product_id)

        update_data = data.model_dump(exclude_unset=True, exclude={"environmental"})
        for key, value in update_data.items():
            setattr(product, key, value)

        if data.environmental is not None:
            env_data = data.environmental.model_dump(exclude_unset=True)
            for key, value in env_data.items():
                setattr(product, key, value)

        apply_eco_score(product)

        self.session.add(product)
        self.session.commit()
        self.session.refresh(product)
        self._invalidate_cache()

        logger.info(
            f"Product {product.id} updated, eco-score now {product.eco_score} ({product.eco_letter})")
        return to_product_read(product)

    def delete_product(self, product_id: UUID):
        product = self._get_product_or_404(product_id)
        self.session.delete(product)
        self.session.commit()
        self._invalidate_cache()

        logger.info(f"Product {product_id} deleted")
        return {"status": "deleted", "id": product_id}

    def get_categorized_products(self) -> CategorizedProductsRead:
        """Groups products by overall environmental impact, newest first."""
        cached = self.cache.get(CATEGORIZED_PRODUCTS_KEY)
        if cached is not None:
            return cached

        groups = {"low": [], "medium": [], "high": [], "unrated": []}
        for product in self._all_products():
            level = product.environmental_impact_level
            key = ImpactLevel(level).value if level is not None else "unrated"
            groups[key].append(to_product_read(product))

        categorized = CategorizedProductsRead(**groups)
        self.cache.set(CATEGORIZED_PRODUCTS_KEY, categorized)
        return categorized

    def recompute_scores(self) -> RecomputeSummary:
        """
        Batch job: recomputes every cached eco-score from raw attributes.
        Used after scoring rules change or after bulk imports.
        """
        products = self.session.exec(select(Product)).all()

        changed = 0
        for product in products:
            if apply_eco_score(product):
                self.session.add(product)
                changed += 1

        if changed:
            self.session.commit()
            self._invalidate_cache()

        logger.info(f"Eco-score recompute: {changed} of {len(products)} products changed")
        return RecomputeSummary(scanned=len(products), changed=changed)

from typing import List
from uuid import UUID
from fastapi import APIRouter, Depends, status

from app.core.dependencies import get_product_service
from app.services.product import ProductService
from app.models.product import (
    ProductCreate,
    ProductUpdate,
    ProductRead,
    CategorizedProductsRead,
    RecomputeSummary,
)

router = APIRouter()

# ==============================================================================
# CATALOGUE
# ==============================================================================


@router.get("/", response_model=List[ProductRead])
def list_products(
    service: ProductService = Depends(get_product_service)
):
    """
    List every product, newest first, with its cached eco-score.
    """
    return service.list_products()


@router.post("/", response_model=ProductRead, status_code=status.HTTP_201_CREATED)
def create_product(
    data: ProductCreate,
    service: ProductService = Depends(get_product_service)
):
    """
    Create a product.
    - The eco-score and letter are computed from `environmental` and stored with it.
    - Missing or malformed environmental values are dropped from the score, never rejected.
    """
    return service.create_product(data)


@router.get("/categorized", response_model=CategorizedProductsRead)
def get_categorized_products(
    service: ProductService = Depends(get_product_service)
):
    """
    Products grouped by overall environmental impact (low / medium / high / unrated).
    """
    return service.get_categorized_products()


@router.post("/recompute-scores", response_model=RecomputeSummary)
def recompute_scores(
    service: ProductService = Depends(get_product_service)
):
    """
    Recompute every cached eco-score from the stored raw attributes.
    """
    return service.recompute_scores()


@router.get("/{product_id}", response_model=ProductRead)
def get_product(
    product_id: UUID,
    service: ProductService = Depends(get_product_service)
):
    return service.get_product(product_id)


@router.patch("/{product_id}", response_model=ProductRead)
def update_product(
    product_id: UUID,
    data: ProductUpdate,
    service: ProductService = Depends(get_product_service)
):
    """
    Partially update a product. Any environmental change triggers a full
    eco-score recompute over the merged attributes.
    """
    return service.update_product(product_id, data)


@router.delete("/{product_id}", status_code=status.HTTP_200_OK)
def delete_product(
    product_id: UUID,
    service: ProductService = Depends(get_product_service)
):
    return service.delete_product(product_id)

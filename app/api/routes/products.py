"""
Public product listing endpoints.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query, status

from app.api.dependencies import get_product_repository, get_product_service
from app.api.responses import api_response
from app.api.schemas.products import ProductCreateRequest
from app.core.exceptions import NotFoundError
from app.repositories.product_repository import ProductRepository
from app.services.product_service import ProductService

router = APIRouter()


@router.get("")
async def list_products(
    category: Optional[str] = Query(None),
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
):
    """All products, optionally filtered by category."""
    items = await products.list_all(category)
    return api_response("Products retrieved successfully", [p.to_dict(include_user=True) for p in items])


@router.get("/{product_id}")
async def get_product(
    product_id: str,
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
):
    product = await products.get_by_id(product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return api_response("Product retrieved successfully", product.to_dict(include_user=True))


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_product_for_sale(
    request: ProductCreateRequest,
    service: ProductService = Depends(get_product_service),  # noqa: B008
):
    product = await service.create_listing(request, donation=False)
    return api_response("Product created successfully", product.to_dict(), status.HTTP_201_CREATED)


@router.post("/donate", status_code=status.HTTP_201_CREATED)
async def create_donation(
    request: ProductCreateRequest,
    service: ProductService = Depends(get_product_service),  # noqa: B008
):
    product = await service.create_listing(request, donation=True)
    return api_response("Product created successfully", product.to_dict(), status.HTTP_201_CREATED)

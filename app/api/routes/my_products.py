"""
Seller endpoints for managing their own listings.
"""

from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_product_repository
from app.api.responses import api_response
from app.api.schemas.products import MyProductUpdateRequest
from app.core.exceptions import BadRequestError, NotFoundError
from app.repositories.product_repository import ProductRepository

router = APIRouter()


@router.get("")
async def list_my_products(
    uploader: Optional[str] = Query(None),
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
):
    if not uploader:
        raise BadRequestError("Uploader ID is required")

    items = await products.list_by_uploader(uploader)
    return api_response("Products retrieved successfully", [p.to_dict() for p in items])


@router.put("/{product_id}")
async def update_my_product(
    product_id: str,
    request: MyProductUpdateRequest,
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
):
    product = await products.get_by_id(product_id)
    if product is None:
        raise NotFoundError("Product not found")

    updated = await products.update(product, **request.model_dump(exclude_none=True))
    return api_response("Product updated successfully", updated.to_dict())


@router.delete("/delete/{product_id}")
async def delete_my_product(
    product_id: str,
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
):
    product = await products.get_by_id(product_id)
    if product is None:
        raise NotFoundError("Product not found")

    data = product.to_dict()
    await products.delete(product)
    return api_response("Product deleted successfully", data)

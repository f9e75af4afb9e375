"""
Back-office product moderation.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, File, Form, UploadFile

from app.api.dependencies import get_current_admin, get_image_host, get_product_repository
from app.api.responses import api_response
from app.api.schemas.products import ProductStatusRequest
from app.clients.image_host_client import ImageHostClient
from app.core.exceptions import BadRequestError, NotFoundError
from app.models.db.product import STATUS_APPROVED, STATUS_REJECTED, TAG_DONATE
from app.repositories.product_repository import ProductRepository

logger = logging.getLogger(__name__)

router = APIRouter(dependencies=[Depends(get_current_admin)])

MODERATION_STATUSES = (STATUS_APPROVED, STATUS_REJECTED)


async def _get_or_404(products: ProductRepository, product_id: str):
    product = await products.get_by_id(product_id)
    if product is None:
        raise NotFoundError("Product not found")
    return product


@router.get("")
async def list_all_products(products: ProductRepository = Depends(get_product_repository)):  # noqa: B008
    items = await products.list_all()
    return api_response("Products retrieved successfully", [p.to_dict(include_user=True) for p in items])


@router.get("/{product_id}")
async def get_product(product_id: str, products: ProductRepository = Depends(get_product_repository)):  # noqa: B008
    product = await _get_or_404(products, product_id)
    return api_response("Product retrieved successfully", product.to_dict(include_user=True))


@router.delete("/{product_id}")
async def delete_product(product_id: str, products: ProductRepository = Depends(get_product_repository)):  # noqa: B008
    product = await _get_or_404(products, product_id)
    await products.delete(product)
    logger.info(f"Product {product_id} deleted by admin")
    return api_response("Product deleted successfully")


@router.put("/{product_id}")
async def update_product(
    product_id: str,
    title: Optional[str] = Form(None),
    description: Optional[str] = Form(None),
    category: Optional[str] = Form(None),
    price: Optional[float] = Form(None),
    price_category: Optional[str] = Form(None, alias="priceCategory"),
    location: Optional[str] = Form(None),
    tag: Optional[str] = Form(None),
    image: Optional[UploadFile] = File(None),  # noqa: B008
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
    image_host: ImageHostClient = Depends(get_image_host),  # noqa: B008
):
    """
    Partial update (multipart form).

    Price fields are ignored for donations. An uploaded image replaces the
    primary image and is added to the gallery.
    """
    product = await _get_or_404(products, product_id)

    submitted = {
        "title": title,
        "description": description,
        "category": category,
        "location": location,
        "tag": tag,
    }
    fields = {key: value for key, value in submitted.items() if value}

    is_donation = (tag or product.tag or "").lower() == TAG_DONATE.lower()
    if not is_donation:
        if price is not None:
            fields["price"] = price
        if price_category is not None:
            fields["price_category"] = price_category

    if image is not None and image.filename:
        url = await image_host.upload_image(await image.read())
        fields["primary_image"] = url
        fields["images"] = [url, *(product.images or [])]

    updated = await products.update(product, **fields)
    return api_response("Product updated successfully", updated.to_dict(include_user=True))


@router.put("/{product_id}/status")
async def update_product_status(
    product_id: str,
    request: ProductStatusRequest,
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
):
    if request.status not in MODERATION_STATUSES:
        raise BadRequestError("Invalid status value")

    product = await _get_or_404(products, product_id)
    updated = await products.update(product, status=request.status)
    return api_response(f"Product status updated to {request.status}", updated.to_dict())

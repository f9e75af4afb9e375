"""
Logistics endpoints (GoShiip relay): couriers, rates, tracking, shipments.
"""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query

from app.api.dependencies import get_goshiip_client
from app.api.responses import api_response
from app.api.schemas.logistics import RateRequest
from app.clients.goshiip_client import GoshiipClient
from app.core.exceptions import BadRequestError, NotFoundError

logger = logging.getLogger(__name__)

router = APIRouter()


@router.get("/couriers")
async def list_couriers(
    type: Optional[str] = Query(None),
    goshiip: GoshiipClient = Depends(get_goshiip_client),  # noqa: B008
):
    if not type:
        raise BadRequestError("Type query parameter is required.")

    couriers = await goshiip.get_couriers(type)
    return api_response("Couriers fetched successfully", couriers)


@router.post("/rates")
async def get_rate(
    request: RateRequest,
    goshiip: GoshiipClient = Depends(get_goshiip_client),  # noqa: B008
):
    """Quote a single courier; the parcel is always the constant parcel."""
    rates = await goshiip.get_rate(
        carrier_name=request.carrier_name,
        shipment_type=request.type,
        to_address=request.to_address,
        from_address=request.from_address,
        items=request.items,
    )
    return api_response("Rates fetched successfully", rates)


@router.get("/track-shipment/{reference}")
async def track_shipment(
    reference: str,
    goshiip: GoshiipClient = Depends(get_goshiip_client),  # noqa: B008
):
    result = await goshiip.track_shipment(reference)
    if not result.get("status"):
        raise NotFoundError(result.get("message") or "Shipment not found")

    return api_response(result.get("message") or "Shipment tracked successfully", result.get("data"))


@router.get("/shipments")
async def list_shipments(
    status: Optional[str] = Query(None),
    goshiip: GoshiipClient = Depends(get_goshiip_client),  # noqa: B008
):
    if not status:
        raise BadRequestError("Status query parameter is required.")

    result = await goshiip.list_shipments(status)
    if not result.get("status"):
        raise BadRequestError(result.get("message") or "Failed to fetch shipments")

    return api_response("Shipments fetched successfully", result.get("data"))


@router.get("/shipments/cancel/{reference}")
async def cancel_shipment(
    reference: str,
    goshiip: GoshiipClient = Depends(get_goshiip_client),  # noqa: B008
):
    result = await goshiip.cancel_shipment(reference)
    logger.info(f"Shipment {reference} cancellation: {result.get('message')}")
    if not result.get("status"):
        raise BadRequestError(result.get("message") or "Failed to cancel shipment")

    return api_response("Shipment canceled successfully", result.get("data"))

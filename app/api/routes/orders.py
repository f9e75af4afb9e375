"""
Order endpoints.
"""

from fastapi import APIRouter, Depends, status

from app.api.dependencies import get_current_user, get_order_repository, get_product_repository
from app.api.responses import api_response
from app.api.schemas.orders import OrderCreateRequest
from app.core.exceptions import BadRequestError, NotFoundError
from app.models.db.user import UserDB
from app.repositories.order_repository import OrderRepository
from app.repositories.product_repository import ProductRepository

router = APIRouter()


@router.post("", status_code=status.HTTP_201_CREATED)
async def create_order(
    request: OrderCreateRequest,
    user: UserDB = Depends(get_current_user),  # noqa: B008
    orders: OrderRepository = Depends(get_order_repository),  # noqa: B008
    products: ProductRepository = Depends(get_product_repository),  # noqa: B008
):
    """Create a pending order; the amount defaults to the product price."""
    product = await products.get_by_id(request.product_id)
    if product is None:
        raise NotFoundError("Product not found")

    amount = request.amount if request.amount is not None else product.price
    if amount is None:
        raise BadRequestError("Amount is required for this product")

    order = await orders.create(user_id=user.id, product_id=product.id, amount=amount)
    return api_response("Order created successfully", order.to_dict(), status.HTTP_201_CREATED)


@router.get("/user/{user_id}")
async def list_user_orders(
    user_id: str,
    orders: OrderRepository = Depends(get_order_repository),  # noqa: B008
):
    items = await orders.list_by_user(user_id)
    return api_response("Orders fetched successfully", [o.to_dict(include_relations=True) for o in items])

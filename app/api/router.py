from fastapi import APIRouter

from app.api.routes import (
    admin_auth,
    admin_products,
    logistics,
    my_products,
    notifications,
    orders,
    payment,
    products,
    transactions,
    user_profile,
    users,
)

api_router = APIRouter()

# API routes (all have /api prefix from the app factory)
api_router.include_router(users.router, prefix="/users", tags=["users"])
api_router.include_router(user_profile.router, prefix="/userProfile", tags=["user-profile"])
api_router.include_router(payment.router, prefix="/payment", tags=["payment"])
api_router.include_router(products.router, prefix="/products", tags=["products"])
api_router.include_router(my_products.router, prefix="/myProducts", tags=["my-products"])
api_router.include_router(orders.router, prefix="/orders", tags=["orders"])
api_router.include_router(notifications.router, prefix="/notify", tags=["notifications"])
api_router.include_router(logistics.router, tags=["logistics"])
api_router.include_router(transactions.router, tags=["transactions"])

# Admin routes
api_router.include_router(admin_auth.router, prefix="/admin", tags=["admin"])
api_router.include_router(admin_auth.dashboard_router, prefix="/adminDashboard", tags=["admin"])
api_router.include_router(admin_products.router, prefix="/adminProduct", tags=["admin-products"])
api_router.include_router(notifications.admin_router, prefix="/notifyAdmin", tags=["admin-notifications"])

from fastapi import APIRouter
from order_history.api.admin import orders

router = APIRouter()
router.include_router(orders.router, prefix="/orders", tags=["AdminOrders"])

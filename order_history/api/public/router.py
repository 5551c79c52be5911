from fastapi import APIRouter
from order_history.api.public import orders

router = APIRouter()
router.include_router(orders.router, prefix="/orders", tags=["Public"])

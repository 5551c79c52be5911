from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from order_history.core.deps import get_customer_context
from order_history.db.session import get_db
from order_history.domain import ActorContext, NotifyFlag
from order_history.models.order import Order
from order_history.schemas.order_status_history import PublicOrderStatusHistoryRead
from order_history.services.order_status_history import list_order_status_history

router = APIRouter()


def _order_for_customer_or_404(db: Session, context: ActorContext, orders_id: int) -> Order:
    order = db.get(Order, orders_id)
    if order is None or order.customers_id is None or order.customers_id != context.customer_id:
        raise HTTPException(status_code=404, detail="Order not found")
    return order


@router.get("/{orders_id}/status-history", response_model=list[PublicOrderStatusHistoryRead])
def get_status_history(
    orders_id: int,
    db: Session = Depends(get_db),
    context: ActorContext = Depends(get_customer_context),
):
    order = _order_for_customer_or_404(db, context, orders_id)
    rows = list_order_status_history(db, order.orders_id, context.language_id, customer_visible_only=True)
    return [
        PublicOrderStatusHistoryRead(
            orders_status_id=row["orders_status_id"],
            orders_status_name=row["orders_status_name"],
            date_added=row["date_added"],
            customer_notified=row["customer_notified"] == int(NotifyFlag.NOTIFIED),
            comments=row["comments"],
        )
        for row in rows
    ]

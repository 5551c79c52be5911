from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from order_history.core.deps import get_admin_context
from order_history.db.session import get_db
from order_history.domain import ActorContext
from order_history.models.order import Order
from order_history.repositories.order_status_history import SqlOrderStatusHistoryRepository
from order_history.schemas.order_status_history import (
    OrderStatusHistoryCreated,
    OrderStatusHistoryRead,
    OrderStatusHistoryUpdate,
)
from order_history.services.order_events import EventBus, build_default_event_bus
from order_history.services.order_status_history import (
    list_order_status_history,
    update_order_status_history,
)

router = APIRouter()

_event_bus: EventBus | None = None


def get_event_bus() -> EventBus:
    global _event_bus
    if _event_bus is None:
        _event_bus = build_default_event_bus()
    return _event_bus


@router.post("/{orders_id}/status-history", status_code=201, response_model=OrderStatusHistoryCreated)
def update_status_history(
    orders_id: int,
    payload: OrderStatusHistoryUpdate,
    db: Session = Depends(get_db),
    context: ActorContext = Depends(get_admin_context),
    events: EventBus = Depends(get_event_bus),
):
    history_id = update_order_status_history(
        SqlOrderStatusHistoryRepository(db),
        context,
        orders_id,
        payload.comment,
        orders_status_id=payload.orders_status_id,
        notify=payload.notify,
        updated_by=payload.updated_by,
        events=events,
    )
    if history_id is None:
        raise HTTPException(status_code=422, detail="Order status history was not updated")
    return OrderStatusHistoryCreated(orders_status_history_id=history_id)


@router.get("/{orders_id}/status-history", response_model=list[OrderStatusHistoryRead])
def get_status_history(
    orders_id: int,
    db: Session = Depends(get_db),
    context: ActorContext = Depends(get_admin_context),
):
    if db.get(Order, orders_id) is None:
        raise HTTPException(status_code=404, detail="Order not found")
    rows = list_order_status_history(db, orders_id, context.language_id)
    return [OrderStatusHistoryRead(**row) for row in rows]

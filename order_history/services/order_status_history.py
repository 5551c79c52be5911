from __future__ import annotations

import logging
from typing import Any

from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from order_history.core.config import settings
from order_history.domain import ActorContext, NotifyFlag, NO_STATUS_CHANGE, comment_or_none, parse_int
from order_history.models.common import utcnow
from order_history.models.order_status import OrderStatus
from order_history.models.order_status_history import OrderStatusHistory
from order_history.repositories.order_status_history import (
    NewHistoryEntry,
    OrderSnapshot,
    OrderStatusHistoryRepository,
)
from order_history.services.order_events import (
    EventBus,
    OrderStatusHistoryUpdated,
    OrderStatusUpdated,
)

logger = logging.getLogger(__name__)


class OrderStatusHistoryError(Exception):
    message = "Order status history was not updated."

    def log_args(self) -> tuple[Any, ...]:
        return ()


class OrderNotFound(OrderStatusHistoryError):
    message = "Order '%s' was not found in the database."

    def __init__(self, orders_id: int):
        super().__init__(orders_id)
        self.orders_id = orders_id

    def log_args(self) -> tuple[Any, ...]:
        return (self.orders_id,)


class StatusNotFound(OrderStatusHistoryError):
    message = "Order Status '%s' was not found in the database for language '%s'."

    def __init__(self, orders_status_id: int, language_id: int):
        super().__init__(orders_status_id, language_id)
        self.orders_status_id = orders_status_id
        self.language_id = language_id

    def log_args(self) -> tuple[Any, ...]:
        return (self.orders_status_id, self.language_id)


class OrderUpdateFailed(OrderStatusHistoryError):
    message = "Unable to update the status of order '%s' to '%s'."

    def __init__(self, orders_id: int, orders_status_id: int):
        super().__init__(orders_id, orders_status_id)
        self.orders_id = orders_id
        self.orders_status_id = orders_status_id

    def log_args(self) -> tuple[Any, ...]:
        return (self.orders_id, self.orders_status_id)


class HistoryWriteFailed(OrderStatusHistoryError):
    message = "Unable to update the order status history in the database. New Status: %s"

    def __init__(self, entry: NewHistoryEntry):
        super().__init__(entry)
        self.entry = entry

    def log_args(self) -> tuple[Any, ...]:
        return (self.entry,)


def resolve_updated_by(
    repo: OrderStatusHistoryRepository,
    context: ActorContext,
    updated_by: str | None = None,
) -> str:
    if updated_by is not None:
        return updated_by
    if context.is_admin:
        admin_name = repo.get_admin_name(context.admin_id)
        if admin_name is not None:
            return f"{admin_name} [{int(context.admin_id)}]"
        return settings.ORDER_STATUS_HISTORY_CUSTOMER
    if not context.is_customer:
        return settings.ORDER_STATUS_HISTORY_UNKNOWN_MODULE
    return settings.ORDER_STATUS_HISTORY_CUSTOMER


def _require_order(repo: OrderStatusHistoryRepository, orders_id: Any) -> OrderSnapshot:
    order_key = parse_int(orders_id)
    if order_key is None:
        raise OrderNotFound(orders_id)
    order = repo.get_order(order_key)
    if order is None:
        raise OrderNotFound(orders_id)
    return order


def _resolve_status(
    repo: OrderStatusHistoryRepository,
    context: ActorContext,
    order: OrderSnapshot,
    orders_status_id: Any,
) -> int:
    if orders_status_id is None:
        return order.orders_status
    status_key = parse_int(orders_status_id)
    if status_key is None:
        raise StatusNotFound(orders_status_id, context.language_id)
    if status_key == NO_STATUS_CHANGE:
        return order.orders_status
    if not repo.status_exists(status_key, context.language_id):
        raise StatusNotFound(status_key, context.language_id)
    return status_key


def _write_history(repo: OrderStatusHistoryRepository, entry: NewHistoryEntry) -> int:
    try:
        history_id = repo.insert_history(entry)
        repo.commit()
    except SQLAlchemyError as exc:
        repo.rollback()
        raise HistoryWriteFailed(entry) from exc
    if not history_id:
        raise HistoryWriteFailed(entry)
    return int(history_id)


def update_order_status_history(
    repo: OrderStatusHistoryRepository,
    context: ActorContext,
    orders_id: int,
    comment: str | None,
    orders_status_id: int | None = None,
    notify: int | NotifyFlag = NotifyFlag.HIDDEN,
    updated_by: str | None = None,
    *,
    events: EventBus | None = None,
) -> int | None:
    """Update the order's status and record it in the order status history.

    No history entry is written when the status is unchanged, the comment is
    empty and a history entry for that status already exists; the id of the
    most recent matching entry is returned instead.

    A changed order status is committed before the history entry is written
    and is kept even when the history write fails afterwards.

    Returns the id of the history entry, or ``None`` when the order or the
    localized status does not exist (including ids that are not integers),
    the order could not be updated or the entry could not be written. The
    cause is logged together with the current stack.
    """
    try:
        return _update_order_status_history(
            repo,
            context,
            orders_id,
            comment,
            orders_status_id=orders_status_id,
            notify=notify,
            updated_by=updated_by,
            events=events,
        )
    except OrderStatusHistoryError as exc:
        logger.error(exc.message, *exc.log_args(), stack_info=True)
        return None


def _update_order_status_history(
    repo: OrderStatusHistoryRepository,
    context: ActorContext,
    orders_id: int,
    comment: str | None,
    *,
    orders_status_id: int | None,
    notify: int | NotifyFlag,
    updated_by: str | None,
    events: EventBus | None,
) -> int:
    order = _require_order(repo, orders_id)
    next_status = _resolve_status(repo, context, order, orders_status_id)
    comments = comment_or_none(comment)

    if next_status != order.orders_status:
        try:
            repo.update_order_status(order.orders_id, next_status, utcnow())
            repo.commit()
        except SQLAlchemyError as exc:
            repo.rollback()
            raise OrderUpdateFailed(order.orders_id, next_status) from exc
        updated_by = resolve_updated_by(repo, context, updated_by)
        if events is not None:
            events.notify(
                OrderStatusUpdated(
                    orders_id=order.orders_id,
                    prev_orders_status_id=order.orders_status,
                    next_orders_status_id=next_status,
                    updated_by=updated_by,
                )
            )
    elif comments is None:
        existing_id = repo.latest_history_id(order.orders_id, next_status)
        if existing_id is not None:
            return existing_id

    entry = NewHistoryEntry(
        orders_id=order.orders_id,
        orders_status_id=next_status,
        updated_by=resolve_updated_by(repo, context, updated_by),
        date_added=utcnow(),
        customer_notified=int(NotifyFlag.coerce(notify)),
        comments=comments,
    )
    history_id = _write_history(repo, entry)

    if events is not None:
        events.notify(
            OrderStatusHistoryUpdated(
                orders_status_history_id=history_id,
                orders_id=entry.orders_id,
                orders_status_id=entry.orders_status_id,
                updated_by=entry.updated_by,
                date_added=entry.date_added,
                customer_notified=entry.customer_notified,
                comments=entry.comments,
            )
        )
    return history_id


def list_order_status_history(
    db: Session,
    orders_id: int,
    language_id: int,
    *,
    customer_visible_only: bool = False,
) -> list[dict[str, Any]]:
    query = (
        select(OrderStatusHistory, OrderStatus.orders_status_name)
        .outerjoin(
            OrderStatus,
            (OrderStatus.orders_status_id == OrderStatusHistory.orders_status_id)
            & (OrderStatus.language_id == int(language_id)),
        )
        .where(OrderStatusHistory.orders_id == int(orders_id))
    )
    if customer_visible_only:
        query = query.where(OrderStatusHistory.customer_notified >= int(NotifyFlag.VISIBLE))
    query = query.order_by(
        OrderStatusHistory.date_added.asc(),
        OrderStatusHistory.orders_status_history_id.asc(),
    )
    out: list[dict[str, Any]] = []
    for row, status_name in db.execute(query).all():
        out.append(
            {
                "orders_status_history_id": row.orders_status_history_id,
                "orders_id": row.orders_id,
                "orders_status_id": row.orders_status_id,
                "orders_status_name": status_name,
                "updated_by": row.updated_by,
                "date_added": row.date_added,
                "customer_notified": row.customer_notified,
                "comments": row.comments,
            }
        )
    return out

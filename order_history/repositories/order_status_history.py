from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from sqlalchemy import select, update
from sqlalchemy.orm import Session

from order_history.models.admin import Admin
from order_history.models.order import Order
from order_history.models.order_status import OrderStatus
from order_history.models.order_status_history import OrderStatusHistory


@dataclass(frozen=True)
class OrderSnapshot:
    orders_id: int
    orders_status: int
    customers_id: int | None
    customers_name: str
    customers_email_address: str


@dataclass(frozen=True)
class NewHistoryEntry:
    orders_id: int
    orders_status_id: int
    updated_by: str
    date_added: datetime
    customer_notified: int
    comments: str | None


class OrderStatusHistoryRepository(Protocol):
    def get_order(self, orders_id: int) -> OrderSnapshot | None:
        ...

    def status_exists(self, orders_status_id: int, language_id: int) -> bool:
        ...

    def latest_history_id(self, orders_id: int, orders_status_id: int) -> int | None:
        ...

    def get_admin_name(self, admin_id: int) -> str | None:
        ...

    def update_order_status(self, orders_id: int, orders_status_id: int, last_modified: datetime) -> None:
        ...

    def insert_history(self, entry: NewHistoryEntry) -> int:
        ...

    def commit(self) -> None:
        ...

    def rollback(self) -> None:
        ...


class SqlOrderStatusHistoryRepository:
    def __init__(self, db: Session):
        self.db = db

    def get_order(self, orders_id: int) -> OrderSnapshot | None:
        row = self.db.execute(
            select(
                Order.orders_id,
                Order.orders_status,
                Order.customers_id,
                Order.customers_name,
                Order.customers_email_address,
            ).where(Order.orders_id == int(orders_id))
        ).first()
        if row is None:
            return None
        return OrderSnapshot(
            orders_id=int(row.orders_id),
            orders_status=int(row.orders_status),
            customers_id=row.customers_id,
            customers_name=row.customers_name or "",
            customers_email_address=row.customers_email_address or "",
        )

    def status_exists(self, orders_status_id: int, language_id: int) -> bool:
        found = self.db.execute(
            select(OrderStatus.orders_status_id).where(
                OrderStatus.language_id == int(language_id),
                OrderStatus.orders_status_id == int(orders_status_id),
            )
        ).first()
        return found is not None

    def latest_history_id(self, orders_id: int, orders_status_id: int) -> int | None:
        found = self.db.execute(
            select(OrderStatusHistory.orders_status_history_id)
            .where(
                OrderStatusHistory.orders_id == int(orders_id),
                OrderStatusHistory.orders_status_id == int(orders_status_id),
            )
            .order_by(
                OrderStatusHistory.date_added.desc(),
                OrderStatusHistory.orders_status_history_id.desc(),
            )
            .limit(1)
        ).scalar()
        return int(found) if found is not None else None

    def get_admin_name(self, admin_id: int) -> str | None:
        return self.db.execute(
            select(Admin.admin_name).where(Admin.admin_id == int(admin_id)).limit(1)
        ).scalar()

    def update_order_status(self, orders_id: int, orders_status_id: int, last_modified: datetime) -> None:
        self.db.execute(
            update(Order)
            .where(Order.orders_id == int(orders_id))
            .values(orders_status=int(orders_status_id), last_modified=last_modified)
        )

    def insert_history(self, entry: NewHistoryEntry) -> int:
        row = OrderStatusHistory(
            orders_id=entry.orders_id,
            orders_status_id=entry.orders_status_id,
            updated_by=entry.updated_by,
            date_added=entry.date_added,
            customer_notified=entry.customer_notified,
            comments=entry.comments,
        )
        self.db.add(row)
        self.db.flush()
        return int(row.orders_status_history_id or 0)

    def commit(self) -> None:
        self.db.commit()

    def rollback(self) -> None:
        self.db.rollback()

from datetime import datetime
from typing import Any, Optional

from pydantic import BaseModel, field_validator

from order_history.domain import NotifyFlag, status_id_or_none


class OrderStatusHistoryUpdate(BaseModel):
    comment: Optional[str] = None
    orders_status_id: Optional[int] = None
    notify: Any = int(NotifyFlag.HIDDEN)
    updated_by: Optional[str] = None

    @field_validator("orders_status_id")
    @classmethod
    def validate_status(cls, value: Optional[int]) -> Optional[int]:
        return status_id_or_none(value)

    @field_validator("notify")
    @classmethod
    def validate_notify(cls, value: Any) -> int:
        return int(NotifyFlag.coerce(value))

    @field_validator("updated_by")
    @classmethod
    def validate_updated_by(cls, value: Optional[str]) -> Optional[str]:
        text = str(value or "").strip()
        return text or None


class OrderStatusHistoryCreated(BaseModel):
    orders_status_history_id: int


class OrderStatusHistoryRead(BaseModel):
    orders_status_history_id: int
    orders_id: int
    orders_status_id: int
    orders_status_name: Optional[str] = None
    updated_by: Optional[str] = None
    date_added: Optional[datetime] = None
    customer_notified: int
    comments: Optional[str] = None


class PublicOrderStatusHistoryRead(BaseModel):
    orders_status_id: int
    orders_status_name: Optional[str] = None
    date_added: Optional[datetime] = None
    customer_notified: bool
    comments: Optional[str] = None

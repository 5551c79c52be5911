from datetime import datetime

from sqlalchemy import DateTime, Index, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column
from order_history.db.session import Base
from order_history.models.common import utcnow

class OrderStatusHistory(Base):
    __tablename__ = "orders_status_history"
    __table_args__ = (
        Index("idx_orders_status_history_lookup", "orders_id", "orders_status_id", "date_added"),
    )
    orders_status_history_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    orders_id: Mapped[int] = mapped_column(Integer, nullable=False, index=True)
    orders_status_id: Mapped[int] = mapped_column(Integer, nullable=False)
    updated_by: Mapped[str | None] = mapped_column(String(255), nullable=True)
    date_added: Mapped[datetime] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=False)
    customer_notified: Mapped[int] = mapped_column(Integer, nullable=False, default=-1)  # -1 hidden|0 visible|1 notified
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)

from datetime import datetime

from sqlalchemy import DateTime, Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from order_history.db.session import Base
from order_history.models.common import utcnow

class Order(Base):
    __tablename__ = "orders"
    orders_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    customers_id: Mapped[int | None] = mapped_column(Integer, nullable=True, index=True)
    customers_name: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    customers_email_address: Mapped[str] = mapped_column(String(255), nullable=False, default="")
    orders_status: Mapped[int] = mapped_column(Integer, nullable=False, default=1, index=True)
    date_purchased: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), default=utcnow, nullable=True)
    last_modified: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from order_history.db.session import Base

class OrderStatus(Base):
    """Localized status label; one row per (status, language)."""

    __tablename__ = "orders_status"
    orders_status_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False)
    language_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=False, default=1)
    orders_status_name: Mapped[str] = mapped_column(String(64), nullable=False)

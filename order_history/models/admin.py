from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column
from order_history.db.session import Base

class Admin(Base):
    __tablename__ = "admin"
    admin_id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    admin_name: Mapped[str] = mapped_column(String(32), nullable=False)

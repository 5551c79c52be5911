import os
import unittest
from datetime import datetime, timedelta, timezone

from fastapi.testclient import TestClient
from sqlalchemy import create_engine, delete
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

# Ensure settings can be initialized in test environments
os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

from order_history.api.admin.orders import get_event_bus
from order_history.core.config import settings
from order_history.core.security import create_admin_token, create_customer_token
from order_history.db.session import get_db
from order_history.main import app
from order_history.models.admin import Admin
from order_history.models.order import Order
from order_history.models.order_status import OrderStatus
from order_history.models.order_status_history import OrderStatusHistory
from order_history.services.order_events import EventBus, OrderEvent


class OrderHistoryApiBase(unittest.TestCase):
    @classmethod
    def setUpClass(cls):
        cls.engine = create_engine(
            "sqlite+pysqlite:///:memory:",
            connect_args={"check_same_thread": False},
            poolclass=StaticPool,
        )
        cls.SessionLocal = sessionmaker(bind=cls.engine, autocommit=False, autoflush=False)
        Admin.__table__.create(bind=cls.engine)
        Order.__table__.create(bind=cls.engine)
        OrderStatus.__table__.create(bind=cls.engine)
        OrderStatusHistory.__table__.create(bind=cls.engine)

    @classmethod
    def tearDownClass(cls):
        OrderStatusHistory.__table__.drop(bind=cls.engine)
        OrderStatus.__table__.drop(bind=cls.engine)
        Order.__table__.drop(bind=cls.engine)
        Admin.__table__.drop(bind=cls.engine)
        cls.engine.dispose()

    def setUp(self):
        with self.SessionLocal() as db:
            db.execute(delete(OrderStatusHistory))
            db.execute(delete(OrderStatus))
            db.execute(delete(Order))
            db.execute(delete(Admin))
            db.add_all(
                [
                    OrderStatus(orders_status_id=1, language_id=1, orders_status_name="Pending"),
                    OrderStatus(orders_status_id=2, language_id=1, orders_status_name="Processing"),
                    OrderStatus(orders_status_id=3, language_id=1, orders_status_name="Delivered"),
                    Order(
                        orders_id=42,
                        customers_id=7,
                        customers_name="Ada Lovelace",
                        customers_email_address="ada@example.com",
                        orders_status=1,
                    ),
                    Admin(admin_id=3, admin_name="Jane"),
                ]
            )
            db.commit()

        def override_get_db():
            db = self.SessionLocal()
            try:
                yield db
            finally:
                db.close()

        self.events = EventBus()
        self.emitted = []
        for event in OrderEvent:
            self.events.attach(event, self.emitted.append)

        app.dependency_overrides[get_db] = override_get_db
        app.dependency_overrides[get_event_bus] = lambda: self.events
        self.client = TestClient(app)

    def tearDown(self):
        self.client.close()
        app.dependency_overrides.clear()

    @staticmethod
    def _admin_headers(admin_id: int = 3, language_id: int | None = None) -> dict[str, str]:
        return {"Authorization": f"Bearer {create_admin_token(admin_id, language_id)}"}

    @staticmethod
    def _customer_cookies(customer_id: int = 7) -> dict[str, str]:
        return {settings.PUBLIC_COOKIE_NAME: create_customer_token(customer_id)}

    def _add_history(self, status_id: int, notify: int, comments: str | None, *, minutes_ago: int = 30) -> int:
        with self.SessionLocal() as db:
            row = OrderStatusHistory(
                orders_id=42,
                orders_status_id=status_id,
                updated_by="seed",
                date_added=datetime.now(timezone.utc) - timedelta(minutes=minutes_ago),
                customer_notified=notify,
                comments=comments,
            )
            db.add(row)
            db.commit()
            return row.orders_status_history_id

import os
import unittest

from sqlalchemy import create_engine, delete
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

os.environ.setdefault("DATABASE_URL", "sqlite+pysqlite:///:memory:")
os.environ.setdefault("REDIS_URL", "redis://localhost:6379/0")

from order_history.models.admin import Admin
from order_history.models.order import Order
from order_history.models.order_status import OrderStatus
from order_history.models.order_status_history import OrderStatusHistory
from order_history.workers.tasks import order_status as order_status_task


class OrderStatusTaskTests(unittest.TestCase):
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
        cls._old_session_local = order_status_task.SessionLocal
        order_status_task.SessionLocal = cls.SessionLocal

    @classmethod
    def tearDownClass(cls):
        order_status_task.SessionLocal = cls._old_session_local
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
            db.add_all(
                [
                    OrderStatus(orders_status_id=1, language_id=1, orders_status_name="Pending"),
                    OrderStatus(orders_status_id=2, language_id=1, orders_status_name="Processing"),
                    Order(orders_id=42, customers_id=7, customers_name="Ada", orders_status=1),
                ]
            )
            db.commit()

    def test_module_update_is_attributed_to_module(self):
        result = order_status_task.update_order_status(
            42,
            "Payment captured",
            orders_status_id=2,
            notify=0,
            updated_by="stripe_webhook",
        )
        self.assertTrue(result["ok"])

        with self.SessionLocal() as db:
            row = db.get(OrderStatusHistory, result["orders_status_history_id"])
            self.assertEqual(row.updated_by, "stripe_webhook")
            self.assertEqual(row.customer_notified, 0)
            self.assertEqual(db.get(Order, 42).orders_status, 2)

    def test_anonymous_module_gets_unknown_label(self):
        result = order_status_task.update_order_status(42, "Label printed")
        with self.SessionLocal() as db:
            row = db.get(OrderStatusHistory, result["orders_status_history_id"])
            self.assertEqual(row.updated_by, "--")

    def test_missing_order_reports_failure(self):
        result = order_status_task.update_order_status(999, "x", orders_status_id=2)
        self.assertEqual(result, {"ok": False, "orders_status_history_id": None})

from __future__ import annotations

from order_history.core.config import settings
from order_history.db.session import SessionLocal
from order_history.domain import ActorContext, NotifyFlag
from order_history.repositories.order_status_history import SqlOrderStatusHistoryRepository
from order_history.services.order_events import build_default_event_bus
from order_history.services.order_status_history import update_order_status_history
from order_history.workers.celery_app import celery_app


@celery_app.task(name="order_history.workers.tasks.order_status.update_order_status")
def update_order_status(
    orders_id: int,
    comment: str | None = None,
    orders_status_id: int | None = None,
    notify: int = int(NotifyFlag.HIDDEN),
    updated_by: str | None = None,
    language_id: int | None = None,
):
    """Record a status update on behalf of a payment or shipping module.

    Modules should pass their own name as ``updated_by``; without it the
    entry is attributed to an unknown module.
    """
    context = ActorContext.system(language_id if language_id is not None else settings.DEFAULT_LANGUAGE_ID)
    db = SessionLocal()
    try:
        history_id = update_order_status_history(
            SqlOrderStatusHistoryRepository(db),
            context,
            orders_id,
            comment,
            orders_status_id=orders_status_id,
            notify=notify,
            updated_by=updated_by,
            events=build_default_event_bus(),
        )
        return {"ok": history_id is not None, "orders_status_history_id": history_id}
    except Exception:
        db.rollback()
        raise
    finally:
        db.close()

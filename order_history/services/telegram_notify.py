from __future__ import annotations

import logging
from typing import Any

import httpx

from order_history.core.config import settings
from order_history.services.order_events import OrderStatusUpdated

logger = logging.getLogger(__name__)


def _telegram_enabled() -> bool:
    token = str(settings.TELEGRAM_BOT_TOKEN or "").strip()
    chat_id = str(settings.TELEGRAM_CHAT_ID or "").strip()
    if not token or token == "change_me":
        return False
    if not chat_id or chat_id == "0":
        return False
    return True


def send_telegram_message(text: str) -> dict[str, Any]:
    payload_text = str(text or "").strip()
    if not payload_text:
        return {"ok": False, "sent": False, "reason": "empty_text"}

    if not _telegram_enabled():
        # Dev-safe fallback: show delivery payload in logs.
        logger.info("[TELEGRAM MOCK] %s", payload_text)
        return {"ok": True, "sent": False, "mocked": True}

    token = str(settings.TELEGRAM_BOT_TOKEN).strip()
    chat_id = str(settings.TELEGRAM_CHAT_ID).strip()
    url = f"https://api.telegram.org/bot{token}/sendMessage"

    try:
        with httpx.Client(timeout=5.0) as client:
            response = client.post(
                url,
                json={
                    "chat_id": chat_id,
                    "text": payload_text,
                    "disable_web_page_preview": True,
                },
            )
        data = response.json() if response.content else {}
        if response.status_code >= 400 or not bool(data.get("ok")):
            logger.warning("[TELEGRAM ERROR] status=%s body=%s", response.status_code, data)
            return {"ok": False, "sent": False, "status_code": response.status_code, "response": data}
        return {"ok": True, "sent": True}
    except httpx.HTTPError as exc:
        logger.warning("[TELEGRAM ERROR] %s", exc)
        return {"ok": False, "sent": False, "error": str(exc)}


def status_update_text(payload: OrderStatusUpdated) -> str:
    actor = str(payload.updated_by or "").strip() or settings.ORDER_STATUS_HISTORY_UNKNOWN_MODULE
    return (
        f"Order #{payload.orders_id}\n"
        f"Status: {payload.prev_orders_status_id} -> {payload.next_orders_status_id}\n"
        f"Updated by: {actor}"
    )


class TelegramStatusObserver:
    """Posts order status changes to the shop's Telegram chat."""

    def __call__(self, payload: OrderStatusUpdated) -> dict[str, Any]:
        return send_telegram_message(status_update_text(payload))

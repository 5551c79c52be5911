from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Any

NO_STATUS_CHANGE = -1


def parse_int(value: Any) -> int | None:
    """Integer value of an id or flag, or None when it is not integral."""
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return int(value)
    if isinstance(value, float):
        return int(value) if value.is_integer() else None
    text = str(value).strip()
    try:
        return int(text)
    except ValueError:
        pass
    try:
        number = float(text)
    except ValueError:
        return None
    return int(number) if number.is_integer() else None


class NotifyFlag(IntEnum):
    """Visibility of a history entry to the customer."""

    HIDDEN = -1
    VISIBLE = 0
    NOTIFIED = 1

    @classmethod
    def coerce(cls, value: Any) -> "NotifyFlag":
        candidate = parse_int(value)
        if candidate is None:
            return cls.HIDDEN
        try:
            return cls(candidate)
        except ValueError:
            return cls.HIDDEN


@dataclass(frozen=True)
class ActorContext:
    """Who is calling and in which language, passed explicitly per call."""

    language_id: int
    admin_id: int | None = None
    customer_id: int | None = None

    @classmethod
    def system(cls, language_id: int) -> "ActorContext":
        return cls(language_id=language_id)

    @property
    def is_admin(self) -> bool:
        return self.admin_id is not None

    @property
    def is_customer(self) -> bool:
        return self.customer_id is not None


def status_id_or_none(value: Any) -> int | None:
    if value is None:
        return None
    status_id = parse_int(value)
    if status_id is None or status_id == NO_STATUS_CHANGE:
        return None
    return status_id


def comment_or_none(value: Any) -> str | None:
    if value is None:
        return None
    text = str(value)
    stripped = text.strip()
    # Storefront forms historically submit the literal "null" for no comment.
    if not stripped or stripped.lower() == "null":
        return None
    return text

from datetime import datetime, timedelta, timezone
from jose import jwt

from order_history.core.config import settings

ADMIN_TOKEN_TTL = timedelta(hours=4)
CUSTOMER_TOKEN_TTL = timedelta(days=7)


def create_jwt(payload: dict, secret: str, expires_delta: timedelta) -> str:
    now = datetime.now(timezone.utc)
    data = payload.copy()
    data.update({"iat": int(now.timestamp()), "exp": int((now + expires_delta).timestamp())})
    return jwt.encode(data, secret, algorithm="HS256")


def decode_jwt(token: str, secret: str) -> dict:
    return jwt.decode(token, secret, algorithms=["HS256"])


def create_admin_token(admin_id: int, language_id: int | None = None) -> str:
    payload: dict = {"sub": str(int(admin_id)), "kind": "admin"}
    if language_id is not None:
        payload["language_id"] = int(language_id)
    return create_jwt(payload, settings.ADMIN_JWT_SECRET, ADMIN_TOKEN_TTL)


def create_customer_token(customer_id: int, language_id: int | None = None) -> str:
    payload: dict = {"sub": str(int(customer_id)), "kind": "customer"}
    if language_id is not None:
        payload["language_id"] = int(language_id)
    return create_jwt(payload, settings.PUBLIC_JWT_SECRET, CUSTOMER_TOKEN_TTL)

from fastapi import Depends, Cookie, HTTPException
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import JWTError

from order_history.core.config import settings
from order_history.core.security import decode_jwt
from order_history.domain import ActorContext

bearer = HTTPBearer(auto_error=False)


def _int_claim(claims: dict, key: str) -> int | None:
    raw = claims.get(key)
    if raw is None or str(raw).strip() == "":
        return None
    try:
        return int(raw)
    except (TypeError, ValueError):
        return None


def _language_id(claims: dict) -> int:
    language_id = _int_claim(claims, "language_id")
    return language_id if language_id is not None else settings.DEFAULT_LANGUAGE_ID


def get_admin_context(creds: HTTPAuthorizationCredentials = Depends(bearer)) -> ActorContext:
    if not creds:
        raise HTTPException(status_code=401, detail="Missing authorization token")
    try:
        claims = decode_jwt(creds.credentials, settings.ADMIN_JWT_SECRET)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid token")
    admin_id = _int_claim(claims, "sub")
    if admin_id is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return ActorContext(language_id=_language_id(claims), admin_id=admin_id)


def get_customer_context(
    session_token: str | None = Cookie(default=None, alias=settings.PUBLIC_COOKIE_NAME),
) -> ActorContext:
    if not session_token:
        raise HTTPException(status_code=401, detail="Missing customer session")
    try:
        claims = decode_jwt(session_token, settings.PUBLIC_JWT_SECRET)
    except JWTError:
        raise HTTPException(status_code=401, detail="Invalid customer session")
    customer_id = _int_claim(claims, "sub")
    if customer_id is None:
        raise HTTPException(status_code=401, detail="Invalid customer session")
    return ActorContext(language_id=_language_id(claims), customer_id=customer_id)

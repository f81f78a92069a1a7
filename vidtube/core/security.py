import logging
import uuid
from datetime import datetime, timedelta, timezone
from fastapi import Depends, Request
from fastapi.security import HTTPBearer, HTTPAuthorizationCredentials
from jose import jwt, JWTError
from pydantic import BaseModel
from vidtube.core.config import settings
from vidtube.core.errors import ApiError, Failure

log = logging.getLogger(__name__)

http_bearer = HTTPBearer(auto_error=False)

class Principal(BaseModel):
    user_id: uuid.UUID
    username: str

def create_access_token(user_id: uuid.UUID, username: str, expires_minutes: int | None = None) -> str:
    expire = datetime.now(timezone.utc) + timedelta(minutes=expires_minutes or settings.ACCESS_TOKEN_EXPIRE_MINUTES)
    claims = {"sub": str(user_id), "username": username, "exp": expire}
    return jwt.encode(claims, settings.JWT_SECRET, algorithm=settings.JWT_ALG)

def _decode_token(token: str) -> dict:
    try:
        return jwt.decode(token, settings.JWT_SECRET, algorithms=[settings.JWT_ALG])
    except JWTError as e:
        log.info(f"Rejected access token: {e}")
        raise ApiError(Failure.unauthorized("Invalid access token"))

async def get_principal(
    request: Request,
    creds: HTTPAuthorizationCredentials | None = Depends(http_bearer),
) -> Principal:
    # cookie first (browser sessions), then bearer header (API clients)
    token = request.cookies.get(settings.ACCESS_TOKEN_COOKIE) or (creds.credentials if creds else None)
    if not token:
        raise ApiError(Failure.unauthorized())

    data = _decode_token(token)
    try:
        user_id = uuid.UUID(str(data.get("sub")))
    except ValueError:
        raise ApiError(Failure.unauthorized("Invalid access token"))
    return Principal(user_id=user_id, username=data.get("username", ""))

def authorize(record, principal: Principal) -> bool:
    """True when ``principal`` owns ``record``.

    Every owned resource exposes an ``owner_id`` column; mutating calls
    check this before touching the store.
    """
    owner_id = getattr(record, "owner_id", None)
    return owner_id is not None and owner_id == principal.user_id

"""Bearer tokens (HS256 JWT) and the FastAPI dependency that checks them."""

from __future__ import annotations

import base64
import hashlib
import hmac
import json
from datetime import datetime, timedelta, timezone
from typing import Any, Dict

import bcrypt
from fastapi import Depends, HTTPException, Request
from sqlalchemy.orm import Session

from fitlog.core.config import settings
from fitlog.core.db import get_db
from fitlog.models.user import User


class TokenExpired(ValueError):
    pass


def hash_password(password: str) -> str:
    return bcrypt.hashpw(password.encode("utf-8"), bcrypt.gensalt(rounds=12)).decode("ascii")


def verify_password(password: str, password_hash: str) -> bool:
    try:
        return bcrypt.checkpw(password.encode("utf-8"), password_hash.encode("ascii"))
    except ValueError:
        return False


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _b64url_encode(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).decode("ascii").rstrip("=")


def _b64url_decode(data: str) -> bytes:
    pad = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode((data + pad).encode("ascii"))


def _sign(signing_input: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), signing_input, hashlib.sha256).digest()


def encode_token(payload: Dict[str, Any], secret: str | None = None) -> str:
    secret = secret or settings.JWT_SECRET
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64url_encode(json.dumps(payload, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    return f"{header_b64}.{payload_b64}.{_b64url_encode(_sign(signing_input, secret))}"


def decode_token(token: str, secret: str | None = None) -> Dict[str, Any]:
    """
    Verify signature and expiry. Raises TokenExpired or ValueError.
    """
    secret = secret or settings.JWT_SECRET
    parts = token.split(".")
    if len(parts) != 3:
        raise ValueError("invalid token")

    header_b64, payload_b64, sig_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("ascii")
    if not hmac.compare_digest(_sign(signing_input, secret), _b64url_decode(sig_b64)):
        raise ValueError("bad signature")

    payload = json.loads(_b64url_decode(payload_b64).decode("utf-8"))
    if not isinstance(payload, dict):
        raise ValueError("bad payload")

    exp = int(payload.get("exp") or 0)
    if exp and exp < int(_utc_now().timestamp()):
        raise TokenExpired("token expired")
    return payload


def create_tokens(user_id: int) -> Dict[str, str]:
    now = _utc_now()
    iat = int(now.timestamp())
    access = {
        "userId": user_id,
        "iat": iat,
        "exp": int((now + timedelta(hours=settings.ACCESS_TOKEN_TTL_HOURS)).timestamp()),
    }
    refresh = {
        "userId": user_id,
        "type": "refresh",
        "iat": iat,
        "exp": int((now + timedelta(days=settings.REFRESH_TOKEN_TTL_DAYS)).timestamp()),
    }
    return {"accessToken": encode_token(access), "refreshToken": encode_token(refresh)}


def _bearer_token(request: Request) -> str:
    auth = request.headers.get("authorization") or ""
    if not auth.lower().startswith("bearer "):
        raise HTTPException(status_code=401, detail="No token provided")
    token = auth.split(" ", 1)[1].strip()
    if not token:
        raise HTTPException(status_code=401, detail="No token provided")
    return token


def get_current_user_id(request: Request, db: Session = Depends(get_db)) -> int:
    token = _bearer_token(request)
    try:
        payload = decode_token(token)
    except TokenExpired:
        raise HTTPException(status_code=401, detail="Token expired")
    except (ValueError, UnicodeDecodeError):
        raise HTTPException(status_code=401, detail="Invalid token")

    # Refresh tokens only mint new access tokens
    if payload.get("type") == "refresh":
        raise HTTPException(status_code=401, detail="Invalid token type")

    user_id = payload.get("userId")
    if not isinstance(user_id, int) or db.get(User, user_id) is None:
        raise HTTPException(status_code=401, detail="Invalid token")
    return user_id

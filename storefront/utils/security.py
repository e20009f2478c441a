# storefront/utils/security.py
import uuid
from datetime import datetime, timedelta, timezone

import jwt
from werkzeug.security import check_password_hash, generate_password_hash

from storefront.errors import Unauthorized


def hash_password(password: str) -> str:
    return generate_password_hash(password)


def verify_password(password_hash: str, password: str) -> bool:
    return check_password_hash(password_hash, password)


def generate_token(user_id: int, secret: str, expires_seconds: int) -> str:
    now = datetime.now(timezone.utc)
    payload = {
        "id": user_id,
        "iat": now,
        "exp": now + timedelta(seconds=expires_seconds),
        "jti": uuid.uuid4().hex,
    }
    return jwt.encode(payload, secret, algorithm="HS256")


def decode_token(token: str, secret: str) -> int:
    """Zwraca id usera z tokena albo rzuca Unauthorized."""
    try:
        payload = jwt.decode(token, secret, algorithms=["HS256"])
    except jwt.ExpiredSignatureError:
        raise Unauthorized("Not authorized, token expired")
    except jwt.InvalidTokenError:
        raise Unauthorized("Not authorized, token failed")

    user_id = payload.get("id")
    if not isinstance(user_id, int):
        raise Unauthorized("Not authorized, token failed")
    return user_id

from datetime import datetime, timedelta, timezone
from typing import Any, Dict, Optional
from jose import jwt
from jose.exceptions import JWTError
from fittrack.settings import get_settings

def create_access_token(
    sub: str,
    email: str,
    *,
    expires_minutes: Optional[int] = None,
) -> str:
    s = get_settings()
    now = datetime.now(timezone.utc)
    minutes = s.ACCESS_TOKEN_EXPIRE_MINUTES if expires_minutes is None else expires_minutes
    exp = now + timedelta(minutes=minutes)
    payload: Dict[str, Any] = {
        "sub": sub,
        "email": email,
        "iat": int(now.timestamp()),
        "exp": int(exp.timestamp()),
    }
    return jwt.encode(payload, s.JWT_SECRET, algorithm=s.ALGORITHM)

def decode_token(token: str) -> Dict[str, Any]:
    """
    Verify signature and expiration. Raise if token is expired/invalid.
    """
    s = get_settings()
    payload = jwt.decode(
        token,
        s.JWT_SECRET,
        algorithms=[s.ALGORITHM],
        options={
            "verify_signature": True,
            "verify_exp": True,
        },
    )
    if "exp" not in payload:
        raise JWTError("Missing exp")
    return payload

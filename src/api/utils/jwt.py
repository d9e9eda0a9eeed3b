from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Optional

from jose import ExpiredSignatureError, JWTError, jwt

from config import ApplicationConfig
from src.libs.result import Error, Result, Return


def generate_jwt(claims: Dict[str, Any], expires_delta: Optional[timedelta] = None) -> str:
    """
    Sign a claims bundle as a JWT access token

    Args:
        claims: Arbitrary JSON-serializable claims; opaque to the signer
        expires_delta: Token lifetime (default ACCESS_TOKEN_EXPIRE_HOURS)

    Returns:
        JWT token string
    """
    if expires_delta is None:
        expires_delta = timedelta(hours=ApplicationConfig.ACCESS_TOKEN_EXPIRE_HOURS)

    now = datetime.now(UTC)
    payload = dict(claims)
    payload["iat"] = now
    payload["exp"] = now + expires_delta
    return jwt.encode(
        payload, ApplicationConfig.JWT_SECRET, algorithm=ApplicationConfig.JWT_ALGORITHM
    )


def verify_jwt(token: str) -> Result[Dict[str, Any]]:
    """
    Verify signature and expiry of a JWT token

    Args:
        token: JWT token string

    Returns:
        Result with the decoded claims, or Error TOKEN_EXPIRED / INVALID_SIGNATURE
    """
    try:
        payload = jwt.decode(
            token,
            ApplicationConfig.JWT_SECRET,
            algorithms=[ApplicationConfig.JWT_ALGORITHM],
        )
    except ExpiredSignatureError:
        return Return.err(Error("TOKEN_EXPIRED", "Token has expired"))
    except JWTError:
        return Return.err(Error("INVALID_SIGNATURE", "Token signature is invalid"))
    return Return.ok(payload)

from datetime import timedelta

from jose import jwt

from config import ApplicationConfig
from src.api.utils.jwt import generate_jwt, verify_jwt


def test_claims_survive_signing():
    token = generate_jwt({"sub": "user-1", "session_id": "session-1", "role": "viewer"})

    result = verify_jwt(token)

    assert result.is_ok()
    assert result.value["sub"] == "user-1"
    assert result.value["session_id"] == "session-1"
    assert result.value["exp"] - result.value["iat"] == (
        ApplicationConfig.ACCESS_TOKEN_EXPIRE_HOURS * 3600
    )


def test_expired_token():
    token = generate_jwt({"sub": "user-1"}, expires_delta=timedelta(seconds=-10))

    result = verify_jwt(token)

    assert result.is_err()
    assert result.error.code == "TOKEN_EXPIRED"


def test_foreign_signature():
    token = jwt.encode({"sub": "user-1"}, "someone-elses-secret", algorithm="HS256")

    result = verify_jwt(token)

    assert result.is_err()
    assert result.error.code == "INVALID_SIGNATURE"


def test_garbage_token():
    assert verify_jwt("definitely.not.ajwt").error.code == "INVALID_SIGNATURE"

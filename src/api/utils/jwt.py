from typing import Any, Dict

from jose import ExpiredSignatureError, JWTError, jwt

from libs.result import Error, Result, Return

ALGORITHM = "HS256"


def encode_jwt(payload: Dict[str, Any], secret: str) -> str:
    """
    Sign a JWT payload

    Args:
        payload: Claims; datetime values for exp/iat are converted by jose
        secret: HMAC signing key

    Returns:
        JWT token string (HS256)
    """
    return jwt.encode(payload, secret, algorithm=ALGORITHM)


def decode_jwt(token: str, secret: str, issuer: str, audience: str) -> Result[Dict[str, Any]]:
    """
    Verify and decode JWT token

    Args:
        token: JWT token string
        secret: HMAC signing key
        issuer: Expected iss claim
        audience: Expected aud claim

    Returns:
        Decoded payload, or Error TOKEN_EXPIRED (valid signature, past exp)
        / TOKEN_INVALID (anything else)
    """
    try:
        payload = jwt.decode(
            token, secret, algorithms=[ALGORITHM], issuer=issuer, audience=audience
        )
    except ExpiredSignatureError:
        return Return.err(Error("TOKEN_EXPIRED", "Token has expired"))
    except JWTError:
        return Return.err(Error("TOKEN_INVALID", "Invalid token"))
    return Return.ok(payload)

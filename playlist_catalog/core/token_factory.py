"""Create and decode HS256 bearer tokens.

Tokens are minted by whatever handles sign-in (outside this service) or by
management scripts; the catalog only verifies them and reads the claims.
"""

import hashlib
import hmac
import base64
import json
import time
from dataclasses import dataclass
from datetime import datetime, timezone
from typing import Optional

TOKEN_ISSUER = "playlist-catalog"


@dataclass(frozen=True)
class TokenPayload:
    """Decoded token claims. ``sub`` is the username."""
    sub: str
    role: str
    exp: datetime


def create_token(
    subject: str,
    role: str,
    secret: str,
    algorithm: str = "HS256",
    expires_hours: int = 24,
) -> str:
    """Create a signed token for *subject* with the given role claim."""
    if algorithm != "HS256":
        raise ValueError(f"Unsupported algorithm: {algorithm}")

    now = time.time()
    payload = {
        "sub": subject,
        "role": role,
        "iat": int(now),
        "exp": int(now + expires_hours * 3600),
        "iss": TOKEN_ISSUER,
    }

    header = {"alg": "HS256", "typ": "JWT"}
    signing_input = b".".join([
        _b64encode(json.dumps(header).encode()),
        _b64encode(json.dumps(payload).encode()),
    ])
    signature = hmac.new(secret.encode(), signing_input, hashlib.sha256).digest()
    return (signing_input + b"." + _b64encode(signature)).decode()


def decode_token(token: str, secret: str, algorithm: str = "HS256") -> Optional[TokenPayload]:
    """Verify signature, expiry and issuer.

    Returns ``None`` on any failure rather than raising; the auth
    dependency decides what absence means.
    """
    if algorithm != "HS256":
        return None
    try:
        parts = token.encode().split(b".")
        if len(parts) != 3:
            return None

        signing_input = parts[0] + b"." + parts[1]
        expected_sig = hmac.new(secret.encode(), signing_input, hashlib.sha256).digest()
        if not hmac.compare_digest(expected_sig, _b64decode(parts[2])):
            return None

        claims = json.loads(_b64decode(parts[1]))
        if claims.get("iss") != TOKEN_ISSUER:
            return None

        exp = claims.get("exp", 0)
        if time.time() > exp:
            return None

        return TokenPayload(
            sub=claims.get("sub", ""),
            role=claims.get("role", ""),
            exp=datetime.fromtimestamp(exp, tz=timezone.utc),
        )
    except (json.JSONDecodeError, KeyError, ValueError, TypeError):
        return None


def _b64encode(data: bytes) -> bytes:
    return base64.urlsafe_b64encode(data).rstrip(b"=")


def _b64decode(data: bytes) -> bytes:
    return base64.urlsafe_b64decode(data + b"=" * (-len(data) % 4))

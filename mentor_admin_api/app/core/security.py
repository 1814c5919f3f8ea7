"""
Bearer token authentication and role checks.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC‑SHA256 signatures and base64url encoding.  Tokens embed
arbitrary claims and an expiration timestamp (``exp``).  A secret key
from the application settings is used to sign and verify the token.

``get_current_user`` resolves the caller once per request and returns
an explicit user context (a dict with ``user_id``, ``email``,
``role_id`` and ``is_admin``) that endpoints receive as a parameter.
``require_roles`` builds dependencies that reject callers without one
of the given roles before the endpoint body runs.
"""

import base64
import hashlib
import hmac
import json
import time
from typing import Any, Callable, Dict, Optional

from fastapi import Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings
from .db import ROLE_ADMIN, get_connection
from .exceptions import UnauthorizedError


NOT_AUTHORIZED_MESSAGE = "You are not authorized to access this resource."


def _b64_url_encode(data: bytes) -> str:
    """Base64‑url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64‑url encoded string, adding padding if necessary."""
    padding = '=' * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with an ``exp`` field representing the
    expiration time as a UNIX timestamp.  Clients must include the
    token in the ``Authorization`` header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. {"sub": "admin@example.com"}).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.

    Returns
    -------
    str
        A signed JWT token.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(',', ':')).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(',', ':')).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Returns the payload dictionary if the signature matches and the
    token has not expired, otherwise ``None``.
    """
    parts = token.split('.')
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    expected_sig = _sign(signing_input, settings.secret_key)
    try:
        actual_sig = _b64_url_decode(signature_b64)
        if not hmac.compare_digest(expected_sig, actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
        if not isinstance(data, dict) or data.get("exp") is None:
            return None
        if int(data["exp"]) < int(time.time()):
            return None
    except (TypeError, ValueError):
        return None
    return data


security = HTTPBearer(auto_error=False)


def get_current_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Dict[str, Any]:
    """Dependency that resolves the authenticated caller.

    The token subject (``sub``) is the user's email.  Missing, invalid
    or expired tokens and subjects that no longer exist are rejected
    with 401.
    """
    if credentials is None:
        raise UnauthorizedError(NOT_AUTHORIZED_MESSAGE)
    payload = decode_access_token(credentials.credentials)
    if not payload:
        raise UnauthorizedError(NOT_AUTHORIZED_MESSAGE)

    conn = get_connection()
    try:
        row = conn.execute(
            "SELECT id, email, role_id FROM users WHERE email = ?",
            (payload.get("sub"),),
        ).fetchone()
    finally:
        conn.close()
    if not row:
        raise UnauthorizedError(NOT_AUTHORIZED_MESSAGE)
    return {
        "user_id": row["id"],
        "email": row["email"],
        "role_id": row["role_id"],
        "is_admin": row["role_id"] == ROLE_ADMIN,
    }


def require_roles(
    *role_ids: int, message: str = NOT_AUTHORIZED_MESSAGE
) -> Callable[..., Dict[str, Any]]:
    """Dependency factory enforcing that the caller has one of ``role_ids``.

    Use in endpoints via ``Depends(require_roles(ROLE_ADMIN))``.  Callers
    without a matching role get 401 with ``message``.
    """

    def _role_dependency(current_user: Dict[str, Any] = Depends(get_current_user)) -> Dict[str, Any]:
        if current_user.get("role_id") not in role_ids:
            raise UnauthorizedError(message)
        return current_user

    return _role_dependency


require_admin = require_roles(ROLE_ADMIN)

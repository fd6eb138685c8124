"""
Security helpers for password hashing and bearer-token authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC-SHA256 signatures and base64url encoding.  Tokens embed
the user's identifier (``sub``) and profile claims together with an
expiration timestamp (``exp``).  The secret key from the application
settings is used to sign and verify tokens.  Passwords are hashed
with PBKDF2-HMAC-SHA256 and a per-password random salt.

Two FastAPI dependencies implement access control:

* ``get_current_user`` requires a valid credential and raises 401
  otherwise.
* ``get_optional_user`` attaches the caller's identity when a valid
  credential is present and silently proceeds anonymously otherwise.
"""

import base64
import hashlib
import hmac
import json
import logging
import os
import time
from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Optional

from fastapi import Depends, HTTPException, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from .config import settings

logger = logging.getLogger(__name__)

PBKDF2_ITERATIONS = 100_000


def _b64_url_encode(data: bytes) -> str:
    """Base64-url encode bytes without padding."""
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("utf-8")


def _b64_url_decode(data: str) -> bytes:
    """Decode base64-url encoded string, adding padding if necessary."""
    padding = "=" * (-len(data) % 4)
    return base64.urlsafe_b64decode(data + padding)


def _sign(message: bytes, secret: str) -> bytes:
    return hmac.new(secret.encode("utf-8"), message, hashlib.sha256).digest()


def create_access_token(data: Dict[str, Any], expires_delta: Optional[int] = None) -> str:
    """Create a signed JWT with the given claims.

    The payload is extended with an ``exp`` field holding the
    expiration time as a UNIX timestamp.  Clients send the token back
    in the ``Authorization`` header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed (e.g. ``{"sub": "<userId>", "role": "admin"}``).
    expires_delta : Optional[int]
        Lifetime of the token in seconds.  Defaults to
        ``settings.access_token_expire_minutes * 60``.
    """
    to_encode = data.copy()
    exp_seconds = expires_delta or settings.access_token_expire_minutes * 60
    to_encode["exp"] = int(time.time()) + exp_seconds
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, settings.secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT.

    Checks the HMAC signature, the ``exp`` field and the presence of a
    subject.  Returns the payload dictionary if the token is valid,
    otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        payload_json = _b64_url_decode(payload_b64)
    except ValueError:
        return None
    # Constant-time comparison to prevent timing attacks
    if not hmac.compare_digest(_sign(signing_input, settings.secret_key), actual_sig):
        return None
    try:
        data = json.loads(payload_json.decode("utf-8"))
    except (UnicodeDecodeError, ValueError):
        return None
    if not isinstance(data, dict) or not data.get("sub"):
        return None
    try:
        if int(data["exp"]) < int(time.time()):
            return None
    except (KeyError, TypeError, ValueError):
        return None
    return data


@dataclass
class CurrentUser:
    """Verified identity attached to a request."""

    user_id: str
    claims: Dict[str, Any] = field(default_factory=dict)

    @property
    def role(self) -> Optional[str]:
        return self.claims.get("role")


def verify_token(token: str) -> Optional[CurrentUser]:
    """Resolve a bearer token into a ``CurrentUser`` or ``None``."""
    payload = decode_access_token(token)
    if not payload:
        return None
    return CurrentUser(user_id=str(payload["sub"]), claims=payload)


security = HTTPBearer(auto_error=False)


def get_current_user(credentials: Optional[HTTPAuthorizationCredentials] = Depends(security)) -> CurrentUser:
    """Dependency that requires an authenticated caller.

    Raises HTTP 401 when the ``Authorization`` header is missing, is
    not a bearer credential, or carries an invalid/expired token.
    """
    if credentials is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: No token provided",
            headers={"WWW-Authenticate": "Bearer"},
        )
    user = verify_token(credentials.credentials)
    if user is None:
        logger.warning("Token verification failed")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Unauthorized: Invalid token",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user


def get_optional_user(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(security),
) -> Optional[CurrentUser]:
    """Dependency that attaches the caller's identity if one is presented."""
    if credentials is None:
        return None
    return verify_token(credentials.credentials)


# ---------------------------------------------------------------------------
# Role-based access control (RBAC) helpers
# ---------------------------------------------------------------------------

def require_roles(*roles: str) -> Callable[[CurrentUser], CurrentUser]:
    """Dependency factory enforcing that the caller holds one of ``roles``.

    Use via ``Depends(require_roles("admin"))``.  Raises 403 when the
    caller's ``role`` claim is not among the allowed ones.
    """

    def _role_dependency(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
        if current_user.role not in roles:
            raise HTTPException(
                status_code=status.HTTP_403_FORBIDDEN,
                detail="Insufficient permissions",
            )
        return current_user

    return _role_dependency


def get_event_writer(current_user: CurrentUser = Depends(get_current_user)) -> CurrentUser:
    """Dependency guarding event create/update/delete.

    Any authenticated caller is accepted unless
    ``settings.event_writes_admin_only`` is enabled, in which case the
    ``admin`` role is required.
    """
    if settings.event_writes_admin_only:
        return require_roles("admin")(current_user)
    return current_user


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    Returns the hex salt and hex digest joined by ``$``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored ``salt$hash`` string."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except ValueError:
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)

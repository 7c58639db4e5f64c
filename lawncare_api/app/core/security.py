"""
Security helpers for password hashing and token authentication.

This module implements a lightweight JSON Web Token (JWT) mechanism
using HMAC-SHA256 signatures and base64url encoding.  Tokens carry the
user id (``sub``), a unique token id (``jti``) and an expiration
timestamp (``exp``).  Logging out adds the ``jti`` to a
``TokenBlocklist`` so the token stops working before it expires.

Passwords are hashed with PBKDF2-HMAC-SHA256 and a random salt; they
are never stored or compared in clear text.

The FastAPI dependencies that verify tokens live in ``api.deps``.
"""

import base64
import hashlib
import hmac
import json
import os
import secrets
import threading
import time
from typing import Any, Dict, Optional


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


def create_access_token(data: Dict[str, Any], secret_key: str, expires_delta: int) -> str:
    """Create a signed JWT token with the given payload.

    The payload is extended with ``exp`` (UNIX timestamp) and, unless
    already present, a random ``jti``.  Clients send the token in the
    ``Authorization`` header as ``Bearer <token>``.

    Parameters
    ----------
    data : dict
        Claims to embed in the token (e.g. ``{"sub": "1"}``).
    secret_key : str
        Key used for the HMAC signature.
    expires_delta : int
        Lifetime of the token in seconds.

    Returns
    -------
    str
        A token of the form ``header.payload.signature``.
    """
    to_encode = data.copy()
    to_encode["exp"] = int(time.time()) + expires_delta
    to_encode.setdefault("jti", secrets.token_hex(16))
    header = {"alg": "HS256", "typ": "JWT"}
    header_b64 = _b64_url_encode(json.dumps(header, separators=(",", ":")).encode("utf-8"))
    payload_b64 = _b64_url_encode(json.dumps(to_encode, separators=(",", ":")).encode("utf-8"))
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    signature_b64 = _b64_url_encode(_sign(signing_input, secret_key))
    return f"{header_b64}.{payload_b64}.{signature_b64}"


def decode_access_token(token: str, secret_key: str) -> Optional[Dict[str, Any]]:
    """Verify and decode a JWT token.

    Returns the payload if the signature is valid and the token has not
    expired, otherwise ``None``.
    """
    parts = token.split(".")
    if len(parts) != 3:
        return None
    header_b64, payload_b64, signature_b64 = parts
    signing_input = f"{header_b64}.{payload_b64}".encode("utf-8")
    try:
        actual_sig = _b64_url_decode(signature_b64)
        # Constant-time comparison to prevent timing attacks
        if not hmac.compare_digest(_sign(signing_input, secret_key), actual_sig):
            return None
        data = json.loads(_b64_url_decode(payload_b64).decode("utf-8"))
    except (ValueError, TypeError):
        return None
    if not isinstance(data, dict):
        return None
    if data.get("exp") is None or int(data["exp"]) < int(time.time()):
        return None
    return data


class TokenBlocklist:
    """Revoked token ids, kept until the token would have expired anyway."""

    def __init__(self) -> None:
        self._revoked: Dict[str, int] = {}
        self._lock = threading.Lock()

    def revoke(self, jti: str, expires_at: int) -> None:
        now = int(time.time())
        with self._lock:
            self._purge(now)
            self._revoked[jti] = expires_at

    def is_revoked(self, jti: Optional[str]) -> bool:
        if not jti:
            return False
        with self._lock:
            return jti in self._revoked

    def _purge(self, now: int) -> None:
        expired = [jti for jti, exp in self._revoked.items() if exp < now]
        for jti in expired:
            del self._revoked[jti]

    def __len__(self) -> int:
        return len(self._revoked)


def hash_password(password: str) -> str:
    """Hash a password using PBKDF2-HMAC with SHA-256.

    A 16-byte random salt is generated for each password.  The result
    is ``salthex$hashhex``.
    """
    salt = os.urandom(16)
    dk = hashlib.pbkdf2_hmac("sha256", password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return f"{salt.hex()}${dk.hex()}"


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a plain password against a stored ``salthex$hashhex`` string."""
    try:
        salt_hex, hash_hex = hashed_password.split("$", 1)
        salt = bytes.fromhex(salt_hex)
        stored_hash = bytes.fromhex(hash_hex)
    except (AttributeError, ValueError):
        return False
    dk = hashlib.pbkdf2_hmac("sha256", plain_password.encode("utf-8"), salt, PBKDF2_ITERATIONS)
    return hmac.compare_digest(dk, stored_hash)

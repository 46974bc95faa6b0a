"""
Decides who gets in. A visitor is let through only when the email inside their
Google identity token is on the configured allow-list.
"""
from __future__ import annotations

import base64
import binascii
import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, Iterable, Optional

from google.auth.transport import requests as google_requests
from google.oauth2 import id_token
from itsdangerous import BadSignature, URLSafeTimedSerializer

from student_dashboard.backend.config import Settings

logger = logging.getLogger(__name__)

NOT_AUTHORIZED = "Sorry, your email is not authorized to access this dashboard."
BAD_CREDENTIAL = "Sign-in failed: the credential could not be read."


class CredentialError(Exception):
    pass


@dataclass(frozen=True)
class AuthResult:
    email: Optional[str] = None
    reason: Optional[str] = None

    @property
    def authorized(self) -> bool:
        return self.email is not None


def decode_credential(token: str) -> Dict[str, Any]:
    """Read the claims (middle segment) of a JWT without checking its signature."""
    parts = (token or "").split(".")
    if len(parts) != 3:
        raise CredentialError("Credential is not a signed token")
    payload = parts[1]
    payload += "=" * (-len(payload) % 4)
    try:
        claims = json.loads(base64.urlsafe_b64decode(payload).decode("utf-8"))
    except (binascii.Error, UnicodeDecodeError, ValueError) as e:
        raise CredentialError(f"Credential payload is unreadable: {e}") from e
    if not isinstance(claims, dict):
        raise CredentialError("Credential payload is not an object")
    return claims


def verify_credential(token: str, client_id: str) -> Dict[str, Any]:
    """Check signature, expiry and audience with Google's public keys."""
    try:
        return id_token.verify_oauth2_token(token, google_requests.Request(), client_id)
    except ValueError as e:
        raise CredentialError(f"Credential rejected by verifier: {e}") from e


def is_allowed(email: Optional[str], allowed_emails: Iterable[str]) -> bool:
    return bool(email) and email in set(allowed_emails)


def authorize(credential: str, settings: Settings) -> AuthResult:
    try:
        if settings.google_client_id and settings.verify_id_token:
            claims = verify_credential(credential, settings.google_client_id)
        else:
            claims = decode_credential(credential)
    except CredentialError as e:
        logger.info(f"Rejected sign-in: {e}")
        return AuthResult(reason=BAD_CREDENTIAL)

    email = claims.get("email")
    if not isinstance(email, str) or not is_allowed(email, settings.allowed_emails):
        logger.info(f"Rejected sign-in for {email!r}: not on the allow-list")
        return AuthResult(reason=NOT_AUTHORIZED)

    logger.info(f"Signed in {email}")
    return AuthResult(email=email)


def _serializer(settings: Settings) -> URLSafeTimedSerializer:
    return URLSafeTimedSerializer(settings.session_secret, salt="user-email")


def seal_session(email: str, settings: Settings) -> str:
    """The cookie value that remembers a signed-in email; signed with SESSION_SECRET."""
    return _serializer(settings).dumps(email)


def unseal_session(cookie_value: Optional[str], settings: Settings) -> Optional[str]:
    if not cookie_value:
        return None
    try:
        email = _serializer(settings).loads(cookie_value, max_age=settings.cookie_max_age)
    except BadSignature:
        # also covers SignatureExpired
        logger.info("Ignoring session cookie with a bad or expired signature")
        return None
    return email if isinstance(email, str) else None


def restore_session(cookie_value: Optional[str], settings: Settings) -> Optional[str]:
    """The page-load shortcut: a remembered email, signed by us and still on the allow-list."""
    email = unseal_session(cookie_value, settings)
    if is_allowed(email, settings.allowed_emails):
        return email
    return None

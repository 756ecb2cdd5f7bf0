"""
clarityweb/services/session_service.py

Purpose: Session credentials

Two separate checks with different cost and trust:
- has_session_cookie(): presence-only test used by the route gate, no crypto
- SessionStore.get_session(): verifies signature and expiry, loads identity;
  this is the trust boundary for the dashboard and the user API
"""

from datetime import datetime, timedelta, timezone
from typing import Mapping, Optional

import jwt
from fastapi import Request

from clarityweb.core.logging import get_logger
from clarityweb.schemas.session import Session, SessionUser
from clarityweb.utils.constants import SESSION_COOKIE_NAMES, SESSION_TOKEN_ALGORITHM

logger = get_logger(__name__)


def get_session_token(cookies: Mapping[str, str]) -> Optional[str]:
    """
    Returns the first non-empty session cookie value, plain name first.
    """
    for name in SESSION_COOKIE_NAMES:
        value = cookies.get(name)
        if value:
            return value
    return None


def has_session_cookie(cookies: Mapping[str, str]) -> bool:
    """
    Cheap credential check: a session cookie is present.

    A stale or forged cookie passes this test; callers that need a real
    identity must use SessionStore.get_session().
    """
    return get_session_token(cookies) is not None


class SessionStore:
    """
    Issues and verifies HS256-signed session tokens.
    """

    def __init__(self, secret: str, max_age_seconds: int):
        self._secret = secret
        self._max_age = timedelta(seconds=max_age_seconds)

    def issue_token(
        self,
        email: str,
        name: Optional[str] = None,
        now: Optional[datetime] = None,
    ) -> str:
        """
        Mints a session token for the given account.

        Args:
            email: Account email (identity key)
            name: Display name
            now: Issue time, defaults to the current UTC time

        Returns:
            Encoded token suitable for the session cookie
        """
        issued_at = now or datetime.now(timezone.utc)
        claims = {
            "sub": email,
            "email": email,
            "name": name,
            "iat": issued_at,
            "exp": issued_at + self._max_age,
        }
        return jwt.encode(claims, self._secret, algorithm=SESSION_TOKEN_ALGORITHM)

    def decode(self, token: str) -> Optional[Session]:
        try:
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[SESSION_TOKEN_ALGORITHM],
                options={"require": ["exp"]},
            )
        except jwt.InvalidTokenError as e:
            logger.debug(f"Rejected session token: {e}")
            return None

        return Session(
            user=SessionUser(
                email=payload.get("email") or payload.get("sub"),
                name=payload.get("name"),
            ),
            expires=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
        )

    async def get_session(self, request: Request) -> Optional[Session]:
        """
        Authoritative session check for the current request.

        Returns:
            The verified session, or None when the cookie is missing, malformed,
            wrongly signed or expired
        """
        token = get_session_token(request.cookies)
        if token is None:
            return None
        return self.decode(token)

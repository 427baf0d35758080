"""
Session Issuer

Stateless session credentials: an HS256-signed JWT carried in the
``auth_token`` cookie. Possession of a valid, unexpired token is the session;
nothing is stored server-side.
"""

from datetime import UTC, datetime, timedelta
from typing import List
from uuid import UUID

from jose import JWTError, jwt

from libs.result import Error, Result, Return
from src.domain.base import Clock, utc_now

SESSION_COOKIE_NAME = "auth_token"
SESSION_LIFETIME = timedelta(days=30)
SESSION_COOKIE_MAX_AGE = int(SESSION_LIFETIME.total_seconds())  # 2592000
JWT_ALGORITHM = "HS256"


def _timestamp(moment: datetime) -> int:
    return int(moment.replace(tzinfo=UTC).timestamp())


class SessionIssuer:
    """
    Mints and verifies signed session tokens.

    Business Rules:
    - Token carries sub (account id), iat and exp
    - Lifetime is 30 days from issuance
    - verify() never raises: any bad signature, malformed token or expiry
      yields an INVALID_SESSION error result, to be read as "anonymous"
    """

    def __init__(self, signing_secret: str, clock: Clock = utc_now):
        self._secret = signing_secret
        self._clock = clock

    def issue(self, account_id: UUID) -> str:
        now = self._clock()
        payload = {
            "sub": str(account_id),
            "iat": _timestamp(now),
            "exp": _timestamp(now + SESSION_LIFETIME),
        }
        return jwt.encode(payload, self._secret, algorithm=JWT_ALGORITHM)

    def verify(self, token: str) -> Result[UUID]:
        invalid = Return.err(Error("INVALID_SESSION", "Invalid or expired session"))
        if not token:
            return invalid

        try:
            # Expiry is checked against the injected clock below
            payload = jwt.decode(
                token,
                self._secret,
                algorithms=[JWT_ALGORITHM],
                options={"verify_exp": False},
            )
        except JWTError:
            return invalid

        exp = payload.get("exp")
        if not isinstance(exp, int) or _timestamp(self._clock()) >= exp:
            return invalid

        try:
            account_id = UUID(str(payload.get("sub")))
        except ValueError:
            return invalid

        return Return.ok(account_id)


def _cookie_attributes(cookie_domain: str, is_production: bool) -> List[str]:
    if is_production:
        return [f"Domain={cookie_domain}", "SameSite=Lax", "Secure"]
    # Host-only cookie for a split-origin dev setup; browsers accept Secure on loopback
    return ["SameSite=None", "Secure"]


def render_session_cookie(token: str, cookie_domain: str, is_production: bool) -> str:
    """Set-Cookie value that stores the session token"""
    attributes = [
        f"{SESSION_COOKIE_NAME}={token}",
        f"Max-Age={SESSION_COOKIE_MAX_AGE}",
        "Path=/",
        "HttpOnly",
    ]
    attributes.extend(_cookie_attributes(cookie_domain, is_production))
    return "; ".join(attributes)


def render_cleared_session_cookie(cookie_domain: str, is_production: bool) -> str:
    """Set-Cookie value that clears the same cookie render_session_cookie set"""
    attributes = [
        f"{SESSION_COOKIE_NAME}=",
        "Max-Age=0",
        "Path=/",
        "HttpOnly",
    ]
    attributes.extend(_cookie_attributes(cookie_domain, is_production))
    return "; ".join(attributes)

import logging
import time
from typing import Optional

import httpx
from jose import JWTError, jwt

from backoffice import config
from backoffice.errors import BackofficeError

logger = logging.getLogger(__name__)


class SignInError(BackofficeError):
    pass


def read_claims(token: str) -> dict:
    """Claims of a JWT without verifying it; opaque tokens give {}."""
    try:
        return jwt.get_unverified_claims(token)
    except JWTError:
        return {}


def is_expired(token: str, now: float = None) -> bool:
    exp = read_claims(token).get("exp")
    if exp is None:
        return False
    return (now if now is not None else time.time()) >= float(exp)


class AuthSession:
    """
    Session handed out by the identity provider.

    The rest of the app only asks ``get_token()``: a bearer token, or None
    when signed out or expired.
    """

    def __init__(self, token: Optional[str] = None, auth_url: Optional[str] = None,
                 http: Optional[httpx.Client] = None):
        self.token = token
        self.auth_url = config.AUTH_URL if auth_url is None else auth_url
        self._http = http

    @property
    def signed_in(self) -> bool:
        return self.get_token() is not None

    @property
    def claims(self) -> dict:
        return read_claims(self.token) if self.token else {}

    def get_token(self) -> Optional[str]:
        if not self.token:
            return None
        if is_expired(self.token):
            logger.info("Session token expired")
            return None
        return self.token

    def sign_in(self, email: str, password: str) -> str:
        url = f"{self.auth_url.rstrip('/')}/login"
        payload = {"email": email, "password": password}
        headers = {"Content-Type": "application/json"}
        if config.AUTH_PUBLISHABLE_KEY:
            headers["X-Publishable-Key"] = config.AUTH_PUBLISHABLE_KEY
        if self._http is not None:
            res = self._http.post(url, json=payload, headers=headers)
        else:
            res = httpx.post(url, json=payload, headers=headers, timeout=config.HTTP_TIMEOUT)
        if res.status_code != 200:
            raise SignInError(res.text)
        self.token = res.json()["access_token"]
        logger.info("Signed in as %s", self.claims.get("sub", email))
        return self.token

    def sign_out(self):
        self.token = None

"""token_service.py
Issues and verifies short-lived bearer tokens.
"""
import datetime as dt
import os
from typing import Any, Dict, Optional

import jwt
from dotenv import load_dotenv

from resume_builder.config import BUILDER_DEFAULTS
from resume_builder.exceptions import AuthConfigError, InvalidTokenError, MissingTokenError

load_dotenv()


class TokenService:
    """
    Signs and checks JWT bearer tokens.

    Token payloads carry the user id (`sub`), the user's email, and
    issuance/expiry timestamps (`iat`/`exp`).

    Args:
        secret (Optional[str]): Signing secret. Falls back to the `JWT_SECRET`
            environment variable.
        algorithm (str): JWT signing algorithm.
        lifetime_minutes (int): How long an issued token stays valid.

    Raises:
        AuthConfigError: If no secret is provided or found in the environment.
    """

    def __init__(
        self,
        secret: Optional[str] = None,
        algorithm: str = BUILDER_DEFAULTS.JWT_ALGORITHM,
        lifetime_minutes: int = BUILDER_DEFAULTS.TOKEN_LIFETIME_MINUTES,
    ):
        secret = secret or os.getenv("JWT_SECRET")
        if not secret or secret == "<REPLACE_ME>":
            raise AuthConfigError("JWT_SECRET")
        self.secret = secret
        self.algorithm = algorithm
        self.lifetime = dt.timedelta(minutes=lifetime_minutes)

    def issue(self, user_id: int | str, email: str, now: Optional[dt.datetime] = None) -> str:
        """Return a signed token for the given user."""
        issued_at = now or dt.datetime.now(dt.timezone.utc)
        payload = {
            "sub": str(user_id),
            "email": email,
            "iat": issued_at,
            "exp": issued_at + self.lifetime,
        }
        return jwt.encode(payload, self.secret, algorithm=self.algorithm)

    def verify(self, token: Optional[str]) -> Dict[str, Any]:
        """
        Decode and validate a token.

        Returns:
            Dict[str, Any]: The token payload.

        Raises:
            MissingTokenError: If `token` is None or blank.
            InvalidTokenError: If the token is malformed, badly signed or expired.
        """
        if token is None or not token.strip():
            raise MissingTokenError()
        try:
            return jwt.decode(
                token,
                self.secret,
                algorithms=[self.algorithm],
                options={"require": ["sub", "iat", "exp"]},
            )
        except jwt.ExpiredSignatureError:
            raise InvalidTokenError("token expired")
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(str(e))

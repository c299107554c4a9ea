"""
Bearer token issuance and validation with PyJWT.

Access and refresh tokens are both JWTs signed with the configured secret.
They are told apart by the ``typ`` claim; refresh tokens also carry the
user's security stamp so that rotating the stamp revokes them.
"""
from datetime import UTC, datetime, timedelta
from typing import Any, Dict, Optional

import jwt
from pydantic import BaseModel

from todoboard.config import Settings, get_settings
from todoboard.exceptions import AuthenticationError
from todoboard.models import User

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"


class TokenData(BaseModel):
    sub: str
    typ: str
    iat: int
    exp: int
    stamp: Optional[str] = None


class TokenService:
    """Creates and decodes the service's bearer tokens."""

    def __init__(self, settings: Optional[Settings] = None):
        self.settings = settings or get_settings()

    def _encode(self, payload: Dict[str, Any]) -> str:
        return jwt.encode(payload, self.settings.jwt_secret, algorithm=self.settings.jwt_algorithm)

    def _payload(self, user: User, token_type: str, lifetime: int) -> Dict[str, Any]:
        now = datetime.now(UTC)
        return {
            "sub": str(user.id),
            "typ": token_type,
            "iat": int(now.timestamp()),
            "exp": int((now + timedelta(seconds=lifetime)).timestamp()),
        }

    def create_access_token(self, user: User) -> str:
        payload = self._payload(user, ACCESS_TOKEN_TYPE, self.settings.access_token_expire_seconds)
        payload["name"] = user.user_name
        payload["roles"] = user.role_names
        return self._encode(payload)

    def create_refresh_token(self, user: User) -> str:
        payload = self._payload(user, REFRESH_TOKEN_TYPE, self.settings.refresh_token_expire_seconds)
        payload["stamp"] = user.security_stamp
        return self._encode(payload)

    def decode(self, token: str, expected_type: str) -> TokenData:
        """
        Decode and validate a token.

        Raises:
            AuthenticationError: If the token is expired, malformed, or of
                the wrong type.
        """
        try:
            payload = jwt.decode(
                token,
                self.settings.jwt_secret,
                algorithms=[self.settings.jwt_algorithm],
            )
        except jwt.ExpiredSignatureError as e:
            raise AuthenticationError("Token has expired", original_error=e)
        except jwt.InvalidTokenError as e:
            raise AuthenticationError("Invalid token", original_error=e)

        data = TokenData(**payload)
        if data.typ != expected_type:
            raise AuthenticationError("Invalid token")
        return data

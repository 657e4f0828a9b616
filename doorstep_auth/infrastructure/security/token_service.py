from __future__ import annotations

import base64
import hashlib
import hmac
import secrets
from datetime import datetime, timedelta
from uuid import uuid4

import jwt

from doorstep_auth.application.dto.auth import AccessTokenPayload
from doorstep_auth.application.ports.token_port import TokenPort
from doorstep_auth.domain.entities.user import User
from doorstep_auth.domain.exceptions import ConfigurationError, InvalidOrExpiredTokenError
from doorstep_auth.shared.config import JwtSettings


JWT_ALGORITHM = "HS256"
REFRESH_TOKEN_BYTES = 64


class JwtTokenService(TokenPort):
    def __init__(self, settings: JwtSettings):
        if not settings.secret:
            raise ConfigurationError("JWT_SECRET is required.")
        self._settings = settings

    def create_access_token(self, *, user: User, roles: list[str], now: datetime) -> tuple[str, datetime]:
        exp = now + timedelta(minutes=self._settings.access_ttl_minutes)
        payload = {
            "sub": user.id,
            "email": user.email,
            "name": user.display_name,
            "jti": str(uuid4()),
            "roles": list(roles),
            "type": "access",
            "iss": self._settings.issuer,
            "aud": self._settings.audience,
            "iat": int(now.timestamp()),
            "exp": int(exp.timestamp()),
        }
        token = jwt.encode(payload, self._settings.secret, algorithm=JWT_ALGORITHM)
        return token, exp

    def decode_access_token(self, *, token: str) -> AccessTokenPayload:
        try:
            payload = jwt.decode(
                token,
                self._settings.secret,
                algorithms=[JWT_ALGORITHM],
                audience=self._settings.audience,
                issuer=self._settings.issuer,
            )
        except jwt.PyJWTError as exc:
            raise InvalidOrExpiredTokenError("Invalid access token.") from exc

        if payload.get("type") != "access":
            raise InvalidOrExpiredTokenError("Invalid token type.")

        user_id = payload.get("sub")
        if not user_id or not isinstance(user_id, str):
            raise InvalidOrExpiredTokenError("Invalid token subject.")

        return AccessTokenPayload(
            user_id=user_id,
            email=payload.get("email", ""),
            name=payload.get("name", ""),
            roles=list(payload.get("roles", [])),
            token_id=payload.get("jti", ""),
        )

    def generate_refresh_token(self) -> str:
        return base64.b64encode(secrets.token_bytes(REFRESH_TOKEN_BYTES)).decode("ascii")

    def hash_token(self, *, token: str) -> str:
        return base64.b64encode(hashlib.sha256(token.encode("utf-8")).digest()).decode("ascii")

    def verify_token_hash(self, *, token: str, token_hash: str) -> bool:
        return hmac.compare_digest(self.hash_token(token=token), token_hash)

    def refresh_token_expires_at(self, *, now: datetime) -> datetime:
        return now + timedelta(days=self._settings.refresh_ttl_days)

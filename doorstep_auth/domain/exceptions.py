from __future__ import annotations

from enum import Enum


class AuthErrorKind(str, Enum):
    DUPLICATE_EMAIL = "duplicate_email"
    INVALID_CREDENTIALS = "invalid_credentials"
    ACCOUNT_INACTIVE = "account_inactive"
    INVALID_OR_EXPIRED_TOKEN = "invalid_or_expired_token"
    CONFIGURATION = "configuration"


class DomainError(Exception):
    """Base for domain errors."""

    kind: AuthErrorKind


class EmailAlreadyExistsError(DomainError):
    """E-mail is already bound to a non-deleted user."""

    kind = AuthErrorKind.DUPLICATE_EMAIL


class InvalidCredentialsError(DomainError):
    """Unknown e-mail or wrong password; the two cases are not distinguished."""

    kind = AuthErrorKind.INVALID_CREDENTIALS


class UserInactiveError(DomainError):
    """Credentials matched but the account is deactivated."""

    kind = AuthErrorKind.ACCOUNT_INACTIVE


class InvalidOrExpiredTokenError(DomainError):
    """Token is missing, expired, revoked, or belongs to an unusable account."""

    kind = AuthErrorKind.INVALID_OR_EXPIRED_TOKEN


class ConfigurationError(DomainError):
    """Required runtime configuration or reference data is missing."""

    kind = AuthErrorKind.CONFIGURATION

from __future__ import annotations

from passlib.context import CryptContext

from doorstep_auth.application.ports.password_hasher_port import PasswordHasherPort


SUPPORTED_SCHEMES = ("argon2", "bcrypt")
# argon2 time cost and bcrypt log2 rounds.
DEFAULT_ROUNDS = {"argon2": 3, "bcrypt": 12}


class PasswordHasher(PasswordHasherPort):
    def __init__(self, *, scheme: str = "argon2", rounds: int | None = None):
        if scheme not in SUPPORTED_SCHEMES:
            raise ValueError(f"Unsupported password hash scheme: {scheme}")
        costs = dict(DEFAULT_ROUNDS)
        if rounds is not None:
            costs[scheme] = rounds
        # Every supported scheme stays verifiable; only the primary one is used for new hashes.
        schemes = [scheme] + [name for name in SUPPORTED_SCHEMES if name != scheme]
        self._ctx = CryptContext(
            schemes=schemes,
            deprecated="auto",
            argon2__rounds=costs["argon2"],
            bcrypt__rounds=costs["bcrypt"],
        )

    def hash(self, plain_password: str) -> str:
        return self._ctx.hash(plain_password)

    def verify(self, plain_password: str, password_hash: str) -> bool:
        try:
            return self._ctx.verify(plain_password, password_hash)
        except Exception:
            return False

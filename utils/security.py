"""
security helpers:
- Argon2 password hashing via argon2-cffi
- SharedSecretPolicy: the allow/deny check guarding every delete endpoint
"""
from __future__ import annotations

import logging
from typing import Mapping, Optional

from argon2 import PasswordHasher
from argon2.exceptions import InvalidHashError, VerificationError, VerifyMismatchError

logger = logging.getLogger(__name__)

ph = PasswordHasher()


def hash_password(password: str) -> str:
    """Hash a plaintext password using Argon2
    """
    return ph.hash(password)


def verify_password(password: str, password_hash: str) -> bool:
    """ Verify a plaintext password using argon2
    """
    try:
        return ph.verify(password_hash, password)
    except VerifyMismatchError:
        return False


class SharedSecretPolicy:
    """
    One administrator password for the whole process, held only as an argon2
    hash. Handlers only ever call authorize(), so another object with the same
    method (per-user checks, for instance) can be installed in its place.
    """

    def __init__(self, password_hash: Optional[str]):
        self._password_hash = password_hash

    @classmethod
    def from_config(cls, config: Mapping) -> "SharedSecretPolicy":
        """
        Prefer ADMIN_PASSWORD_HASH; otherwise hash ADMIN_PASSWORD once at startup.
        With neither set, every credential is denied.
        """
        password_hash = config.get("ADMIN_PASSWORD_HASH")
        if not password_hash and config.get("ADMIN_PASSWORD"):
            password_hash = hash_password(config["ADMIN_PASSWORD"])
        if not password_hash:
            logger.warning("No admin password configured; delete operations are disabled")
        return cls(password_hash)

    def authorize(self, credential: Optional[str]) -> bool:
        if not self._password_hash or not credential:
            return False
        try:
            return verify_password(credential, self._password_hash)
        except (VerificationError, InvalidHashError):
            logger.error("Admin password hash could not be verified")
            return False

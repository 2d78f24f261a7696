"""Salted password hashing with memory-hard key derivation.

Hashes are encoded as ``<tag>$<base64 salt>$<base64 derived key>``. The tag
fixes both the KDF and its cost parameters, so a stored hash always carries
everything needed to verify it.
"""

import base64
import binascii
import hashlib
import hmac
import secrets
from abc import ABC, abstractmethod
from typing import Final

from argon2.low_level import Type, hash_secret_raw

from basicauth.errors import UnsupportedAlgorithmError, ValidationError

SALT_LENGTH: Final[int] = 16
KEY_LENGTH: Final[int] = 64
SEPARATOR: Final[str] = "$"


class KeyDerivation(ABC):
    tag: str

    @abstractmethod
    def derive(self, secret: bytes, salt: bytes, length: int) -> bytes: ...


class Argon2idDerivation(KeyDerivation):
    """Argon2id with OWASP minimum parameters (19 MiB, 2 passes, 1 lane)."""

    tag = "argon2id"
    time_cost = 2
    memory_cost = 19456  # KiB
    parallelism = 1

    def derive(self, secret: bytes, salt: bytes, length: int) -> bytes:
        return hash_secret_raw(
            secret=secret,
            salt=salt,
            time_cost=self.time_cost,
            memory_cost=self.memory_cost,
            parallelism=self.parallelism,
            hash_len=length,
            type=Type.ID,
        )


class ScryptDerivation(KeyDerivation):
    """scrypt with N=2^14, r=8, p=1; verifies hashes written by earlier deployments."""

    tag = "scrypt"
    n = 16384
    r = 8
    p = 1

    def derive(self, secret: bytes, salt: bytes, length: int) -> bytes:
        return hashlib.scrypt(secret, salt=salt, n=self.n, r=self.r, p=self.p, maxmem=64 * 1024 * 1024, dklen=length)


ALGORITHMS: Final[dict[str, KeyDerivation]] = {kdf.tag: kdf for kdf in (Argon2idDerivation(), ScryptDerivation())}


def _encode(plain: str) -> bytes | None:
    """UTF-8 bytes of `plain`, or None when it holds lone surrogates."""
    try:
        return plain.encode("utf-8")
    except UnicodeEncodeError:
        return None


class CredentialHasher:
    """Hashes new passwords with one algorithm and verifies against any known one."""

    def __init__(self, algorithm: str = Argon2idDerivation.tag) -> None:
        if algorithm not in ALGORITHMS:
            raise UnsupportedAlgorithmError(algorithm)
        self._kdf = ALGORITHMS[algorithm]

    def hash(self, plain: str) -> str:
        if not plain:
            raise ValidationError("Password cannot be empty")
        secret = _encode(plain)
        if secret is None:
            raise ValidationError("Password must be valid Unicode text")
        salt = secrets.token_bytes(SALT_LENGTH)
        key = self._kdf.derive(secret, salt, KEY_LENGTH)
        return SEPARATOR.join([self._kdf.tag, base64.b64encode(salt).decode(), base64.b64encode(key).decode()])

    def verify(self, plain: str, encoded: str) -> bool:
        """Check `plain` against an encoded hash in constant time.

        Raises UnsupportedAlgorithmError when the tag is unknown. A hash with a
        known tag but a broken body never verifies.
        """
        tag, _, body = encoded.partition(SEPARATOR)
        kdf = ALGORITHMS.get(tag)
        if kdf is None:
            raise UnsupportedAlgorithmError(tag)

        parts = body.split(SEPARATOR)
        if len(parts) != 2:
            return False
        try:
            salt = base64.b64decode(parts[0], validate=True)
            stored_key = base64.b64decode(parts[1], validate=True)
        except (binascii.Error, ValueError):  # ValueError: non-ASCII input
            return False
        # Argon2 rejects salts under 8 bytes and keys under 4; hash() never writes such values
        if len(salt) < 8 or len(stored_key) < 4:
            return False

        secret = _encode(plain)
        if secret is None:
            # hash() never accepts such input, so nothing stored can match it
            return False

        derived_key = kdf.derive(secret, salt, len(stored_key))
        return hmac.compare_digest(stored_key, derived_key)


_default_hasher = CredentialHasher()


def hash_password(plain: str) -> str:
    return _default_hasher.hash(plain)


def verify_password(plain: str, encoded: str) -> bool:
    return _default_hasher.verify(plain, encoded)

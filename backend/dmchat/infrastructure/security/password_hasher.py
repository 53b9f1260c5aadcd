"""
Scrypt password hashing.

Stored format: "scrypt$<n>$<r>$<p>$<salt b64>$<key b64>" so the work factor
can change without invalidating existing hashes.
"""

import base64
import os

from cryptography.exceptions import InvalidKey
from cryptography.hazmat.primitives.kdf.scrypt import Scrypt

from dmchat.domain.ports.credentials import PasswordHasher

SCHEME = "scrypt"


def _b64(data: bytes) -> str:
    return base64.urlsafe_b64encode(data).rstrip(b"=").decode("ascii")


def _unb64(text: str) -> bytes:
    return base64.urlsafe_b64decode(text + "=" * (-len(text) % 4))


class ScryptPasswordHasher(PasswordHasher):
    def __init__(self, n: int = 2**14, r: int = 8, p: int = 1, length: int = 32):
        self._n = n
        self._r = r
        self._p = p
        self._length = length

    def hash(self, password: str) -> str:
        salt = os.urandom(16)
        kdf = Scrypt(salt=salt, length=self._length, n=self._n, r=self._r, p=self._p)
        key = kdf.derive(password.encode("utf-8"))
        return f"{SCHEME}${self._n}${self._r}${self._p}${_b64(salt)}${_b64(key)}"

    def verify(self, password: str, password_hash: str) -> bool:
        try:
            scheme, n, r, p, salt, key = password_hash.split("$")
            if scheme != SCHEME:
                return False
            expected = _unb64(key)
            kdf = Scrypt(
                salt=_unb64(salt), length=len(expected), n=int(n), r=int(r), p=int(p)
            )
            kdf.verify(password.encode("utf-8"), expected)
            return True
        except (ValueError, InvalidKey):
            return False

"""
Password hashing for stored credentials.

Thin wrapper over :mod:`werkzeug.security`. The werkzeug method string carries
the algorithm and its work factor (``"scrypt"``, ``"pbkdf2:sha256:600000"``),
so tuning cost is a configuration change (``PASSWORD_HASH_METHOD``).
"""

from __future__ import annotations

from werkzeug.security import check_password_hash, generate_password_hash

#: Opaque salted hash string as produced by werkzeug (``method$salt$hash``).
HashedSecret = str

DEFAULT_METHOD = "scrypt"


class CredentialHasher:
    """
    Salted one-way hashing and verification of secrets.

    :param method: Werkzeug hash method, including its cost parameters.
    :type method: str
    """

    __slots__ = ("method",)

    def __init__(self, method: str = DEFAULT_METHOD) -> None:
        self.method = method

    def hash(self, secret: str) -> HashedSecret:
        """
        Produce a salted hash; two calls with the same secret differ.

        :raises TypeError: If ``secret`` is not a string.
        :raises ValueError: If the configured method is unknown.
        """
        if not isinstance(secret, str):
            raise TypeError("secret must be a string")
        return generate_password_hash(secret, method=self.method)

    def verify(self, secret: str | None, hashed: HashedSecret | None) -> bool:
        """
        Check ``secret`` against ``hashed``.

        Returns ``False`` instead of raising for malformed or empty hashes,
        unknown methods and non-string inputs. The digest comparison itself
        is constant-time (``hmac.compare_digest`` inside werkzeug).
        """
        if not isinstance(secret, str) or not isinstance(hashed, str) or not hashed:
            return False
        try:
            # check_password_hash is untyped; coerce for mypy
            return bool(check_password_hash(hashed, secret))
        except (ValueError, TypeError):
            return False

# sessiongate/infra/jwt/jwt_token_codec.py
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Any
from uuid import uuid4

import jwt

from sessiongate.services._shared.ports import (
    HMAC_ALGORITHMS,
    SigningFault,
    SignResult,
    TokenClaims,
    TokenCodec,
    TokenSettings,
    TokenState,
    VerifyResult,
)

log = logging.getLogger(__name__)

REQUIRED_CLAIMS = ["exp", "iat", "sub"]


@dataclass(slots=True)
class JWTTokenCodec(TokenCodec):
    """
    HMAC-signed JWT codec backed by PyJWT.

    The signing secret is fetched through ``settings.key_loader`` on every
    call, so a rotated or removed key is honoured by the next request.

    .. note::
       ``exp`` is stored in whole seconds (truncated). A token is valid while
       ``now < exp`` and expired from ``exp`` on, which makes a TTL of zero
       or less verify as expired.
    """

    settings: TokenSettings

    # -------------------- helpers --------------------

    def _load_key(self) -> str | None:
        key = self.settings.key_loader()
        return key or None

    @staticmethod
    def _now() -> datetime:
        return datetime.now(UTC)

    def _decode(self, token: str, key: str, *, verify_exp: bool = True) -> dict[str, Any]:
        return jwt.decode(
            token,
            key,
            algorithms=sorted(HMAC_ALGORITHMS),
            leeway=self.settings.leeway,
            options={"require": REQUIRED_CLAIMS, "verify_exp": verify_exp},
        )

    # -------------------- API ------------------------

    def sign(
        self,
        claims: TokenClaims,
        ttl: timedelta,
        algorithm: str | None = None,
    ) -> SignResult:
        """
        Sign ``claims`` into a compact JWT expiring ``ttl`` from now.

        :returns: ``SignResult`` carrying either the token or a ``SigningFault``.
        """
        alg = algorithm or self.settings.algorithm
        if alg not in HMAC_ALGORITHMS:
            log.error("Refusing to sign with unsupported algorithm %s", alg)
            return SignResult(fault=SigningFault.UNSUPPORTED_ALGORITHM)

        key = self._load_key()
        if key is None:
            log.error("Signing key is not configured")
            return SignResult(fault=SigningFault.MISSING_KEY)

        now = self._now()
        payload = claims.to_payload()
        payload.update(
            {
                "iat": int(now.timestamp()),
                "exp": int((now + ttl).timestamp()),
                "jti": uuid4().hex,
            }
        )
        try:
            token = jwt.encode(payload, key, algorithm=alg)
        except (jwt.PyJWTError, TypeError, ValueError):
            log.error("Token signing failed", exc_info=True)
            return SignResult(fault=SigningFault.SIGNER_ERROR)
        return SignResult(token=token)

    def verify(self, token: str) -> VerifyResult:
        """
        Verify signature and expiry of ``token``.

        Claims are returned for ``VALID`` and ``EXPIRED`` tokens only. A
        missing key or misconfigured algorithm yields ``CONFIG_FAULT`` for
        any input, including garbage.
        """
        if self.settings.algorithm not in HMAC_ALGORITHMS:
            log.error("Configured algorithm %s is unsupported", self.settings.algorithm)
            return VerifyResult(TokenState.CONFIG_FAULT)

        key = self._load_key()
        if key is None:
            log.error("Verification key is not configured")
            return VerifyResult(TokenState.CONFIG_FAULT)

        state = TokenState.VALID
        try:
            payload = self._decode(token, key)
        except jwt.ExpiredSignatureError:
            # signature is checked before exp, so the payload is authentic
            state = TokenState.EXPIRED
            try:
                payload = self._decode(token, key, verify_exp=False)
            except jwt.InvalidTokenError:
                return VerifyResult(TokenState.INVALID)
        except jwt.InvalidKeyError:
            log.error("Configured signing key was rejected by the verifier")
            return VerifyResult(TokenState.CONFIG_FAULT)
        except jwt.InvalidTokenError as exc:
            log.debug("Token rejected: %s", type(exc).__name__)
            return VerifyResult(TokenState.INVALID)

        claims = TokenClaims.from_payload(payload)
        if claims is None:
            log.debug("Token rejected: claims missing or malformed")
            return VerifyResult(TokenState.INVALID)
        return VerifyResult(state, claims)

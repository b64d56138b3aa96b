# sessiongate/services/sessions/service.py
from __future__ import annotations

import logging

from sessiongate.services._shared.ports import (
    SessionStore,
    SessionView,
    TokenClaims,
    TokenCodec,
    TokenType,
    UserDirectory,
    UserRecord,
)
from sessiongate.services.credentials import CredentialHasher
from sessiongate.services.sessions.dto import (
    LoginIn,
    LoginResult,
    LoginStatus,
    TokenPairOut,
)

log = logging.getLogger(__name__)


def build_claims(user: UserRecord, session_id: int, token_type: TokenType) -> TokenClaims:
    """
    Snapshot ``user`` into token claims bound to ``session_id``.

    The password hash is deliberately absent from :class:`TokenClaims`.
    """
    return TokenClaims(
        user_id=user.id,
        session_id=session_id,
        token_type=token_type,
        role=user.role,
        email=user.email,
        phone_number=user.phone_number,
        first_name=user.first_name,
        last_name=user.last_name,
    )


class SessionService:
    """
    Session lifecycle service (login / access-token renewal / logout).

    Tokens are issued through a :class:`TokenCodec`; trust in every token is
    bounded by the validity of the session it references, which lives in a
    :class:`SessionStore`. Expected failures are returned as values, never
    raised, so callers can tell client faults from server faults.
    """

    def __init__(
        self,
        *,
        users: UserDirectory,
        sessions: SessionStore,
        codec: TokenCodec,
        hasher: CredentialHasher,
    ) -> None:
        """
        :param users: Directory used to resolve login identifiers and owners.
        :param sessions: Durable session store.
        :param codec: Token signer/verifier carrying the TTL settings.
        :param hasher: Credential verifier for stored password hashes.
        """
        self.users = users
        self.sessions = sessions
        self.codec = codec
        self.hasher = hasher

    # ------------------------------------------------------------------ #
    # Login
    # ------------------------------------------------------------------ #

    def _candidates(self, dto: LoginIn) -> list[UserRecord]:
        email = (dto.email or "").strip().lower()
        if email:
            return self.users.find_by_identifier(email=email)
        phone = (dto.phone_number or "").strip()
        if phone:
            return self.users.find_by_identifier(phone_number=phone)
        return []

    def authenticate(self, dto: LoginIn) -> UserRecord | None:
        """
        Return the first candidate whose stored hash verifies ``dto.secret``.

        :returns: The authenticated user, or ``None`` when nobody matches.
        """
        for candidate in self._candidates(dto):
            if self.hasher.verify(dto.secret, candidate.password_hash):
                return candidate
        return None

    def login(self, dto: LoginIn) -> LoginResult:
        """
        Authenticate credentials, open a session and issue a token pair.

        :param dto: Login input.
        :returns: ``SUCCESS`` with tokens, ``INVALID_CREDENTIALS`` when no
            candidate verifies (no session is created), or ``SERVER_FAULT``
            when the tokens could not be signed.
        """
        user = self.authenticate(dto)
        if user is None:
            log.info("Login rejected", extra={"outcome": "invalid_credentials"})
            return LoginResult(LoginStatus.INVALID_CREDENTIALS)

        session = self.sessions.create(user_id=user.id, user_client=dto.user_client)
        settings = self.codec.settings

        access = self.codec.sign(
            build_claims(user, session.id, TokenType.ACCESS), settings.access_ttl
        )
        refresh = self.codec.sign(
            build_claims(user, session.id, TokenType.REFRESH), settings.refresh_ttl
        )
        if not (access.ok and refresh.ok):
            # The session stays valid; no token referencing it was handed out.
            fault = access.fault or refresh.fault
            log.error(
                "Login could not issue tokens: %s",
                fault.value if fault else "unknown",
                extra={"session_id": session.id, "user_id": user.id, "outcome": "server_fault"},
            )
            return LoginResult(LoginStatus.SERVER_FAULT)

        log.info(
            "Login succeeded",
            extra={"session_id": session.id, "user_id": user.id, "outcome": "success"},
        )
        return LoginResult(
            LoginStatus.SUCCESS,
            TokenPairOut(
                access_token=access.token,  # type: ignore[arg-type]
                refresh_token=refresh.token,  # type: ignore[arg-type]
                session_id=session.id,
            ),
        )

    # ------------------------------------------------------------------ #
    # Renewal
    # ------------------------------------------------------------------ #

    def _refuse(self, reason: str, session_id: int | None = None) -> None:
        log.info(
            "Access token renewal refused: %s",
            reason,
            extra={"session_id": session_id, "outcome": "renewal_refused"},
        )
        return None

    def renew_access_token(self, refresh_token: str) -> str | None:
        """
        Exchange a refresh token for a fresh access token.

        Only a ``VALID`` refresh token bound to a still-valid session whose
        owner still exists is accepted. An expired refresh token always fails:
        access-token expiry triggers renewal, refresh-token expiry forces a
        new login.

        :returns: The new access token, or ``None`` for any failure. The
            reason is logged but not returned.
        """
        result = self.codec.verify(refresh_token)
        if not result.is_valid or result.claims is None:
            return self._refuse(f"refresh token {result.state.value}")

        claims = result.claims
        if claims.token_type is not TokenType.REFRESH:
            return self._refuse("not a refresh token", claims.session_id)

        session = self.sessions.get(claims.session_id)
        if session is None:
            return self._refuse("session not found", claims.session_id)
        if not session.is_valid:
            return self._refuse("session invalidated", session.id)
        if session.user_id != claims.user_id:
            return self._refuse("session owner mismatch", session.id)

        user = self.users.find_by_id(session.user_id)
        if user is None:
            return self._refuse("user not found", session.id)

        signed = self.codec.sign(
            build_claims(user, session.id, TokenType.ACCESS), self.codec.settings.access_ttl
        )
        if not signed.ok:
            log.error(
                "Renewal could not sign access token: %s",
                signed.fault.value if signed.fault else "unknown",
                extra={"session_id": session.id, "outcome": "server_fault"},
            )
            return None

        log.info(
            "Access token renewed",
            extra={"session_id": session.id, "user_id": user.id, "outcome": "renewed"},
        )
        return signed.token

    # ------------------------------------------------------------------ #
    # Revocation
    # ------------------------------------------------------------------ #

    def logout(self, session_id: int) -> bool:
        """
        Invalidate a session; its tokens can no longer be renewed.

        :returns: ``True`` if the session exists.
        """
        found = self.sessions.invalidate(session_id)
        log.info(
            "Session invalidated" if found else "Logout for unknown session",
            extra={"session_id": session_id, "outcome": "logout" if found else "not_found"},
        )
        return found

    def list_sessions(self, user_id: int) -> list[SessionView]:
        """List every session (valid or not) owned by ``user_id``."""
        return self.sessions.list_for_user(user_id)

"""Tiny helpers shared across test modules."""

from __future__ import annotations

from sessiongate.services._shared.ports import TokenClaims, TokenType, UserRecord


def json_headers(
    access_token: str | None = None,
    refresh_token: str | None = None,
    *,
    user_agent: str | None = None,
) -> dict[str, str]:
    """Return JSON headers carrying the optional bearer and refresh tokens."""
    headers = {"Content-Type": "application/json", "Accept": "application/json"}
    if access_token:
        headers["Authorization"] = f"Bearer {access_token}"
    if refresh_token:
        headers["X-Refresh"] = refresh_token
    if user_agent:
        headers["User-Agent"] = user_agent
    return headers


def make_claims(
    *,
    user_id: int = 1,
    session_id: int = 1,
    token_type: TokenType = TokenType.ACCESS,
    role: str = "user",
    email: str | None = "ada@example.com",
) -> TokenClaims:
    """Build claims with sensible defaults."""
    return TokenClaims(
        user_id=user_id,
        session_id=session_id,
        token_type=token_type,
        role=role,
        email=email,
        first_name="Ada",
        last_name="Lovelace",
    )


def make_user_record(hasher, *, user_id: int = 1, password: str = "password", **kw) -> UserRecord:
    """Build a :class:`UserRecord` whose hash matches ``password``."""
    defaults = {
        "role": "user",
        "email": f"user{user_id}@example.com",
        "phone_number": None,
        "first_name": "Ada",
        "last_name": "Lovelace",
    }
    defaults.update(kw)
    return UserRecord(id=user_id, password_hash=hasher.hash(password), **defaults)


def tamper(token: str) -> str:
    """Flip one character in the signature segment of a compact JWT."""
    head, payload, sig = token.split(".")
    # middle char avoids base64 padding-bit quirks of the last position
    i = len(sig) // 2
    flipped = "A" if sig[i] != "A" else "B"
    return ".".join([head, payload, sig[:i] + flipped + sig[i + 1 :]])



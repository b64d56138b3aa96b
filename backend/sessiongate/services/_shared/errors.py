"""
Domain-level exceptions used within the service layer.

These exceptions are **framework-agnostic** and should never import or depend
on Flask or HTTP. They serve as stable contracts between repositories, ports
and application services.

Expected authentication outcomes (bad credentials, expired or revoked tokens)
are *not* exceptions: they travel as tagged results (see the ports package).
The translation of the errors below to HTTP responses (RFC 7807) is handled by
:meth:`BaseService.translate_exceptions` into the API errors of
``sessiongate/core/errors.py``.
"""

from __future__ import annotations

from dataclasses import dataclass


class ServiceError(Exception):
    """
    Base class for all service-level errors.

    Notes
    -----
    - These are *not* HTTP errors.
    - The API layer translates them to ``APIError``.
    """


@dataclass(slots=True)
class NotFoundError(ServiceError):
    """
    Raised when an entity is not found.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param key: Identifier or search key.
    :type key: str | int
    """

    entity: str
    key: str | int

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.entity} not found: {self.key}"


@dataclass(slots=True)
class ConflictError(ServiceError):
    """
    Raised when a unique constraint conflict occurs.

    :param entity: Entity name (e.g., "User").
    :type entity: str
    :param field: Public name of the conflicting field.
    :type field: str
    """

    entity: str
    field: str

    def __str__(self) -> str:  # pragma: no cover
        return f"{self.field} already taken"


class ConfigurationError(ServiceError):
    """Raised when the application is wired with an invalid configuration."""

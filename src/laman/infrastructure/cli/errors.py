"""Map domain errors to CLI failures.

Each error kind gets its own exit code so scripts can branch on the
outcome without parsing messages.
"""

from __future__ import annotations

import click

from laman.domain.exceptions import (
    ConcurrentModificationError,
    DomainException,
    EntityNotFoundError,
    InvalidTransitionError,
    PersistenceError,
    ProductNotFoundError,
    UnavailableError,
)

EXIT_CLIENT_ERROR = 1
EXIT_NOT_FOUND = 3
EXIT_CONFLICT = 4
EXIT_SERVER_ERROR = 5


def exit_code_for(exc: DomainException) -> int:
    # a missing product or a transition on a missing order is a bad request
    if isinstance(exc, (ProductNotFoundError, InvalidTransitionError)):
        return EXIT_CLIENT_ERROR
    if isinstance(exc, EntityNotFoundError):
        return EXIT_NOT_FOUND
    if isinstance(exc, ConcurrentModificationError):
        return EXIT_CONFLICT
    if isinstance(exc, (PersistenceError, UnavailableError)):
        return EXIT_SERVER_ERROR
    return EXIT_CLIENT_ERROR


def fail(exc: DomainException) -> click.ClickException:
    error = click.ClickException(str(exc))
    error.exit_code = exit_code_for(exc)
    return error

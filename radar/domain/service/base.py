"""Base service class for domain services."""

from sqlalchemy.exc import IntegrityError


class Service:
    """Base class for all domain services.

    Domain services hold the engagement rules that span more than one
    entity: a poll and its ledger, a reply and its votes.
    """

    pass


def violates_constraint(error: IntegrityError, constraint: str) -> bool:
    """Whether an IntegrityError was raised by the named constraint.

    asyncpg exposes ``constraint_name`` on the driver error, which the
    DBAPI adapter keeps as the cause. Otherwise fall back to the message.
    """
    driver_error = error.orig
    for candidate in (driver_error, getattr(driver_error, "__cause__", None)):
        name = getattr(candidate, "constraint_name", None)
        if name:
            return name == constraint
    return f'"{constraint}"' in str(driver_error)

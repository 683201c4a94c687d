"""Unit tests for shared domain service helpers."""

from sqlalchemy.exc import IntegrityError

from radar.domain.service.base import violates_constraint


class DriverUniqueViolation(Exception):
    """Shaped like asyncpg's UniqueViolationError."""

    def __init__(self, constraint_name: str) -> None:
        super().__init__("duplicate key value")
        self.constraint_name = constraint_name


class AdaptedDriverError(Exception):
    """Shaped like the DBAPI adapter error wrapping the driver error."""


def _wrapped(driver_error: Exception) -> IntegrityError:
    adapted = AdaptedDriverError(str(driver_error))
    adapted.__cause__ = driver_error
    return IntegrityError("INSERT INTO votes", None, adapted)


class TestViolatesConstraint:
    def test_reads_constraint_name_from_driver_error(self):
        error = _wrapped(DriverUniqueViolation("unique_vote"))

        assert violates_constraint(error, "unique_vote") is True
        assert violates_constraint(error, "unique_poll_vote") is False

    def test_falls_back_to_message(self):
        error = IntegrityError(
            "INSERT INTO poll_votes",
            None,
            Exception('duplicate key value violates unique constraint "unique_poll_vote"'),
        )

        assert violates_constraint(error, "unique_poll_vote") is True
        assert violates_constraint(error, "unique_vote") is False

    def test_foreign_key_violation_is_not_the_ledger_key(self):
        error = IntegrityError(
            "INSERT INTO votes",
            None,
            Exception('violates foreign key constraint "votes_user_id_fkey"'),
        )

        assert violates_constraint(error, "unique_vote") is False

"""Helpers shared by the in-memory repositories."""

# Same wording PostgreSQL uses, so callers can tell constraints apart.
UNIQUE_VIOLATION = 'duplicate key value violates unique constraint "{}"'

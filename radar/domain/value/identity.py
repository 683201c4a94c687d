"""Voting principal.

A voter is either a registered user or an anonymous visitor identified by
the client address. Both forms share a ledger key so the same uniqueness
rule applies to each.
"""

from typing import Literal, Union

from radar.domain.value.common import ValueObject
from radar.domain.value.identifiers import UserId


class RegisteredIdentity(ValueObject):
    """Authenticated user."""

    kind: Literal["registered"] = "registered"
    user_id: UserId

    @property
    def voter_key(self) -> str:
        return f"user:{self.user_id}"


class AnonymousIdentity(ValueObject):
    """Unauthenticated visitor, keyed by client IP."""

    kind: Literal["anonymous"] = "anonymous"
    ip_address: str
    user_agent: str | None = None

    @property
    def voter_key(self) -> str:
        return f"ip:{self.ip_address}"


Identity = Union[RegisteredIdentity, AnonymousIdentity]

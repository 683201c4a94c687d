"""Request identity resolution.

Both voting paths ask the same question: who is this? A valid token
makes the caller a registered user; anything else is an anonymous
visitor keyed by client IP. Resolution never fails.
"""

from typing import Mapping, Optional
from uuid import UUID

import logfire
from fastapi import Request

from radar.domain.error import AuthenticationRequiredError
from radar.domain.service import JWTService
from radar.domain.value import (
    AnonymousIdentity,
    Identity,
    RegisteredIdentity,
    UserId,
)

UNKNOWN_IP = "unknown"


def _usable(value: Optional[str]) -> Optional[str]:
    if value is None:
        return None
    value = value.strip()
    if not value or value.lower() == UNKNOWN_IP:
        return None
    return value


def extract_client_ip(
    headers: Mapping[str, str],
    remote_addr: Optional[str],
    trust_forwarded_headers: bool = True,
) -> str:
    """Best guess at the client address.

    Order: first hop of X-Forwarded-For, then X-Real-IP, then the socket
    peer. Blank and "unknown" values are skipped.

    Args:
        headers: Request headers (case-insensitive mapping expected)
        remote_addr: Transport-level peer address
        trust_forwarded_headers: Whether proxy headers may be used

    Returns:
        Client IP, or "unknown" if nothing usable was found
    """
    if trust_forwarded_headers:
        forwarded = headers.get("x-forwarded-for")
        if forwarded:
            first_hop = _usable(forwarded.split(",")[0])
            if first_hop:
                return first_hop

        real_ip = _usable(headers.get("x-real-ip"))
        if real_ip:
            return real_ip

    return _usable(remote_addr) or UNKNOWN_IP


def extract_bearer_token(authorization: Optional[str]) -> Optional[str]:
    """Token from an ``Authorization: Bearer <token>`` header."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()


class IdentityResolver:
    """Resolve the voting identity behind an HTTP request."""

    def __init__(
        self,
        jwt_service: JWTService,
        cookie_name: str = "auth_token",
        trust_forwarded_headers: bool = True,
    ) -> None:
        """Initialize identity resolver.

        Args:
            jwt_service: JWT service for token verification
            cookie_name: Cookie checked when no Authorization header is sent
            trust_forwarded_headers: Whether proxy headers may set the client IP
        """
        self.jwt_service = jwt_service
        self.cookie_name = cookie_name
        self.trust_forwarded_headers = trust_forwarded_headers

    def resolve(self, request: Request) -> Identity:
        """Resolve the identity of a FastAPI request."""
        return self.resolve_from(
            headers=request.headers,
            cookies=request.cookies,
            remote_addr=request.client.host if request.client else None,
        )

    def resolve_from(
        self,
        headers: Mapping[str, str],
        cookies: Mapping[str, str],
        remote_addr: Optional[str],
    ) -> Identity:
        """Resolve an identity from raw request parts.

        Args:
            headers: Request headers
            cookies: Request cookies
            remote_addr: Transport-level peer address

        Returns:
            RegisteredIdentity for a valid token, AnonymousIdentity otherwise
        """
        token = extract_bearer_token(headers.get("authorization")) or cookies.get(
            self.cookie_name
        )
        user_id = self._user_id_from_token(token)
        if user_id is not None:
            return RegisteredIdentity(user_id=user_id)

        return AnonymousIdentity(
            ip_address=extract_client_ip(
                headers, remote_addr, self.trust_forwarded_headers
            ),
            user_agent=headers.get("user-agent"),
        )

    def _user_id_from_token(self, token: Optional[str]) -> Optional[UserId]:
        raw = self.jwt_service.get_user_id_from_token(token)
        if raw is None:
            return None
        try:
            return UserId(UUID(raw))
        except ValueError:
            logfire.warn("Token carries a malformed user ID")
            return None


def require_registered(identity: Identity) -> UserId:
    """User ID of a registered identity.

    Raises:
        AuthenticationRequiredError: If the caller is anonymous
    """
    if isinstance(identity, RegisteredIdentity):
        return identity.user_id
    raise AuthenticationRequiredError("Authentication required")

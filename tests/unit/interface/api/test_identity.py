"""Unit tests for request identity resolution."""

from uuid import uuid4

import pytest

from radar.config import AuthSettings
from radar.domain.error import AuthenticationRequiredError
from radar.domain.service import JWTService
from radar.domain.value import AnonymousIdentity, RegisteredIdentity, UserId
from radar.interface.api.identity import (
    IdentityResolver,
    extract_bearer_token,
    extract_client_ip,
    require_registered,
)


@pytest.fixture
def jwt_service() -> JWTService:
    return JWTService(AuthSettings(jwt_secret="test-secret"))


@pytest.fixture
def resolver(jwt_service) -> IdentityResolver:
    return IdentityResolver(jwt_service=jwt_service)


class TestExtractClientIp:
    def test_first_forwarded_hop_wins(self):
        headers = {
            "x-forwarded-for": "203.0.113.7, 10.0.0.1",
            "x-real-ip": "198.51.100.2",
        }
        assert extract_client_ip(headers, "127.0.0.1") == "203.0.113.7"

    def test_real_ip_when_no_forwarded_for(self):
        assert extract_client_ip({"x-real-ip": "198.51.100.2"}, "127.0.0.1") == (
            "198.51.100.2"
        )

    def test_unknown_forwarded_value_skipped(self):
        headers = {"x-forwarded-for": "unknown, 10.0.0.1", "x-real-ip": "198.51.100.2"}
        assert extract_client_ip(headers, "127.0.0.1") == "198.51.100.2"

    def test_falls_back_to_peer_address(self):
        assert extract_client_ip({}, "192.0.2.1") == "192.0.2.1"

    def test_nothing_usable(self):
        assert extract_client_ip({"x-forwarded-for": "  "}, None) == "unknown"

    def test_forwarded_headers_ignored_when_untrusted(self):
        headers = {"x-forwarded-for": "203.0.113.7"}
        assert (
            extract_client_ip(headers, "192.0.2.1", trust_forwarded_headers=False)
            == "192.0.2.1"
        )


class TestExtractBearerToken:
    @pytest.mark.parametrize(
        "header, expected",
        [
            ("Bearer abc.def", "abc.def"),
            ("bearer abc.def", "abc.def"),
            ("Basic abc", None),
            ("Bearer ", None),
            (None, None),
        ],
    )
    def test_parsing(self, header, expected):
        assert extract_bearer_token(header) == expected


class TestIdentityResolver:
    def test_valid_bearer_token_is_registered(self, resolver, jwt_service):
        user_id = uuid4()
        token = jwt_service.create_token(str(user_id), "scout")

        identity = resolver.resolve_from(
            {"authorization": f"Bearer {token}"}, {}, "192.0.2.1"
        )

        assert identity == RegisteredIdentity(user_id=UserId(user_id))

    def test_cookie_token_is_registered(self, resolver, jwt_service):
        user_id = uuid4()
        token = jwt_service.create_token(str(user_id), "scout")

        identity = resolver.resolve_from({}, {"auth_token": token}, "192.0.2.1")

        assert isinstance(identity, RegisteredIdentity)
        assert identity.user_id == user_id

    def test_invalid_token_falls_back_to_anonymous(self, resolver):
        identity = resolver.resolve_from(
            {"authorization": "Bearer not-a-jwt", "user-agent": "Mozilla/5.0"},
            {},
            "192.0.2.1",
        )

        assert identity == AnonymousIdentity(
            ip_address="192.0.2.1", user_agent="Mozilla/5.0"
        )

    def test_token_with_non_uuid_subject_is_anonymous(self, resolver, jwt_service):
        token = jwt_service.create_token("not-a-uuid", "scout")

        identity = resolver.resolve_from({"authorization": f"Bearer {token}"}, {}, None)

        assert isinstance(identity, AnonymousIdentity)
        assert identity.ip_address == "unknown"

    def test_token_signed_with_other_secret_is_anonymous(self, resolver):
        other = JWTService(AuthSettings(jwt_secret="someone-else"))
        token = other.create_token(str(uuid4()), "scout")

        identity = resolver.resolve_from({"authorization": f"Bearer {token}"}, {}, None)

        assert isinstance(identity, AnonymousIdentity)


class TestRequireRegistered:
    def test_returns_user_id(self):
        user_id = UserId(uuid4())
        assert require_registered(RegisteredIdentity(user_id=user_id)) == user_id

    def test_anonymous_rejected(self):
        with pytest.raises(AuthenticationRequiredError):
            require_registered(AnonymousIdentity(ip_address="192.0.2.1"))

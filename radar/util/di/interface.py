"""Interface layer DI providers."""

from dishka import Scope, provide

from radar.config import AuthSettings, IdentitySettings
from radar.domain.service import JWTService
from radar.interface.api.identity import IdentityResolver
from radar.util.di.base import ProviderBase


class ProdInterfaceProvider(ProviderBase):
    """HTTP-facing helpers - concrete, no mocks needed."""

    @provide(scope=Scope.REQUEST)
    def get_identity_resolver(
        self,
        jwt_service: JWTService,
        auth_settings: AuthSettings,
        identity_settings: IdentitySettings,
    ) -> IdentityResolver:
        """Provide request identity resolver."""
        return IdentityResolver(
            jwt_service=jwt_service,
            cookie_name=auth_settings.cookie_name,
            trust_forwarded_headers=identity_settings.trust_forwarded_headers,
        )

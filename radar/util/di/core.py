"""Core DI providers (non-mockable)."""

from dishka import Scope, provide

from radar.config import (
    AuthSettings,
    IdentitySettings,
    ModerationSettings,
    PollSettings,
    Settings,
)
from radar.util.di.base import ProviderBase


class ProdConfigProvider(ProviderBase):
    """Production config provider - concrete, no mocks needed.

    Settings are loaded from environment variables and .env file automatically.
    """

    @provide(scope=Scope.APP)
    def provide_settings(self) -> Settings:
        """Provide application settings from environment."""
        return Settings()

    @provide(scope=Scope.APP)
    def provide_auth_settings(self, settings: Settings) -> AuthSettings:
        """Provide auth settings."""
        return settings.auth

    @provide(scope=Scope.APP)
    def provide_identity_settings(self, settings: Settings) -> IdentitySettings:
        return settings.identity

    @provide(scope=Scope.APP)
    def provide_poll_settings(self, settings: Settings) -> PollSettings:
        return settings.polls

    @provide(scope=Scope.APP)
    def provide_moderation_settings(self, settings: Settings) -> ModerationSettings:
        return settings.moderation

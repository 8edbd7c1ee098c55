from dependency_injector import containers, providers

from eventapi.config import Settings
from eventapi.services.identity_client import IdentityClient


class ConfigModule(containers.DeclarativeContainer):
    """Application configuration."""

    config = providers.Singleton(Settings)


class ServiceModule(containers.DeclarativeContainer):
    """Process-wide service dependencies."""

    config = providers.DependenciesContainer()

    identity_client = providers.Singleton(
        IdentityClient.from_settings, settings=config.config
    )


class Container(containers.DeclarativeContainer):
    """Application container."""

    config = providers.Container(ConfigModule)
    services = providers.Container(ServiceModule, config=config)

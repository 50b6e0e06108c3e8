"""
Secrets Manager Backend Factory

Builds and authenticates the single backend a provider instance shares
with its resources and data sources.

Usage:
    from bitwarden_provider.secrets import connect_backend

    backend = connect_backend(settings)
    project = backend.projects().get(project_id)
"""

import logging

from ..config import ProviderSettings
from ..exceptions import ConfigurationError
from .backends import BACKENDS
from .interface import SecretsManagerBackend

logger = logging.getLogger(__name__)

DEFAULT_ADAPTER = "bitwarden"


def connect_backend(settings: ProviderSettings, adapter: str = DEFAULT_ADAPTER) -> SecretsManagerBackend:
    """
    Create a backend and log in.

    Args:
        settings: Resolved provider settings
        adapter: Backend adapter type (default: "bitwarden")

    Returns:
        A connected SecretsManagerBackend

    Raises:
        ConfigurationError: If the adapter is unknown or the client can't be built
        AuthenticationError: If login fails
    """
    if adapter not in BACKENDS:
        available = ", ".join(sorted(BACKENDS)) or "none"
        raise ConfigurationError(
            "Unknown backend adapter",
            f"Unknown backend adapter type '{adapter}'. Available: {available}",
        )

    backend = BACKENDS[adapter](settings)
    backend.connect()
    logger.info(f"Connected {adapter} backend at {settings.api_url}")
    return backend

"""
Bitwarden Secrets Manager Provider

Provider block, configure step and the registry of resources and data
sources exposed to Terraform.

    provider "bitwarden" {
      api_url      = "https://api.bitwarden.eu"       # or BW_API_URL
      identity_url = "https://identity.bitwarden.eu"  # or BW_IDENTITY_URL
      access_token = var.bws_token                    # or BW_ACCESS_TOKEN
    }
"""

from __future__ import annotations

import logging
from typing import Callable, List, Mapping, Optional, Type

from tf import iface, schema, utils
from tf.provider import Provider

from .. import __version__
from ..config import (
    ENV_ACCESS_TOKEN,
    ENV_API_URL,
    ENV_IDENTITY_URL,
    ProviderSettings,
    resolve_settings,
    validate_endpoint,
)
from ..exceptions import ConfigurationError, ProviderError
from ..logs import mask_secret
from ..secrets import SecretsManagerBackend, connect_backend
from .base import report, string_attribute
from .data_sources import ProjectsDataSource, SecretsDataSource
from .resources import ProjectResource, SecretResource

logger = logging.getLogger(__name__)

PROVIDER_ADDRESS = "registry.terraform.io/bitwarden/bitwarden-secrets"
MODEL_PREFIX = "bitwarden_"


class BitwardenProvider(Provider):
    """
    Terraform provider for Bitwarden Secrets Manager.

    Args:
        version: Provider version reported in logs
        backend_factory: Builds a connected backend from settings
        environ: Environment used for fallbacks (default: os.environ)
    """

    def __init__(
        self,
        version: str = __version__,
        backend_factory: Callable[[ProviderSettings], SecretsManagerBackend] = connect_backend,
        environ: Optional[Mapping] = None,
    ):
        self.version = version
        self.backend_factory = backend_factory
        self.environ = environ
        self.backend: Optional[SecretsManagerBackend] = None

    def full_name(self) -> str:
        return PROVIDER_ADDRESS

    def get_model_prefix(self) -> str:
        return MODEL_PREFIX

    def get_provider_schema(self, diags: utils.Diagnostics) -> schema.Schema:
        return schema.Schema(
            attributes=[
                string_attribute(
                    "api_url",
                    f"URI for Bitwarden Secrets Manager API. May also be provided via {ENV_API_URL} environment variable.",
                    optional=True,
                ),
                string_attribute(
                    "identity_url",
                    f"URI for Bitwarden identity service. May also be provided via {ENV_IDENTITY_URL} environment variable.",
                    optional=True,
                ),
                string_attribute(
                    "access_token",
                    f"Access token for Bitwarden Secrets Manager. May also be provided via {ENV_ACCESS_TOKEN} environment variable.",
                    optional=True,
                    sensitive=True,
                ),
            ]
        )

    def validate_config(self, diags: utils.Diagnostics, config: iface.Config):
        """Endpoint shape checks; the token is only checked at configure time."""
        for attribute in ("api_url", "identity_url"):
            value = config.get(attribute)
            if not isinstance(value, str):
                continue
            try:
                validate_endpoint(attribute, value)
            except ConfigurationError as e:
                report(diags, e)

    def configure_provider(self, diags: utils.Diagnostics, config: iface.Config):
        """Resolve settings, log in and keep the client for every model."""
        logger.info(f"Configuring Bitwarden client (provider {self.version})")

        try:
            settings = resolve_settings(config, self.environ)
            mask_secret(settings.access_token)
            self.backend = self.backend_factory(settings)
        except ProviderError as e:
            logger.error(f"❌ {e.summary}")
            report(diags, e)
            return

        logger.info(f"✅ Configured bitwarden client for {settings.api_url}")

    def get_data_sources(self) -> List[Type[iface.DataSource]]:
        return [ProjectsDataSource, SecretsDataSource]

    def get_resources(self) -> List[Type[iface.Resource]]:
        return [ProjectResource, SecretResource]

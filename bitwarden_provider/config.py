"""
Provider Configuration

Resolves the provider block into the settings used to build the Bitwarden
client.

Precedence for every attribute:
    1. Terraform configuration value (when not null, even if empty)
    2. Environment variable (BW_API_URL, BW_IDENTITY_URL, BW_ACCESS_TOKEN)
    3. Default Bitwarden cloud endpoint (the access token has no default)

Usage:
    from bitwarden_provider.config import resolve_settings

    settings = resolve_settings({"api_url": None, "identity_url": None, "access_token": "tok123"})
    settings.api_url        # "https://api.bitwarden.com/api"
    settings.identity_url   # "https://identity.bitwarden.com/connect/token"
"""

import os
from dataclasses import dataclass, field
from typing import Mapping, Optional
from urllib.parse import urlparse

from .exceptions import ConfigurationError

# Environment variable fallbacks
ENV_API_URL = "BW_API_URL"
ENV_IDENTITY_URL = "BW_IDENTITY_URL"
ENV_ACCESS_TOKEN = "BW_ACCESS_TOKEN"

# Bitwarden cloud endpoints, see https://bitwarden.com/help/public-api/#endpoints
DEFAULT_API_URL = "https://api.bitwarden.com"
DEFAULT_IDENTITY_URL = "https://identity.bitwarden.com"

SAAS_API_URLS = ("https://api.bitwarden.com", "https://api.bitwarden.eu")
SAAS_IDENTITY_URLS = ("https://identity.bitwarden.com", "https://identity.bitwarden.eu")

API_SUFFIX = "/api"
TOKEN_SUFFIX = "/connect/token"
SELF_HOSTED_TOKEN_SUFFIX = "/identity/connect/token"

_ENV_FALLBACKS = {
    "api_url": ENV_API_URL,
    "identity_url": ENV_IDENTITY_URL,
    "access_token": ENV_ACCESS_TOKEN,
}


@dataclass(frozen=True)
class ProviderSettings:
    """Normalized endpoints and credentials for one provider instance."""
    api_url: str
    identity_url: str
    access_token: str = field(repr=False)


def _pick(config: Mapping, environ: Mapping, attribute: str, default: Optional[str]) -> Optional[str]:
    """Config value if not null, else environment variable, else default."""
    value = config.get(attribute)
    if value is not None and not isinstance(value, str):
        # Not known until apply (e.g. computed from another resource)
        raise ConfigurationError(
            f"Unknown Bitwarden {attribute.replace('_', ' ')}",
            "The provider cannot create the Bitwarden client as there is an unknown "
            f"configuration value for {attribute}. Either target apply the source of the "
            "value first, set the value statically in the configuration, or use the "
            f"{_ENV_FALLBACKS[attribute]} environment variable.",
            attribute=attribute,
        )
    if value is not None:
        return value
    env_value = environ.get(_ENV_FALLBACKS[attribute])
    if env_value is not None:
        return env_value
    return default


def validate_endpoint(attribute: str, url: str) -> None:
    """
    Check that an endpoint is an absolute http(s) URL.

    Raises:
        ConfigurationError: naming the attribute when the URL is unusable
    """
    parsed = urlparse(url or "")
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        env_name = _ENV_FALLBACKS[attribute]
        raise ConfigurationError(
            f"Invalid Bitwarden {attribute.replace('_', ' ')}",
            f"The provider cannot create the Bitwarden client as '{url}' is not a valid "
            f"http(s) URL. Set {attribute} in the configuration or use the {env_name} "
            "environment variable.",
            attribute=attribute,
        )


def normalize_api_url(url: str) -> str:
    """Append /api to the Bitwarden cloud API hosts; other URLs are complete."""
    url = url.rstrip("/")
    if url in SAAS_API_URLS:
        return url + API_SUFFIX
    return url


def normalize_identity_url(url: str) -> str:
    """Build the token endpoint from an identity host."""
    url = url.rstrip("/")
    if url.endswith(TOKEN_SUFFIX):
        return url
    if url in SAAS_IDENTITY_URLS:
        return url + TOKEN_SUFFIX
    # Self-hosted servers expose identity under /identity
    return url + SELF_HOSTED_TOKEN_SUFFIX


def resolve_settings(config: Mapping, environ: Optional[Mapping] = None) -> ProviderSettings:
    """
    Resolve the provider block into ProviderSettings.

    Args:
        config: Provider configuration, null attributes as None
        environ: Environment mapping (default: os.environ)

    Returns:
        ProviderSettings with normalized URLs

    Raises:
        ConfigurationError: If the access token is empty or an endpoint is invalid
    """
    environ = os.environ if environ is None else environ

    api_url = _pick(config, environ, "api_url", DEFAULT_API_URL)
    identity_url = _pick(config, environ, "identity_url", DEFAULT_IDENTITY_URL)
    access_token = _pick(config, environ, "access_token", None)

    if not access_token:
        raise ConfigurationError(
            "Missing Bitwarden access token",
            "The provider cannot create the Bitwarden client as there is a missing or empty "
            "value for the access token. Set the access token in the configuration or use "
            f"the {ENV_ACCESS_TOKEN} environment variable.",
            attribute="access_token",
        )

    validate_endpoint("api_url", api_url)
    validate_endpoint("identity_url", identity_url)

    return ProviderSettings(
        api_url=normalize_api_url(api_url),
        identity_url=normalize_identity_url(identity_url),
        access_token=access_token,
    )

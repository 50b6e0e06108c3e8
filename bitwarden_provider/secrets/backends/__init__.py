"""
Secrets Manager Backends

Available backends for the provider's client handle.
"""

from .bitwarden import BitwardenSDKBackend

# Registry of available backends
BACKENDS = {
    "bitwarden": BitwardenSDKBackend,
}

__all__ = ["BACKENDS", "BitwardenSDKBackend"]

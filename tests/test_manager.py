"""Tests for the backend factory."""

from unittest.mock import patch

import pytest

from bitwarden_provider.config import ProviderSettings
from bitwarden_provider.exceptions import ConfigurationError
from bitwarden_provider.secrets import connect_backend
from bitwarden_provider.secrets.backends import BACKENDS, BitwardenSDKBackend

from .conftest import FakeBackend

SETTINGS = ProviderSettings("https://api.bitwarden.com/api", "https://identity.bitwarden.com/connect/token", "t")


class TestConnectBackend:

    def test_registry_has_sdk_backend(self):
        assert BACKENDS["bitwarden"] is BitwardenSDKBackend

    def test_connects_selected_adapter(self):
        with patch.dict(BACKENDS, {"fake": FakeBackend}):
            backend = connect_backend(SETTINGS, adapter="fake")

        assert isinstance(backend, FakeBackend)
        assert backend.connected
        assert backend.settings is SETTINGS

    def test_unknown_adapter(self):
        with pytest.raises(ConfigurationError) as exc_info:
            connect_backend(SETTINGS, adapter="vault")

        assert "vault" in exc_info.value.detail
        assert "bitwarden" in exc_info.value.detail

"""
Bitwarden Secrets Manager Backend

Implements SecretsManagerBackend using the official Bitwarden SDK
(pip install bitwarden-sdk).
"""

import logging
from typing import Any, List, Optional

from bitwarden_sdk import BitwardenClient, DeviceType, client_settings_from_dict

from ...config import ProviderSettings
from ...exceptions import (
    AuthenticationError,
    ClientError,
    ConfigurationError,
    ProviderNotConfiguredError,
)
from ..interface import Project, ProjectsAPI, Secret, SecretsAPI, SecretsManagerBackend

logger = logging.getLogger(__name__)

USER_AGENT = "terraform-provider-bitwarden"


def _iso(value: Any) -> Optional[str]:
    """SDK dates come back as datetime objects."""
    if value is None:
        return None
    if hasattr(value, "isoformat"):
        return value.isoformat()
    return str(value)


def _uuid(value: Any) -> Optional[str]:
    """SDK ids come back as uuid.UUID; state only holds strings."""
    return None if value is None else str(value)


def _call(operation: str, method, *args, **kwargs) -> Any:
    """
    Run one SDK call and unwrap its response.

    Returns:
        The response's data payload

    Raises:
        ClientError: If the SDK raises or reports success == False
    """
    logger.debug(f"Bitwarden SDK call: {operation}")
    try:
        response = method(*args, **kwargs)
    except Exception as e:
        raise ClientError(operation, str(e)) from e

    if not getattr(response, "success", False):
        message = getattr(response, "error_message", None) or "unknown error"
        raise ClientError(operation, message)
    return getattr(response, "data", None)


def _to_project(data: Any) -> Project:
    return Project(
        id=_uuid(data.id),
        name=data.name,
        organization_id=_uuid(data.organization_id),
        creation_date=_iso(getattr(data, "creation_date", None)),
        revision_date=_iso(getattr(data, "revision_date", None)),
    )


def _to_secret(data: Any) -> Secret:
    return Secret(
        id=_uuid(data.id),
        key=data.key,
        value=data.value,
        note=data.note or "",
        organization_id=_uuid(data.organization_id),
        project_id=_uuid(getattr(data, "project_id", None)),
        creation_date=_iso(getattr(data, "creation_date", None)),
        revision_date=_iso(getattr(data, "revision_date", None)),
    )


def _check_deleted(operation: str, data: Any) -> None:
    """A batch delete reports per-item errors inside a successful response."""
    failures = [
        f"{item.id}: {item.error}"
        for item in (getattr(data, "data", None) or [])
        if getattr(item, "error", None)
    ]
    if failures:
        raise ClientError(operation, "; ".join(failures))


class BitwardenProjects(ProjectsAPI):
    """Project operations backed by the SDK's projects() client."""

    def __init__(self, sdk_projects):
        self._sdk = sdk_projects

    def get(self, project_id: str) -> Project:
        return _to_project(_call("projects.get", self._sdk.get, id=project_id))

    def create(self, organization_id: str, name: str) -> Project:
        data = _call("projects.create", self._sdk.create, organization_id=organization_id, name=name)
        return _to_project(data)

    def update(self, project_id: str, organization_id: str, name: str) -> Project:
        data = _call(
            "projects.update",
            self._sdk.update,
            organization_id=organization_id,
            id=project_id,
            name=name,
        )
        return _to_project(data)

    def delete(self, project_ids: List[str]) -> None:
        data = _call("projects.delete", self._sdk.delete, ids=list(project_ids))
        _check_deleted("projects.delete", data)

    def list(self, organization_id: str) -> List[Project]:
        data = _call("projects.list", self._sdk.list, organization_id=organization_id)
        return [_to_project(item) for item in (getattr(data, "data", None) or [])]


class BitwardenSecrets(SecretsAPI):
    """Secret operations backed by the SDK's secrets() client."""

    def __init__(self, sdk_secrets):
        self._sdk = sdk_secrets

    def get(self, secret_id: str) -> Secret:
        return _to_secret(_call("secrets.get", self._sdk.get, id=secret_id))

    def create(
        self,
        organization_id: str,
        key: str,
        value: str,
        note: str,
        project_ids: List[str],
    ) -> Secret:
        data = _call(
            "secrets.create",
            self._sdk.create,
            organization_id=organization_id,
            key=key,
            value=value,
            note=note,
            project_ids=list(project_ids),
        )
        return _to_secret(data)

    def update(
        self,
        secret_id: str,
        organization_id: str,
        key: str,
        value: str,
        note: str,
        project_ids: List[str],
    ) -> Secret:
        data = _call(
            "secrets.update",
            self._sdk.update,
            organization_id=organization_id,
            id=secret_id,
            key=key,
            value=value,
            note=note,
            project_ids=list(project_ids),
        )
        return _to_secret(data)

    def delete(self, secret_ids: List[str]) -> None:
        data = _call("secrets.delete", self._sdk.delete, ids=list(secret_ids))
        _check_deleted("secrets.delete", data)

    def list(self, organization_id: str) -> List[Secret]:
        # The listing only carries identifiers; values need one get per secret
        data = _call("secrets.list", self._sdk.list, organization_id=organization_id)
        return [self.get(str(item.id)) for item in (getattr(data, "data", None) or [])]


class BitwardenSDKBackend(SecretsManagerBackend):
    """
    Bitwarden Secrets Manager backend.

    Settings:
        api_url: Normalized API URL
        identity_url: Normalized token endpoint
        access_token: Machine account access token
    """

    backend_type = "bitwarden"

    def __init__(self, settings: ProviderSettings):
        self.settings = settings
        self._client = None

    def connect(self) -> None:
        """Build the SDK client and log in with the access token."""
        logger.debug(
            f"Creating Bitwarden client (api: {self.settings.api_url}, "
            f"identity: {self.settings.identity_url})"
        )
        try:
            client = BitwardenClient(
                client_settings_from_dict(
                    {
                        "apiUrl": self.settings.api_url,
                        "identityUrl": self.settings.identity_url,
                        "deviceType": DeviceType.SDK,
                        "userAgent": USER_AGENT,
                    }
                )
            )
        except Exception as e:
            raise ConfigurationError(
                "Error while creating the bitwarden client",
                f"validate the api and identity url are correct: {e}",
            ) from e

        try:
            _call(
                "auth.login_access_token",
                client.auth().login_access_token,
                access_token=self.settings.access_token,
            )
        except ClientError as e:
            raise AuthenticationError(e.message) from e

        self._client = client
        logger.info("✅ Logged in to Bitwarden Secrets Manager")

    def _ensure_connected(self):
        if self._client is None:
            raise ProviderNotConfiguredError()
        return self._client

    def projects(self) -> ProjectsAPI:
        return BitwardenProjects(self._ensure_connected().projects())

    def secrets(self) -> SecretsAPI:
        return BitwardenSecrets(self._ensure_connected().secrets())

"""
Secrets Manager Backend Interface

Defines the abstract interface the provider's resources talk to.
The Bitwarden SDK backend implements it; tests use an in-memory one.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import List, Optional


@dataclass
class Project:
    """A Secrets Manager project."""
    id: str
    name: str
    organization_id: str
    creation_date: Optional[str] = None  # ISO-8601
    revision_date: Optional[str] = None


@dataclass
class Secret:
    """A Secrets Manager secret."""
    id: str
    key: str
    value: str
    organization_id: str
    note: str = ""
    project_id: Optional[str] = None
    creation_date: Optional[str] = None
    revision_date: Optional[str] = None


class ProjectsAPI(ABC):
    """Project operations of an authenticated client."""

    @abstractmethod
    def get(self, project_id: str) -> Project:
        """
        Fetch a project by id.

        Raises:
            ClientError: If the project can't be fetched
        """
        pass

    @abstractmethod
    def create(self, organization_id: str, name: str) -> Project:
        """Create a project and return it with its server-assigned id."""
        pass

    @abstractmethod
    def update(self, project_id: str, organization_id: str, name: str) -> Project:
        """Rename a project."""
        pass

    @abstractmethod
    def delete(self, project_ids: List[str]) -> None:
        """
        Delete projects in one batch.

        Raises:
            ClientError: If the call or any single deletion fails
        """
        pass

    @abstractmethod
    def list(self, organization_id: str) -> List[Project]:
        """List every project of an organization."""
        pass


class SecretsAPI(ABC):
    """Secret operations of an authenticated client."""

    @abstractmethod
    def get(self, secret_id: str) -> Secret:
        """
        Fetch a secret by id.

        Raises:
            ClientError: If the secret can't be fetched
        """
        pass

    @abstractmethod
    def create(
        self,
        organization_id: str,
        key: str,
        value: str,
        note: str,
        project_ids: List[str],
    ) -> Secret:
        """Create a secret associated with the given projects."""
        pass

    @abstractmethod
    def update(
        self,
        secret_id: str,
        organization_id: str,
        key: str,
        value: str,
        note: str,
        project_ids: List[str],
    ) -> Secret:
        """Replace key, value, note and project associations of a secret."""
        pass

    @abstractmethod
    def delete(self, secret_ids: List[str]) -> None:
        """Delete secrets in one batch."""
        pass

    @abstractmethod
    def list(self, organization_id: str) -> List[Secret]:
        """List every secret of an organization (values included)."""
        pass


class SecretsManagerBackend(ABC):
    """
    Abstract base class for Secrets Manager backends.

    A backend is connected once, at provider configure time, and is then
    shared read-only by every resource and data source.
    """

    backend_type: str = "base"

    @abstractmethod
    def connect(self) -> None:
        """
        Build the client and authenticate.

        Raises:
            ConfigurationError: If the client can't be built
            AuthenticationError: If login fails
        """
        pass

    @abstractmethod
    def projects(self) -> ProjectsAPI:
        """Project operations."""
        pass

    @abstractmethod
    def secrets(self) -> SecretsAPI:
        """Secret operations."""
        pass

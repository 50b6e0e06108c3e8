"""
Secrets Manager Access

Backend abstraction over Bitwarden Secrets Manager projects and secrets.

Usage:
    from bitwarden_provider.secrets import connect_backend

    backend = connect_backend(settings)
    backend.projects().create(organization_id, "infra")
    backend.secrets().get(secret_id)
"""

from .interface import Project, ProjectsAPI, Secret, SecretsAPI, SecretsManagerBackend
from .manager import connect_backend

__all__ = [
    "connect_backend",
    "SecretsManagerBackend",
    "ProjectsAPI",
    "SecretsAPI",
    "Project",
    "Secret",
]

"""
Shared fixtures: an in-memory Secrets Manager backend.
"""

import itertools
from dataclasses import replace
from typing import Dict, List, Set

import pytest

from bitwarden_provider.exceptions import ClientError
from bitwarden_provider.secrets.interface import (
    Project,
    ProjectsAPI,
    Secret,
    SecretsAPI,
    SecretsManagerBackend,
)

ORG_ID = "org-1"
TIMESTAMP = "2024-05-01T12:00:00+00:00"


class FakeProjects(ProjectsAPI):
    """Projects stored in a dict; ids in fail_on make calls on them fail."""

    def __init__(self):
        self.records: Dict[str, Project] = {}
        self.calls: List[tuple] = []
        self.fail_on: Set[str] = set()
        self._ids = itertools.count(1)

    def _check(self, operation: str, key: str = None) -> None:
        if operation in self.fail_on or (key is not None and key in self.fail_on):
            raise ClientError(f"projects.{operation}", "simulated failure")

    def get(self, project_id):
        self.calls.append(("get", project_id))
        self._check("get", project_id)
        if project_id not in self.records:
            raise ClientError("projects.get", "404 Not Found")
        return replace(self.records[project_id])

    def create(self, organization_id, name):
        self.calls.append(("create", organization_id, name))
        self._check("create", name)
        project = Project(
            id=f"proj-{next(self._ids)}",
            name=name,
            organization_id=organization_id,
            creation_date=TIMESTAMP,
            revision_date=TIMESTAMP,
        )
        self.records[project.id] = project
        return replace(project)

    def update(self, project_id, organization_id, name):
        self.calls.append(("update", project_id, organization_id, name))
        self._check("update", project_id)
        if project_id not in self.records:
            raise ClientError("projects.update", "404 Not Found")
        self.records[project_id] = replace(self.records[project_id], name=name)
        return replace(self.records[project_id])

    def delete(self, project_ids):
        self.calls.append(("delete", list(project_ids)))
        self._check("delete")
        missing = [i for i in project_ids if i not in self.records]
        if missing:
            raise ClientError("projects.delete", f"not found: {missing}")
        for project_id in project_ids:
            del self.records[project_id]

    def list(self, organization_id):
        self.calls.append(("list", organization_id))
        self._check("list", organization_id)
        return [replace(p) for p in self.records.values() if p.organization_id == organization_id]


class FakeSecrets(SecretsAPI):
    """Secrets stored in a dict, same conventions as FakeProjects."""

    def __init__(self):
        self.records: Dict[str, Secret] = {}
        self.calls: List[tuple] = []
        self.fail_on: Set[str] = set()
        self._ids = itertools.count(1)

    def _check(self, operation: str, key: str = None) -> None:
        if operation in self.fail_on or (key is not None and key in self.fail_on):
            raise ClientError(f"secrets.{operation}", "simulated failure")

    def get(self, secret_id):
        self.calls.append(("get", secret_id))
        self._check("get", secret_id)
        if secret_id not in self.records:
            raise ClientError("secrets.get", "404 Not Found")
        return replace(self.records[secret_id])

    def create(self, organization_id, key, value, note, project_ids):
        self.calls.append(("create", organization_id, key, list(project_ids)))
        self._check("create", key)
        secret = Secret(
            id=f"sec-{next(self._ids)}",
            key=key,
            value=value,
            note=note,
            organization_id=organization_id,
            project_id=project_ids[0] if project_ids else None,
            creation_date=TIMESTAMP,
            revision_date=TIMESTAMP,
        )
        self.records[secret.id] = secret
        return replace(secret)

    def update(self, secret_id, organization_id, key, value, note, project_ids):
        self.calls.append(("update", secret_id, organization_id, key, list(project_ids)))
        self._check("update", secret_id)
        if secret_id not in self.records:
            raise ClientError("secrets.update", "404 Not Found")
        self.records[secret_id] = replace(
            self.records[secret_id],
            key=key,
            value=value,
            note=note,
            project_id=project_ids[0] if project_ids else None,
        )
        return replace(self.records[secret_id])

    def delete(self, secret_ids):
        self.calls.append(("delete", list(secret_ids)))
        self._check("delete")
        missing = [i for i in secret_ids if i not in self.records]
        if missing:
            raise ClientError("secrets.delete", f"not found: {missing}")
        for secret_id in secret_ids:
            del self.records[secret_id]

    def list(self, organization_id):
        self.calls.append(("list", organization_id))
        self._check("list", organization_id)
        return [replace(s) for s in self.records.values() if s.organization_id == organization_id]


class FakeBackend(SecretsManagerBackend):
    backend_type = "fake"

    def __init__(self, settings=None):
        self.settings = settings
        self.connected = False
        self.fake_projects = FakeProjects()
        self.fake_secrets = FakeSecrets()

    def connect(self):
        self.connected = True

    def projects(self):
        return self.fake_projects

    def secrets(self):
        return self.fake_secrets


@pytest.fixture()
def backend():
    """A connected in-memory backend."""
    fake = FakeBackend()
    fake.connect()
    return fake

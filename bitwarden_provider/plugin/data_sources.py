"""
Bitwarden Data Sources

bitwarden_projects and bitwarden_secrets look records up by id, or list
a whole organization when no ids are given.
"""

from __future__ import annotations

from tf import iface, schema

from ..services import ProjectService, SecretService
from .base import BitwardenModel, record_list, string_attribute


def _common_attributes(kind: str):
    return [
        string_attribute("id", f"comma separated ids of the returned {kind}", computed=True),
        string_attribute(
            "organization_id",
            f"list every {kind[:-1]} of this organization when no ids are given",
            optional=True,
        ),
    ]


class RecordDataSource(BitwardenModel, iface.DataSource):
    """Lookup of a list of records, delegated to service_class."""

    def read(self, ctx: iface.ReadDataContext, config: iface.Config) -> iface.State:
        return self.run(ctx.diagnostics, lambda service: service.lookup(config), fallback=config)


class ProjectsDataSource(RecordDataSource):
    """Fetches the list of projects."""

    service_class = ProjectService

    @classmethod
    def get_name(cls) -> str:
        return "projects"

    @classmethod
    def get_schema(cls) -> schema.Schema:
        return schema.Schema(
            attributes=_common_attributes("projects"),
            block_types=[
                record_list(
                    "projects",
                    "List of projects.",
                    [
                        string_attribute("id", "Id of the project", optional=True, computed=True),
                        string_attribute("name", "Name of the project", computed=True),
                        string_attribute(
                            "organization_id",
                            "organization ID associated with the project",
                            computed=True,
                        ),
                        string_attribute("creation_date", "Creation date of the project", computed=True),
                        string_attribute(
                            "revision_date",
                            "Last date the project was updated/revised",
                            computed=True,
                        ),
                    ],
                )
            ],
        )


class SecretsDataSource(RecordDataSource):
    """Fetches the list of secrets."""

    service_class = SecretService

    @classmethod
    def get_name(cls) -> str:
        return "secrets"

    @classmethod
    def get_schema(cls) -> schema.Schema:
        return schema.Schema(
            attributes=_common_attributes("secrets"),
            block_types=[
                record_list(
                    "secrets",
                    "List of secrets.",
                    [
                        string_attribute("id", "Id of the secret", optional=True, computed=True),
                        string_attribute("key", "Key/Name of the secret", computed=True),
                        string_attribute("value", "value of the secret", computed=True, sensitive=True),
                        string_attribute("note", "note for the secret", computed=True, sensitive=True),
                        string_attribute("project_id", "Id of the project", computed=True),
                        string_attribute(
                            "organization_id",
                            "organization ID associated with the secret",
                            computed=True,
                        ),
                        string_attribute(
                            "revision_date",
                            "Last date the secret was updated/revised",
                            computed=True,
                        ),
                    ],
                )
            ],
        )

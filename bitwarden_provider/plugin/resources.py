"""
Bitwarden Resources

bitwarden_project and bitwarden_secret: each resource instance tracks an
ordered list of remote records under a locally generated id.
"""

from __future__ import annotations

from typing import Optional

from tf import iface, schema

from ..services import ProjectService, SecretService
from .base import BitwardenModel, record_list, string_attribute


def _tracking_id() -> schema.Attribute:
    return string_attribute("id", "Identifier Terraform tracks the resource by", computed=True)


class RecordResource(BitwardenModel, iface.Resource):
    """CRUD + import for a list of records, delegated to service_class."""

    def create(self, ctx: iface.CreateContext, planned: iface.State) -> Optional[iface.State]:
        return self.run(ctx.diagnostics, lambda service: service.create(planned))

    def read(self, ctx: iface.ReadContext, current: iface.State) -> iface.State:
        return self.run(ctx.diagnostics, lambda service: service.read(current), fallback=current)

    def update(self, ctx: iface.UpdateContext, current: iface.State, planned: iface.State) -> iface.State:
        return self.run(ctx.diagnostics, lambda service: service.update(current, planned), fallback=current)

    def delete(self, ctx: iface.DeleteContext, current: iface.State) -> Optional[iface.State]:
        self.run(ctx.diagnostics, lambda service: service.delete(current))
        return None

    def import_(self, ctx: iface.ImportContext, id: str) -> Optional[iface.State]:
        return self.run(ctx.diagnostics, lambda service: service.import_state(id))


class ProjectResource(RecordResource):
    """Projects created under an organization; only the name can change."""

    service_class = ProjectService

    @classmethod
    def get_name(cls) -> str:
        return "project"

    @classmethod
    def get_schema(cls) -> schema.Schema:
        return schema.Schema(
            attributes=[_tracking_id()],
            block_types=[
                record_list(
                    "projects",
                    "Projects managed by this resource",
                    [
                        string_attribute("name", "name of the project", required=True),
                        string_attribute(
                            "organization_id",
                            "id of the organization associated with the project",
                            optional=True,
                            computed=True,
                        ),
                        string_attribute(
                            "project_id",
                            "id of the project in bitwarden secrets manager",
                            computed=True,
                        ),
                    ],
                    pending_key="project_id",
                )
            ],
        )


class SecretResource(RecordResource):
    """Secrets with key, value, note and an optional project association."""

    service_class = SecretService

    @classmethod
    def get_name(cls) -> str:
        return "secret"

    @classmethod
    def get_schema(cls) -> schema.Schema:
        return schema.Schema(
            attributes=[_tracking_id()],
            block_types=[
                record_list(
                    "secrets",
                    "Secrets managed by this resource",
                    [
                        string_attribute("key", "key/name of the secret", required=True),
                        string_attribute("value", "value of the secret", required=True, sensitive=True),
                        string_attribute(
                            "note", "note for the secret", optional=True, computed=True, sensitive=True
                        ),
                        string_attribute(
                            "organization_id",
                            "id of the organization owning the secret",
                            optional=True,
                            computed=True,
                        ),
                        string_attribute(
                            "project_id",
                            "id of the project the secret is associated with",
                            optional=True,
                            computed=True,
                        ),
                        string_attribute(
                            "secret_id",
                            "id of the secret in bitwarden secrets manager",
                            computed=True,
                        ),
                    ],
                    pending_key="secret_id",
                )
            ],
        )

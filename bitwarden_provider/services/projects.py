"""
Project Service

Terraform state mapping for bitwarden_project / bitwarden_projects.
"""

from typing import Any, Dict

from ..secrets.interface import Project, ProjectsAPI
from .base import RecordService, known


class ProjectService(RecordService):
    """Projects: name is the only mutable attribute."""

    kind = "project"
    collection = "projects"
    id_field = "project_id"

    def api(self) -> ProjectsAPI:
        return self.backend.projects()

    def _create_one(self, item: Dict[str, Any]) -> Project:
        return self.api().create(known(item.get("organization_id")) or "", known(item.get("name")) or "")

    def _update_one(self, record_id: str, item: Dict[str, Any], prior: Dict[str, Any]) -> Project:
        organization_id = known(item.get("organization_id")) or known(prior.get("organization_id")) or ""
        return self.api().update(record_id, organization_id, known(item.get("name")) or "")

    def _to_state(self, record: Project) -> Dict[str, Any]:
        return {
            "name": record.name,
            "project_id": record.id,
            "organization_id": record.organization_id,
        }

    def _to_data(self, record: Project) -> Dict[str, Any]:
        return {
            "id": record.id,
            "name": record.name,
            "organization_id": record.organization_id,
            "creation_date": record.creation_date,
            "revision_date": record.revision_date,
        }

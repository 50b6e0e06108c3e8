"""
Secret Service

Terraform state mapping for bitwarden_secret / bitwarden_secrets.
Each state record carries a single project_id; the API takes a list.
"""

from typing import Any, Dict, List

from ..secrets.interface import Secret, SecretsAPI
from .base import RecordService, known


def _project_ids(item: Dict[str, Any]) -> List[str]:
    project_id = known(item.get("project_id"))
    return [project_id] if project_id else []


class SecretService(RecordService):
    """Secrets: key, value, note and project association are mutable."""

    kind = "secret"
    collection = "secrets"
    id_field = "secret_id"

    def api(self) -> SecretsAPI:
        return self.backend.secrets()

    def _create_one(self, item: Dict[str, Any]) -> Secret:
        return self.api().create(
            known(item.get("organization_id")) or "",
            known(item.get("key")) or "",
            known(item.get("value")) or "",
            known(item.get("note")) or "",
            _project_ids(item),
        )

    def _update_one(self, record_id: str, item: Dict[str, Any], prior: Dict[str, Any]) -> Secret:
        return self.api().update(
            record_id,
            known(item.get("organization_id")) or known(prior.get("organization_id")) or "",
            known(item.get("key")) or "",
            known(item.get("value")) or "",
            known(item.get("note")) or "",
            _project_ids(item),
        )

    def _to_state(self, record: Secret) -> Dict[str, Any]:
        return {
            "key": record.key,
            "value": record.value,
            "note": record.note,
            "secret_id": record.id,
            "project_id": record.project_id,
            "organization_id": record.organization_id,
        }

    def _to_data(self, record: Secret) -> Dict[str, Any]:
        return {
            "id": record.id,
            "key": record.key,
            "value": record.value,
            "note": record.note,
            "project_id": record.project_id,
            "organization_id": record.organization_id,
            "revision_date": record.revision_date,
        }

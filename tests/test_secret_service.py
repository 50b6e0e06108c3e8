"""Tests for SecretService state mapping."""

import pytest

from bitwarden_provider.exceptions import OperationError
from bitwarden_provider.services import SecretService

from .conftest import ORG_ID, TIMESTAMP


def _secret(key, value="v", note="n", project_id="proj-9"):
    return {
        "key": key,
        "value": value,
        "note": note,
        "organization_id": ORG_ID,
        "project_id": project_id,
        "secret_id": None,
    }


@pytest.fixture()
def service(backend):
    return SecretService(backend)


class TestSecretLifecycle:

    def test_create_sends_project_list_and_maps_response(self, service, backend):
        state = service.create({"id": None, "secrets": [_secret("DB_PASSWORD", "hunter2")]})

        assert backend.fake_secrets.calls == [("create", ORG_ID, "DB_PASSWORD", ["proj-9"])]
        assert state["secrets"] == [
            {
                "key": "DB_PASSWORD",
                "value": "hunter2",
                "note": "n",
                "secret_id": "sec-1",
                "project_id": "proj-9",
                "organization_id": ORG_ID,
            }
        ]

    def test_create_without_project_sends_empty_list(self, service, backend):
        item = _secret("TOKEN", project_id=None)
        item["note"] = None

        state = service.create({"id": None, "secrets": [item]})

        assert backend.fake_secrets.calls == [("create", ORG_ID, "TOKEN", [])]
        assert state["secrets"][0]["note"] == ""
        assert state["secrets"][0]["project_id"] is None

    def test_create_then_read(self, service):
        created = service.create({"id": None, "secrets": [_secret("A"), _secret("B")]})

        assert service.read(created) == created

    def test_update_changes_mutable_fields_only(self, service, backend):
        current = service.create({"id": None, "secrets": [_secret("A", "old", "old note")]})
        planned = {
            "id": current["id"],
            "secrets": [_secret("A2", "new", "new note", project_id="proj-10")],
        }

        state = service.update(current, planned)

        assert state["id"] == current["id"]
        assert state["secrets"][0] == {
            "key": "A2",
            "value": "new",
            "note": "new note",
            "secret_id": "sec-1",
            "project_id": "proj-10",
            "organization_id": ORG_ID,
        }
        assert backend.fake_secrets.calls[-1] == ("update", "sec-1", ORG_ID, "A2", ["proj-10"])

    def test_delete_removes_batch(self, service, backend):
        state = service.create({"id": None, "secrets": [_secret("A"), _secret("B")]})

        service.delete(state)

        assert backend.fake_secrets.calls[-1] == ("delete", ["sec-1", "sec-2"])
        with pytest.raises(OperationError) as exc_info:
            service.read(state)
        assert exc_info.value.summary == "Error reading secret"

    def test_create_failure_message(self, service, backend):
        backend.fake_secrets.fail_on.add("B")

        with pytest.raises(OperationError) as exc_info:
            service.create({"id": None, "secrets": [_secret("A"), _secret("B")]})

        assert exc_info.value.summary == "Error creating secret"
        assert exc_info.value.detail.startswith("Could not create secret, unexpected error:")


class TestSecretLookup:

    def test_lookup_maps_data_source_fields(self, service):
        service.create({"id": None, "secrets": [_secret("A", "va"), _secret("B", "vb")]})

        state = service.lookup({"secrets": [{"id": "sec-2"}, {"id": "sec-1"}]})

        assert state["secrets"] == [
            {
                "id": "sec-2",
                "key": "B",
                "value": "vb",
                "note": "n",
                "project_id": "proj-9",
                "organization_id": ORG_ID,
                "revision_date": TIMESTAMP,
            },
            {
                "id": "sec-1",
                "key": "A",
                "value": "va",
                "note": "n",
                "project_id": "proj-9",
                "organization_id": ORG_ID,
                "revision_date": TIMESTAMP,
            },
        ]

    def test_lookup_failure_is_generic(self, service):
        with pytest.raises(OperationError) as exc_info:
            service.lookup({"secrets": [{"id": "nope"}]})

        assert exc_info.value.summary == "Unable to read secrets"

    def test_lookup_organization_listing(self, service, backend):
        service.create({"id": None, "secrets": [_secret("A")]})

        state = service.lookup({"secrets": None, "organization_id": ORG_ID})

        assert [s["key"] for s in state["secrets"]] == ["A"]
        assert backend.fake_secrets.calls[-1] == ("list", ORG_ID)

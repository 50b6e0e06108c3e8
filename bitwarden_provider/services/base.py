"""
Record Service Base

Shared CRUD flow for resources that track an ordered list of remote
records (projects, secrets) under one Terraform resource.

State layout:
    {
        "id": "<local tracking id>",
        "<collection>": [ {<record attributes>, "<id_field>": "<server id>"}, ... ]
    }
"""

import logging
import uuid
from abc import ABC, abstractmethod
from typing import Any, Callable, Dict, List, Optional

from ..exceptions import ClientError, IdGenerationError, OperationError
from ..secrets.interface import SecretsManagerBackend

logger = logging.getLogger(__name__)

State = Dict[str, Any]


def known(value: Any) -> Optional[str]:
    """Return value if it is a known string, else None (null or unknown)."""
    return value if isinstance(value, str) else None


def records(state: Optional[State], collection: str) -> List[Dict[str, Any]]:
    """Nested records of a state, [] when null."""
    if not state:
        return []
    return list(state.get(collection) or [])


def new_tracking_id() -> str:
    """
    Generate the local id Terraform tracks the resource by.

    Raises:
        IdGenerationError: If no randomness source is available
    """
    try:
        return str(uuid.uuid4())
    except (OSError, NotImplementedError) as e:
        raise IdGenerationError(str(e)) from e


class RecordService(ABC):
    """
    Maps Terraform state to backend calls for one kind of record.

    Subclasses set kind/collection/id_field and implement the per-record
    hooks; the CRUD flow lives here.
    """

    kind: str = "record"
    collection: str = "records"
    id_field: str = "record_id"

    def __init__(self, backend: SecretsManagerBackend):
        self.backend = backend

    @abstractmethod
    def api(self):
        """ProjectsAPI or SecretsAPI of the backend."""
        pass

    @abstractmethod
    def _create_one(self, item: Dict[str, Any]):
        pass

    @abstractmethod
    def _update_one(self, record_id: str, item: Dict[str, Any], prior: Dict[str, Any]):
        pass

    @abstractmethod
    def _to_state(self, record) -> Dict[str, Any]:
        """Resource record attributes from a backend record."""
        pass

    @abstractmethod
    def _to_data(self, record) -> Dict[str, Any]:
        """Data source record attributes from a backend record."""
        pass

    def _guard(self, action: str, verb: str, call: Callable, *args):
        """Run a backend call, turning a ClientError into an OperationError."""
        try:
            return call(*args)
        except ClientError as e:
            logger.error(f"❌ {action} {self.kind} failed: {e.operation}")
            raise OperationError(
                f"Error {action} {self.kind}",
                f"Could not {verb} {self.kind}, unexpected error: {e}",
            ) from e

    def create(self, planned: State) -> State:
        """Create every planned record, in order."""
        state = dict(planned)
        state["id"] = new_tracking_id()

        created = []
        for item in records(planned, self.collection):
            record = self._guard("creating", "create", self._create_one, item)
            created.append(self._to_state(record))
        state[self.collection] = created

        logger.info(f"Created {len(created)} {self.kind}(s) under {state['id']}")
        return state

    def read(self, current: State) -> State:
        """Refetch every tracked record by its server id."""
        state = dict(current)
        refreshed = []
        for item in records(current, self.collection):
            record = self._guard(
                "reading", "find", self.api().get, known(item.get(self.id_field)) or ""
            )
            refreshed.append(self._to_state(record))
        state[self.collection] = refreshed
        return state

    def update(self, current: State, planned: State) -> State:
        """
        Reconcile prior records with the plan, pairing them by position.

        Paired records are updated in place (the server id never changes),
        extra planned records are created and surplus prior records deleted.
        """
        prior = records(current, self.collection)
        wanted = records(planned, self.collection)

        result = []
        for index, item in enumerate(wanted):
            previous = prior[index] if index < len(prior) else {}
            record_id = known(previous.get(self.id_field))
            if record_id:
                record = self._guard("updating", "update", self._update_one, record_id, item, previous)
            else:
                record = self._guard("creating", "create", self._create_one, item)
            result.append(self._to_state(record))

        surplus = [
            known(item.get(self.id_field))
            for item in prior[len(wanted):]
            if known(item.get(self.id_field))
        ]
        if surplus:
            self._guard("deleting", "delete", self.api().delete, surplus)

        state = dict(planned)
        state["id"] = known(current.get("id")) or known(planned.get("id"))
        state[self.collection] = result
        return state

    def delete(self, current: State) -> None:
        """Delete every tracked record in one batch."""
        ids = [
            known(item.get(self.id_field))
            for item in records(current, self.collection)
            if known(item.get(self.id_field))
        ]
        if not ids:
            return
        self._guard("deleting", "delete", self.api().delete, ids)
        logger.info(f"Deleted {len(ids)} {self.kind}(s)")

    def import_state(self, resource_id: str) -> State:
        """Import passes the id through; the records are not known yet."""
        return {"id": resource_id, self.collection: []}

    def lookup(self, config: State) -> State:
        """
        Data source read.

        Requested ids are fetched one by one and returned in request order;
        without ids, an organization_id lists the whole organization. Any
        failure aborts the whole read with a generic error.
        """
        requested = [known(item.get("id")) for item in records(config, self.collection)]
        organization_id = known(config.get("organization_id"))

        try:
            if requested:
                if not all(requested):
                    raise ClientError(f"{self.collection}.get", "empty id requested")
                found = [self.api().get(record_id) for record_id in requested]
            elif organization_id:
                found = self.api().list(organization_id)
            else:
                found = []
        except ClientError as e:
            logger.debug(f"{self.collection} lookup failed: {e.operation}: {e}")
            raise OperationError(
                f"Unable to read {self.collection}",
                f"Validate that the {self.kind} ids and the organization id are not empty and are valid.",
            ) from e

        state = dict(config)
        state[self.collection] = [self._to_data(record) for record in found]
        state["id"] = ",".join(record.id for record in found)
        return state

"""
Plugin Base Class

Shared plumbing for every Bitwarden resource and data source: the typed
client handle injected by the provider, error-to-diagnostic conversion,
and the nested record list used by all schemas.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Type

from tf import schema, types, utils
from tf.gen import tfplugin_pb2 as pb
from tf.provider import _decode_state, _encode_state_d
from tf.types import Unknown

from ..exceptions import ProviderError, ProviderNotConfiguredError
from ..secrets.interface import SecretsManagerBackend
from ..services.base import RecordService

if TYPE_CHECKING:
    from .provider import BitwardenProvider

logger = logging.getLogger(__name__)


def string_attribute(name: str, description: str, **flags) -> schema.Attribute:
    """A string attribute; flags are required/optional/computed/sensitive."""
    return schema.Attribute(name, types.String(), description=description, **flags)


class RecordListBlock(schema.NestedBlock):
    """
    Ordered list of nested records, encoded as a Terraform LIST block.

    Records are compared position by position: a record's index is how the
    resource pairs it with its prior state.

    pending_key names the computed server id of a record. While it is null
    the record does not exist remotely yet, so its other null computed
    attributes are planned as unknown.
    """

    def __init__(self, type_name: str, block: schema.Block, pending_key: Optional[str] = None):
        super().__init__(type_name, None, block)
        self.pending_key = pending_key

    def to_pb(self) -> pb.Schema.NestedBlock:
        return pb.Schema.NestedBlock(
            type_name=self.type_name,
            block=self.block.to_pb(),
            nesting=pb.Schema.NestedBlock.NestingMode.LIST,
        )

    def _pending(self, record: Dict[str, Any]) -> bool:
        return self.pending_key is not None and record.get(self.pending_key) is None

    def _planned(self, record: Dict[str, Any]) -> Dict[str, Any]:
        if not self._pending(record):
            return record
        planned = dict(record)
        for attribute in self.block.attributes:
            if attribute.computed and planned.get(attribute.name) is None:
                planned[attribute.name] = Unknown
        return planned

    def encode(self, value: Any) -> Any:
        if value is None or value is Unknown:
            return value
        return [_encode_state_d(self._amap(), self._bmap(), self._planned(record), None) for record in value]

    def decode(self, value: Any) -> Any:
        if value is None or value is Unknown:
            return value
        diags = utils.Diagnostics()
        return [_decode_state(diags, self._amap(), self._bmap(), record)[1] for record in value]

    def semantically_equal(self, a_decoded, b_decoded) -> bool:
        if not isinstance(a_decoded, list) or not isinstance(b_decoded, list):
            return a_decoded is b_decoded
        if len(a_decoded) != len(b_decoded):
            return False
        # Pending records must be re-encoded to carry their unknowns
        if any(self._pending(record) for record in b_decoded):
            return False

        names = [attribute.name for attribute in self.block.attributes]
        return all(
            all(a.get(name) == b.get(name) for name in names)
            for a, b in zip(a_decoded, b_decoded)
        )

    def validate(self, diags: utils.Diagnostics, type_name: str, records: Any) -> None:
        """Reject values set on computed-only record attributes."""
        if not isinstance(records, list):
            return
        for index, record in enumerate(records):
            for attribute in self.block.attributes:
                if attribute.optional or attribute.required or not attribute.computed:
                    continue
                if record.get(attribute.name) is not None:
                    diags.add_error(
                        f"Field {type_name}.{self.type_name}.{attribute.name} is read-only and should not be set",
                        path=[self.type_name, (index,), attribute.name],
                    )


def record_list(
    name: str,
    description: str,
    attributes: List[schema.Attribute],
    pending_key: Optional[str] = None,
) -> RecordListBlock:
    """An ordered list of nested records (one block per project / secret)."""
    return RecordListBlock(
        name,
        schema.Block(attributes=attributes, description=description),
        pending_key=pending_key,
    )


def report(diags: utils.Diagnostics, error: ProviderError) -> None:
    """Add one error diagnostic for a provider error, pointing at its attribute."""
    if error.attribute:
        diags.add_error(error.summary, error.detail, path=[error.attribute])
    else:
        diags.add_error(error.summary, error.detail)


class BitwardenModel:
    """
    Base class for Bitwarden resources and data sources.

    The framework instantiates models with the provider; the provider's
    backend is the only client they use.

    Subclasses set service_class to the RecordService they delegate to.
    """

    service_class: Type[RecordService] = RecordService

    def __init__(self, provider: BitwardenProvider):
        self.provider = provider

    @property
    def backend(self) -> SecretsManagerBackend:
        """The client handle set at configure time."""
        backend = getattr(self.provider, "backend", None)
        if backend is None:
            raise ProviderNotConfiguredError()
        return backend

    def service(self) -> RecordService:
        return self.service_class(self.backend)

    def validate(self, diags: utils.Diagnostics, type_name: str, config: Dict[str, Any]):
        """Framework checks on top-level fields, then read-only record fields."""
        super().validate(diags, type_name, config)
        for block in self.get_schema().block_types:
            if isinstance(block, RecordListBlock):
                block.validate(diags, type_name, config.get(block.type_name))

    def run(
        self,
        diags: utils.Diagnostics,
        operation: Callable[[RecordService], Any],
        fallback: Optional[Dict[str, Any]] = None,
    ) -> Any:
        """
        Run an operation against a fresh service.

        Returns:
            The operation's result, or fallback after reporting an error
        """
        try:
            return operation(self.service())
        except ProviderError as e:
            logger.error(f"❌ {e.summary}")
            report(diags, e)
            return fallback

"""TypeGraphBuilder — EIP-712 ``types`` for a list of legacy messages.

Message *i* (1-based) becomes a ``msg{i}`` field of ``Tx`` with its own
wrapper type ``Msg{i} = (type: string, value: <value type>)``.  The value
type and the nested types its schema declares are merged in once, first
registration wins.
"""

from __future__ import annotations

from typing import Sequence

import structlog

from core.errors import PayloadError, UnpermittedMessageType
from legacytx.msgs import LegacyMsg
from models.schema import TypeField
from models.type_graph import TypeGraph

from .registry import MessageSchemaRegistry

logger = structlog.get_logger("eip712.type_graph")

DOMAIN_TYPE = "EIP712Domain"
TX_TYPE = "Tx"
FEE_TYPE = "Fee"
COIN_TYPE = "Coin"


def _fields(*pairs: tuple[str, str]) -> tuple[TypeField, ...]:
    return tuple(TypeField(name=name, type=type_) for name, type_ in pairs)


DOMAIN_FIELDS = _fields(
    ("name", "string"),
    ("version", "string"),
    ("chainId", "uint256"),
    ("verifyingContract", "string"),
    ("salt", "string"),
)

# timeout_height is not part of Tx: legacy sign docs omit it when unset
TX_BASE_FIELDS = _fields(
    ("account_number", "string"),
    ("chain_id", "string"),
    ("fee", FEE_TYPE),
    ("memo", "string"),
    ("sequence", "string"),
)

FEE_FIELDS = _fields(
    ("amount", "Coin[]"),
    ("gas", "string"),
)

COIN_FIELDS = _fields(
    ("denom", "string"),
    ("amount", "string"),
)


def root_types() -> TypeGraph:
    """Fresh graph holding only the four root types."""
    return TypeGraph(
        {
            DOMAIN_TYPE: DOMAIN_FIELDS,
            TX_TYPE: TX_BASE_FIELDS,
            FEE_TYPE: FEE_FIELDS,
            COIN_TYPE: COIN_FIELDS,
        }
    )


class TypeGraphBuilder:
    """Builds the full type graph for an ordered message list."""

    def __init__(self, registry: MessageSchemaRegistry) -> None:
        self._registry = registry

    def build(self, msgs: Sequence[LegacyMsg]) -> TypeGraph:
        """Return the type graph for *msgs*.

        Raises
        ------
        UnpermittedMessageType
            If any message type is not allow-listed.  Nothing built so far
            is returned.
        PayloadError
            If a message does not implement :class:`LegacyMsg`.
        """
        graph = root_types()

        for i, msg in enumerate(msgs, start=1):
            if not isinstance(msg, LegacyMsg):
                raise PayloadError(f"msg {type(msg).__name__} must implement LegacyMsg")

            type_id = msg.msg_type_url()
            schema = self._registry.lookup(type_id)
            if schema is None:
                logger.info("type_graph.unpermitted", type_id=type_id, index=i)
                raise UnpermittedMessageType(type_id)

            wrapper = f"Msg{i}"
            graph.append_field(TX_TYPE, TypeField(name=f"msg{i}", type=wrapper))
            graph.set(
                wrapper,
                _fields(("type", "string"), ("value", schema.value_type_name)),
            )

            graph.insert_if_absent(schema.value_type_name, schema.value_types)
            for nested in schema.nested_types:
                graph.insert_if_absent(nested.name, nested.attrs)

        logger.debug("type_graph.built", msgs=len(msgs), types=len(graph))
        return graph


def extract_msg_types(msgs: Sequence[LegacyMsg], registry: MessageSchemaRegistry) -> TypeGraph:
    """Shorthand for ``TypeGraphBuilder(registry).build(msgs)``."""
    return TypeGraphBuilder(registry).build(msgs)

"""TypedDataAssembler — wraps legacy sign-doc JSON into EIP-712 typed data."""

from __future__ import annotations

import copy
import json
from typing import Any, Mapping, Sequence

import structlog

from core.errors import PayloadError
from legacytx.msgs import LegacyMsg
from models.typed_data import PRIMARY_TYPE, FeeDelegationOptions, TypedData, TypedDataDomain

from .fee_delegation import patch_fee_delegation
from .registry import MessageSchemaRegistry
from .type_graph import TypeGraphBuilder

logger = structlog.get_logger("eip712.assembler")


def typed_data_domain(chain_id: int) -> TypedDataDomain:
    return TypedDataDomain(chain_id=chain_id)


def _decode_tx_data(data: bytes | str | Mapping[str, Any]) -> dict[str, Any]:
    if isinstance(data, Mapping):
        # never patch the caller's object
        return copy.deepcopy(dict(data))
    try:
        tx_data = json.loads(data)
    except (ValueError, TypeError) as exc:
        raise PayloadError("failed to JSON unmarshal data") from exc
    if not isinstance(tx_data, dict):
        raise PayloadError("tx data must be a JSON object")
    return tx_data


def wrap_tx_to_typed_data(
    chain_id: int,
    msgs: Sequence[LegacyMsg],
    data: bytes | str | Mapping[str, Any],
    registry: MessageSchemaRegistry,
    fee_delegation: FeeDelegationOptions | None = None,
) -> TypedData:
    """Build the typed-data request for a transaction.

    Parameters
    ----------
    chain_id:
        EIP-155 chain id placed in the domain.
    msgs:
        The transaction messages, in order.
    data:
        Sign-doc JSON with one ``msg{i}`` field per message (see
        :func:`eip712.sign_doc.construct_untyped_eip712_data`).
    registry:
        Allow-list for the current parameter epoch.
    fee_delegation:
        When given, the fee carries a ``feePayer``.
    """
    tx_data = _decode_tx_data(data)
    domain = typed_data_domain(chain_id)
    types = TypeGraphBuilder(registry).build(msgs)

    if fee_delegation is not None:
        patch_fee_delegation(tx_data, types, fee_delegation)

    typed_data = TypedData(
        types=types,
        primary_type=PRIMARY_TYPE,
        domain=domain,
        message=tx_data,
    )
    logger.debug("assembler.wrapped", chain_id=chain_id, msgs=len(msgs))
    return typed_data

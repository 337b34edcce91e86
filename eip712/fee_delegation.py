"""Fee delegation — a third party pays the fee for the signer."""

from __future__ import annotations

from typing import Any, MutableMapping

import structlog

from core.errors import MalformedFeePayload
from models.schema import TypeField
from models.type_graph import TypeGraph
from models.typed_data import FeeDelegationOptions

from .type_graph import FEE_TYPE

logger = structlog.get_logger("eip712.fee_delegation")

DELEGATED_FEE_FIELDS = (
    TypeField(name="feePayer", type="string"),
    TypeField(name="amount", type="Coin[]"),
    TypeField(name="gas", type="string"),
)


def patch_fee_delegation(
    tx_data: MutableMapping[str, Any],
    types: TypeGraph,
    options: FeeDelegationOptions,
) -> None:
    """Add ``feePayer`` to ``tx_data["fee"]`` and redefine ``Fee`` to match.

    Both arguments are modified in place.

    Raises
    ------
    MalformedFeePayload
        If ``tx_data`` has no ``fee`` object.
    """
    fee_info = tx_data.get("fee")
    if not isinstance(fee_info, MutableMapping):
        raise MalformedFeePayload()

    fee_info["feePayer"] = options.fee_payer
    types.set(FEE_TYPE, DELEGATED_FEE_FIELDS)
    logger.debug("fee_delegation.patched", fee_payer=options.fee_payer)

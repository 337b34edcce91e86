"""StdSignBytes — the legacy amino-JSON document a signer commits to."""

from __future__ import annotations

import json
from typing import Any, Sequence

from core.errors import InternalFault
from models.coin import StdFee

from .canonical_json import canonical_dumps
from .msgs import LegacyMsg


def std_sign_bytes(
    chain_id: str,
    account_number: int,
    sequence: int,
    timeout_height: int,
    fee: StdFee,
    msgs: Sequence[LegacyMsg],
    memo: str,
) -> bytes:
    """Return canonical sign bytes for a legacy transaction.

    ``timeout_height`` is omitted when zero; integers are strings.
    """
    raw_msgs: list[Any] = []
    for msg in msgs:
        try:
            raw_msgs.append(json.loads(msg.get_sign_bytes()))
        except (ValueError, TypeError) as exc:
            raise InternalFault(
                f"message {msg.msg_type_url()} produced invalid sign bytes", cause=exc
            ) from exc

    doc: dict[str, Any] = {
        "account_number": str(account_number),
        "chain_id": chain_id,
        "fee": fee.to_amino(),
        "memo": memo,
        "msgs": raw_msgs,
        "sequence": str(sequence),
    }
    if timeout_height:
        doc["timeout_height"] = str(timeout_height)
    return canonical_dumps(doc)

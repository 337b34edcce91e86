"""Legacy sign document with one ``msg{i}`` field per message.

This is the untyped counterpart of the EIP-712 request and also the
``message`` it wraps: the aggregate ``msgs`` list of the standard sign
doc is replaced by ``msg1`` .. ``msgN`` and the result is re-encoded as
canonical JSON.
"""

from __future__ import annotations

import json
from typing import Any, Sequence

from core.errors import InternalFault
from legacytx.canonical_json import canonical_dumps
from legacytx.msgs import LegacyMsg
from legacytx.std_sign import std_sign_bytes
from models.coin import StdFee


def construct_untyped_eip712_data(
    chain_id: str,
    account_number: int,
    sequence: int,
    timeout_height: int,
    fee: StdFee,
    msgs: Sequence[LegacyMsg],
    memo: str,
) -> bytes:
    """Return the canonical sign document bytes.

    Raises
    ------
    InternalFault
        If a message does not implement :class:`LegacyMsg` or the legacy
        sign bytes do not survive a decode/encode round trip.
    """
    for msg in msgs:
        if not isinstance(msg, LegacyMsg):
            raise InternalFault(f"expected LegacyMsg when using amino JSON, got {type(msg).__name__}")

    sign_bytes = std_sign_bytes(chain_id, account_number, sequence, timeout_height, fee, msgs, memo)
    try:
        doc: dict[str, Any] = json.loads(sign_bytes)
    except ValueError as exc:
        raise InternalFault("legacy sign bytes are not valid JSON", cause=exc) from exc

    doc.pop("msgs", None)

    for i, msg in enumerate(msgs, start=1):
        try:
            doc[f"msg{i}"] = json.loads(msg.get_sign_bytes())
        except (ValueError, TypeError) as exc:
            raise InternalFault(
                f"message {msg.msg_type_url()} produced invalid sign bytes", cause=exc
            ) from exc

    try:
        return canonical_dumps(doc)
    except (ValueError, TypeError) as exc:
        raise InternalFault("failed to encode sign document", cause=exc) from exc

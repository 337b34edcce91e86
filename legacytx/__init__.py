"""cosmos-eip712 — legacytx package.

Legacy (pre typed-data) Cosmos signing: amino-JSON messages and the
canonical ``StdSignDoc`` bytes.
"""

from .canonical_json import must_sort_json, sort_json
from .msgs import AminoMsg, LegacyMsg, msg_delegate, msg_multi_send, msg_send, msg_vote
from .std_sign import std_sign_bytes
from .tx import UnsignedTx

__all__ = [
    "AminoMsg",
    "LegacyMsg",
    "UnsignedTx",
    "msg_delegate",
    "msg_multi_send",
    "msg_send",
    "msg_vote",
    "must_sort_json",
    "sort_json",
    "std_sign_bytes",
]

"""cosmos-eip712 — models package."""

from .coin import Coin, StdFee
from .schema import EIP712AllowedMsg, NestedType, TypeField
from .type_graph import TypeGraph
from .typed_data import FeeDelegationOptions, TypedData, TypedDataDomain

__all__ = [
    "Coin",
    "EIP712AllowedMsg",
    "FeeDelegationOptions",
    "NestedType",
    "StdFee",
    "TypeField",
    "TypeGraph",
    "TypedData",
    "TypedDataDomain",
]

"""cosmos-eip712 — params package."""

from .authority import RegistryAuthority, RegistrySnapshot
from .evm_params import (
    PARAM_STORE_KEY_EIP712_ALLOWED_MSGS,
    EvmParams,
    KeyTable,
    ParamSetPair,
    param_key_table,
    v1_param_key_table,
)
from .subspace import ParamNotFound, ParamSubspace

__all__ = [
    "EvmParams",
    "KeyTable",
    "PARAM_STORE_KEY_EIP712_ALLOWED_MSGS",
    "ParamNotFound",
    "ParamSetPair",
    "ParamSubspace",
    "RegistryAuthority",
    "RegistrySnapshot",
    "param_key_table",
    "v1_param_key_table",
]

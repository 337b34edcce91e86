"""EVM module parameters and the key table that lists their store keys."""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Callable, Iterable

from pydantic import BaseModel, ConfigDict, Field

from core.errors import DuplicateTypeId, InvalidParamError
from models.schema import EIP712AllowedMsg

DEFAULT_EVM_DENOM = "aphoton"

PARAM_STORE_KEY_EVM_DENOM = "EVMDenom"
PARAM_STORE_KEY_ENABLE_CREATE = "EnableCreate"
PARAM_STORE_KEY_ENABLE_CALL = "EnableCall"
PARAM_STORE_KEY_EXTRA_EIPS = "EnableExtraEIPs"
PARAM_STORE_KEY_EIP712_ALLOWED_MSGS = "EIP712AllowedMsgs"

# EIPs the interpreter can enable on top of the active hard fork
AVAILABLE_EXTRA_EIPS = (1344, 1884, 2200, 2929, 3198, 3529)

_DENOM_RE = re.compile(r"^[a-zA-Z][a-zA-Z0-9/:._-]{2,127}$")


# ── Validators ───────────────────────────────────────────────────────


def validate_evm_denom(value: Any) -> None:
    if not isinstance(value, str):
        raise InvalidParamError(f"invalid parameter EVM denom type: {type(value).__name__}")
    if not _DENOM_RE.match(value):
        raise InvalidParamError(f"invalid denom: {value}")


def validate_bool(value: Any) -> None:
    if not isinstance(value, bool):
        raise InvalidParamError(f"invalid parameter type: {type(value).__name__}")


def validate_eips(value: Any) -> None:
    if not isinstance(value, (list, tuple)):
        raise InvalidParamError(f"invalid EIP slice type: {type(value).__name__}")
    for eip in value:
        if eip not in AVAILABLE_EXTRA_EIPS:
            raise InvalidParamError(
                f"EIP {eip} is not activateable, valid EIPS are: {list(AVAILABLE_EXTRA_EIPS)}"
            )


def validate_eip712_allowed_msgs(value: Any) -> None:
    if not isinstance(value, (list, tuple)):
        raise InvalidParamError(f"invalid EIP712AllowedMsg slice type: {type(value).__name__}")
    seen: set[str] = set()
    for allowed in value:
        if not isinstance(allowed, EIP712AllowedMsg):
            raise InvalidParamError(f"invalid EIP712AllowedMsg type: {type(allowed).__name__}")
        if allowed.type_id in seen:
            raise DuplicateTypeId(allowed.type_id)
        seen.add(allowed.type_id)


# ── Key table ────────────────────────────────────────────────────────


@dataclass(frozen=True)
class ParamSetPair:
    """A store key, the attribute it maps to, its value type and validator."""

    key: str
    attr: str
    value_type: Any
    validator: Callable[[Any], None]


class KeyTable:
    """The set of keys a parameter subspace accepts."""

    def __init__(self, pairs: Iterable[ParamSetPair] = ()) -> None:
        self._pairs: dict[str, ParamSetPair] = {}
        for pair in pairs:
            self.register(pair)

    def register(self, pair: ParamSetPair) -> KeyTable:
        if pair.key in self._pairs:
            raise ValueError(f"duplicate parameter key {pair.key}")
        self._pairs[pair.key] = pair
        return self

    def __contains__(self, key: object) -> bool:
        return key in self._pairs

    def __getitem__(self, key: str) -> ParamSetPair:
        return self._pairs[key]

    def keys(self) -> list[str]:
        return list(self._pairs)


_V1_PAIRS = (
    ParamSetPair(PARAM_STORE_KEY_EVM_DENOM, "evm_denom", str, validate_evm_denom),
    ParamSetPair(PARAM_STORE_KEY_ENABLE_CREATE, "enable_create", bool, validate_bool),
    ParamSetPair(PARAM_STORE_KEY_ENABLE_CALL, "enable_call", bool, validate_bool),
    ParamSetPair(PARAM_STORE_KEY_EXTRA_EIPS, "extra_eips", tuple[int, ...], validate_eips),
)


def v1_param_key_table() -> KeyTable:
    """Key table before the EIP-712 allow-list parameter existed."""
    return KeyTable(_V1_PAIRS)


def param_key_table() -> KeyTable:
    """Current key table, including ``EIP712AllowedMsgs``."""
    return KeyTable(
        (
            *_V1_PAIRS,
            ParamSetPair(
                PARAM_STORE_KEY_EIP712_ALLOWED_MSGS,
                "eip712_allowed_msgs",
                tuple[EIP712AllowedMsg, ...],
                validate_eip712_allowed_msgs,
            ),
        )
    )


# ── Params ───────────────────────────────────────────────────────────


class EvmParams(BaseModel):
    """EVM module parameters relevant to typed-data signing."""

    model_config = ConfigDict(frozen=True)

    evm_denom: str = DEFAULT_EVM_DENOM
    enable_create: bool = True
    enable_call: bool = True
    extra_eips: tuple[int, ...] = Field(default_factory=tuple)
    eip712_allowed_msgs: tuple[EIP712AllowedMsg, ...] = Field(default_factory=tuple)

    def validate_params(self) -> None:
        """Run every key's validator.

        Raises
        ------
        InvalidParamError
            On a bad denom or unknown extra EIP.
        DuplicateTypeId
            If the allow-list repeats a message type.
        """
        validate_evm_denom(self.evm_denom)
        validate_eips(self.extra_eips)
        validate_eip712_allowed_msgs(self.eip712_allowed_msgs)

    def eip712_allowed_msg_from_msg_type(self, type_id: str) -> EIP712AllowedMsg | None:
        for allowed in self.eip712_allowed_msgs:
            if allowed.type_id == type_id:
                return allowed
        return None

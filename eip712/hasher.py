"""TypedDataHasher — EIP-712 ``hashStruct`` and the final signing digest.

    digest = keccak256(0x19 || 0x01 || hashStruct(EIP712Domain) || hashStruct(Tx))

Fields are encoded strictly in the order their type declares them.
``string`` and ``bytes`` are hashed, atomic types are ABI encoded, struct
references recurse and arrays hash the concatenation of their encoded
elements.  Wallets and on-chain verifiers recompute all of this on their
own, so nothing here may reorder or skip a field.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from typing import Any, Mapping

import structlog
from eth_abi import encode as abi_encode
from eth_abi.exceptions import EncodingError
from eth_utils import decode_hex, is_hex, to_canonical_address
from web3 import Web3

from core.errors import SchemaMismatch
from models.type_graph import TypeGraph
from models.typed_data import TypedData

from .type_graph import DOMAIN_TYPE

logger = structlog.get_logger("eip712.hasher")

_ARRAY_RE = re.compile(r"^(.+)\[(\d*)\]$")
_INT_RE = re.compile(r"^(u?)int(\d*)$")
_BYTES_N_RE = re.compile(r"^bytes(\d+)$")

EIP191_TYPED_DATA_PREFIX = b"\x19\x01"


def keccak256(data: bytes) -> bytes:
    return bytes(Web3.keccak(data))


# ── encodeType ───────────────────────────────────────────────────────


def _base_type(type_name: str) -> str:
    m = _ARRAY_RE.match(type_name)
    while m:
        type_name = m.group(1)
        m = _ARRAY_RE.match(type_name)
    return type_name


def dependencies(types: TypeGraph, primary_type: str, found: list[str] | None = None) -> list[str]:
    """Struct types reachable from *primary_type*, itself first."""
    if found is None:
        found = []
    base = _base_type(primary_type)
    if base in found or base not in types:
        return found
    found.append(base)
    for field in types[base]:
        dependencies(types, field.type, found)
    return found


def encode_type(types: TypeGraph, primary_type: str) -> str:
    """``Name(type1 name1,...)`` followed by every dependency, sorted by name."""
    deps = dependencies(types, primary_type)
    if not deps:
        raise SchemaMismatch(f"unknown type {primary_type}", type_name=primary_type)
    ordered = [deps[0], *sorted(deps[1:])]
    return "".join(
        f"{name}({','.join(f'{f.type} {f.name}' for f in types[name])})"
        for name in ordered
    )


def type_hash(types: TypeGraph, primary_type: str) -> bytes:
    return keccak256(encode_type(types, primary_type).encode("utf-8"))


# ── encodeData ───────────────────────────────────────────────────────


def encode_data(types: TypeGraph, primary_type: str, data: Any) -> bytes:
    """``typeHash || enc(field_1) || ... || enc(field_n)``.

    Raises
    ------
    SchemaMismatch
        If *data* has fields its type does not declare, lacks a declared
        field, or a value does not fit its declared type.
    """
    fields = types.get(primary_type)
    if fields is None:
        raise SchemaMismatch(f"unknown type {primary_type}", type_name=primary_type)
    if not isinstance(data, Mapping):
        raise SchemaMismatch(f"provided data for {primary_type} is not a map", type_name=primary_type)

    declared = {f.name for f in fields}
    extra = sorted(k for k in data if k not in declared)
    if extra:
        raise SchemaMismatch(
            f"{primary_type} has fields not declared in its type: {', '.join(extra)}",
            type_name=primary_type,
        )

    parts = [type_hash(types, primary_type)]
    for field in fields:
        if field.name not in data:
            raise SchemaMismatch(
                f"{primary_type} is missing field {field.name}",
                type_name=primary_type,
            )
        parts.append(_encode_value(types, field.type, data[field.name]))
    return b"".join(parts)


def hash_struct(types: TypeGraph, primary_type: str, data: Any) -> bytes:
    return keccak256(encode_data(types, primary_type, data))


def _encode_value(types: TypeGraph, type_name: str, value: Any) -> bytes:
    m = _ARRAY_RE.match(type_name)
    if m:
        if not isinstance(value, (list, tuple)):
            raise SchemaMismatch(f"provided data for {type_name} is not a list", type_name=type_name)
        if m.group(2) and int(m.group(2)) != len(value):
            raise SchemaMismatch(
                f"{type_name} expects {m.group(2)} elements, got {len(value)}",
                type_name=type_name,
            )
        return keccak256(b"".join(_encode_value(types, m.group(1), item) for item in value))

    if type_name in types:
        return hash_struct(types, type_name, value)

    return _encode_primitive(type_name, value)


def _encode_primitive(type_name: str, value: Any) -> bytes:
    if type_name == "string":
        if not isinstance(value, str):
            raise SchemaMismatch(f"invalid string value {value!r}", type_name=type_name)
        return keccak256(value.encode("utf-8"))

    if type_name == "bytes":
        return keccak256(_parse_bytes(type_name, value))

    if type_name == "bool":
        if not isinstance(value, bool):
            raise SchemaMismatch(f"invalid bool value {value!r}", type_name=type_name)
        return abi_encode(["bool"], [value])

    if type_name == "address":
        try:
            address = to_canonical_address(value)
        except (TypeError, ValueError) as exc:
            raise SchemaMismatch(f"invalid address value {value!r}", type_name=type_name) from exc
        return abi_encode(["address"], [address])

    m = _INT_RE.match(type_name)
    if m:
        abi_type = f"{m.group(1)}int{m.group(2) or '256'}"
        return _abi_encode(abi_type, _parse_integer(type_name, value))

    if _BYTES_N_RE.match(type_name):
        return _abi_encode(type_name, _parse_bytes(type_name, value))

    raise SchemaMismatch(f"unknown type {type_name}", type_name=type_name)


def _abi_encode(abi_type: str, value: Any) -> bytes:
    try:
        return abi_encode([abi_type], [value])
    except (EncodingError, TypeError, ValueError, OverflowError) as exc:
        raise SchemaMismatch(f"cannot encode {value!r} as {abi_type}", type_name=abi_type) from exc


def _parse_integer(type_name: str, value: Any) -> int:
    """Integers arrive as ints or as decimal / 0x-hex strings."""
    if isinstance(value, bool):
        raise SchemaMismatch(f"invalid integer value {value!r}", type_name=type_name)
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        try:
            if text.lower().startswith(("0x", "-0x")):
                return int(text, 16)
            return int(text, 10)
        except ValueError as exc:
            raise SchemaMismatch(f"invalid integer value {value!r}", type_name=type_name) from exc
    raise SchemaMismatch(f"invalid integer value {value!r}", type_name=type_name)


def _parse_bytes(type_name: str, value: Any) -> bytes:
    if isinstance(value, (bytes, bytearray)):
        return bytes(value)
    if isinstance(value, str) and is_hex(value):
        return decode_hex(value)
    raise SchemaMismatch(f"invalid bytes value {value!r}", type_name=type_name)


# ── Digest ───────────────────────────────────────────────────────────


@dataclass(frozen=True)
class TypedDataDigest:
    """Domain separator, primary struct hash and the digest a wallet signs."""

    domain_separator: bytes
    primary_hash: bytes
    digest: bytes

    @property
    def digest_hex(self) -> str:
        return "0x" + self.digest.hex()


def hash_typed_data(typed_data: TypedData) -> TypedDataDigest:
    """Hash *typed_data* as ``eth_signTypedData_v4`` would."""
    try:
        domain_separator = hash_struct(typed_data.types, DOMAIN_TYPE, typed_data.domain.to_message())
    except SchemaMismatch as exc:
        raise SchemaMismatch(
            f"failed to pack and hash typedData {DOMAIN_TYPE}: {exc}", type_name=exc.type_name
        ) from exc

    try:
        primary_hash = hash_struct(typed_data.types, typed_data.primary_type, typed_data.message)
    except SchemaMismatch as exc:
        raise SchemaMismatch(
            f"failed to pack and hash typedData primary type: {exc}", type_name=exc.type_name
        ) from exc

    digest = keccak256(EIP191_TYPED_DATA_PREFIX + domain_separator + primary_hash)
    logger.debug("hasher.digest", primary_type=typed_data.primary_type, digest="0x" + digest.hex())
    return TypedDataDigest(domain_separator=domain_separator, primary_hash=primary_hash, digest=digest)


def compute_typed_data_hash(typed_data: TypedData) -> bytes:
    """Digest bytes to sign for *typed_data*."""
    return hash_typed_data(typed_data).digest

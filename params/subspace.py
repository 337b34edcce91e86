"""ParamSubspace — in-memory parameter store for one module.

Values are stored JSON-encoded (like the chain's KV store), so readers
always get fresh copies.  Every key must be registered in the subspace
key table; touching an unknown key raises instead of silently passing.
"""

from __future__ import annotations

from typing import Any

import structlog
from pydantic import TypeAdapter, ValidationError

from core.errors import InvalidParamError, ParamError, UnregisteredParamKey

from .evm_params import EvmParams, KeyTable

logger = structlog.get_logger("params.subspace")


class ParamNotFound(ParamError):
    """Raised when reading a registered key that was never set."""


class ParamSubspace:
    """Named parameter store guarded by a :class:`KeyTable`."""

    def __init__(self, name: str, key_table: KeyTable | None = None) -> None:
        self._name = name
        self._key_table = key_table
        self._store: dict[str, bytes] = {}

    @property
    def name(self) -> str:
        return self._name

    # ── Key table ────────────────────────────────────────────────

    def has_key_table(self) -> bool:
        return self._key_table is not None

    def with_key_table(self, key_table: KeyTable) -> ParamSubspace:
        """Attach *key_table*. Only allowed once."""
        if self._key_table is not None:
            raise ParamError(f"subspace {self._name} already has a key table")
        self._key_table = key_table
        return self

    @property
    def key_table(self) -> KeyTable | None:
        return self._key_table

    def _adapter(self, key: str) -> TypeAdapter:
        if self._key_table is None or key not in self._key_table:
            raise UnregisteredParamKey(key, self._name)
        return TypeAdapter(self._key_table[key].value_type)

    # ── Get / set ────────────────────────────────────────────────

    def has(self, key: str) -> bool:
        return key in self._store

    def get(self, key: str) -> Any:
        adapter = self._adapter(key)
        if key not in self._store:
            raise ParamNotFound(f"parameter {key} not set in subspace {self._name}")
        return adapter.validate_json(self._store[key])

    def get_if_exists(self, key: str, default: Any = None) -> Any:
        adapter = self._adapter(key)
        if key not in self._store:
            return default
        return adapter.validate_json(self._store[key])

    def set(self, key: str, value: Any) -> None:
        """Validate and store *value* under *key*."""
        adapter = self._adapter(key)
        try:
            value = adapter.validate_python(value)
        except ValidationError as exc:
            raise InvalidParamError(f"invalid value for parameter {key}: {exc}") from exc
        self._key_table[key].validator(value)  # type: ignore[index]
        self._store[key] = adapter.dump_json(value, by_alias=True)
        logger.debug("subspace.set", subspace=self._name, key=key)

    # ── Param sets ───────────────────────────────────────────────

    def set_param_set(self, params: EvmParams) -> None:
        """Store every attribute of *params* the key table knows about."""
        if self._key_table is None:
            raise ParamError(f"subspace {self._name} has no key table")
        for key in self._key_table.keys():
            self.set(key, getattr(params, self._key_table[key].attr))

    def get_param_set(self) -> EvmParams:
        """Read every stored key back into an :class:`EvmParams`."""
        if self._key_table is None:
            raise ParamError(f"subspace {self._name} has no key table")
        values = {
            self._key_table[key].attr: self.get(key)
            for key in self._key_table.keys()
            if self.has(key)
        }
        return EvmParams(**values)

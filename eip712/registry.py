"""MessageSchemaRegistry — immutable allow-list of EIP-712 message schemas.

The registry is both the gate (only listed message kinds may be signed
as typed data) and the schema source for building the type graph.
"""

from __future__ import annotations

from pathlib import Path
from types import MappingProxyType
from typing import Any, Iterable, Iterator, Mapping, Union

import structlog
import yaml

from core.errors import DuplicateTypeId
from models.schema import EIP712AllowedMsg

logger = structlog.get_logger("eip712.registry")

SchemaLike = Union[EIP712AllowedMsg, Mapping[str, Any]]


class MessageSchemaRegistry:
    """Read-only mapping ``type_id -> EIP712AllowedMsg``.

    Build with :meth:`load`; instances are never mutated, so they can be
    shared between threads for the lifetime of a parameter epoch.
    """

    __slots__ = ("_schemas", "_by_type_id")

    def __init__(self, schemas: tuple[EIP712AllowedMsg, ...], by_type_id: Mapping[str, EIP712AllowedMsg]) -> None:
        self._schemas = schemas
        self._by_type_id = by_type_id

    @classmethod
    def load(cls, schemas: Iterable[SchemaLike]) -> MessageSchemaRegistry:
        """Validate *schemas* and return a registry.

        Raises
        ------
        DuplicateTypeId
            If two schemas share a ``type_id``.
        """
        parsed = tuple(
            s if isinstance(s, EIP712AllowedMsg) else EIP712AllowedMsg.model_validate(s)
            for s in schemas
        )
        by_type_id: dict[str, EIP712AllowedMsg] = {}
        for schema in parsed:
            if schema.type_id in by_type_id:
                raise DuplicateTypeId(schema.type_id)
            by_type_id[schema.type_id] = schema

        logger.debug("registry.loaded", schemas=len(parsed))
        return cls(parsed, MappingProxyType(by_type_id))

    @classmethod
    def empty(cls) -> MessageSchemaRegistry:
        return cls.load(())

    @classmethod
    def from_params(cls, params: Any) -> MessageSchemaRegistry:
        """Registry for the allow-list held by an ``EvmParams``."""
        return cls.load(params.eip712_allowed_msgs)

    @classmethod
    def from_file(cls, path: str | Path) -> MessageSchemaRegistry:
        """Load allow-list entries from a YAML or JSON file (a list)."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or []
        if not isinstance(data, list):
            raise ValueError(f"allow-list file {path} must contain a list of entries")
        return cls.load(data)

    # ── Lookup ───────────────────────────────────────────────────

    def lookup(self, type_id: str) -> EIP712AllowedMsg | None:
        """Return the schema for *type_id*, or None if not allow-listed."""
        return self._by_type_id.get(type_id)

    def __contains__(self, type_id: object) -> bool:
        return type_id in self._by_type_id

    def __len__(self) -> int:
        return len(self._schemas)

    def __iter__(self) -> Iterator[EIP712AllowedMsg]:
        return iter(self._schemas)

    @property
    def schemas(self) -> tuple[EIP712AllowedMsg, ...]:
        """Schemas in declaration order."""
        return self._schemas

    def type_ids(self) -> list[str]:
        return [s.type_id for s in self._schemas]

    def to_wire(self) -> list[dict[str, Any]]:
        return [s.to_wire() for s in self._schemas]

"""TypeGraph — ordered mapping of EIP-712 type names to field lists."""

from __future__ import annotations

from typing import Iterable, Iterator, Mapping

from .schema import TypeField


class TypeGraph:
    """Insertion-ordered ``type name -> tuple[TypeField, ...]`` mapping.

    Entries are merged with :meth:`insert_if_absent`: the first
    registration of a name wins and later ones are dropped without being
    compared.  Two schemas that reuse a type name with different fields
    therefore silently keep the first definition.
    """

    def __init__(self, entries: Mapping[str, Iterable[TypeField]] | None = None) -> None:
        self._types: dict[str, tuple[TypeField, ...]] = {}
        if entries:
            for name, fields in entries.items():
                self.set(name, fields)

    # ── Mutation ─────────────────────────────────────────────────

    def set(self, name: str, fields: Iterable[TypeField]) -> None:
        """Define or redefine *name*, keeping its original position."""
        self._types[name] = tuple(fields)

    def insert_if_absent(self, name: str, fields: Iterable[TypeField]) -> bool:
        """Register *name* unless already present. Returns True if inserted."""
        if name in self._types:
            return False
        self._types[name] = tuple(fields)
        return True

    def append_field(self, name: str, field: TypeField) -> None:
        """Append *field* to the end of an existing type."""
        self._types[name] = self._types[name] + (field,)

    def merge(self, other: TypeGraph) -> list[str]:
        """Insert-if-absent every entry of *other*, in its order.

        Returns the names that were added.
        """
        return [name for name, fields in other.items() if self.insert_if_absent(name, fields)]

    # ── Read access ──────────────────────────────────────────────

    def __getitem__(self, name: str) -> tuple[TypeField, ...]:
        return self._types[name]

    def get(self, name: str) -> tuple[TypeField, ...] | None:
        return self._types.get(name)

    def __contains__(self, name: object) -> bool:
        return name in self._types

    def __iter__(self) -> Iterator[str]:
        return iter(self._types)

    def __len__(self) -> int:
        return len(self._types)

    def __eq__(self, other: object) -> bool:
        if isinstance(other, TypeGraph):
            return self._types == other._types
        return NotImplemented

    def __repr__(self) -> str:
        return f"TypeGraph({list(self._types)})"

    def items(self) -> Iterator[tuple[str, tuple[TypeField, ...]]]:
        return iter(self._types.items())

    def copy(self) -> TypeGraph:
        clone = TypeGraph()
        clone._types = dict(self._types)
        return clone

    # ── Serialization ────────────────────────────────────────────

    def to_dict(self) -> dict[str, list[dict[str, str]]]:
        return {name: [f.to_dict() for f in fields] for name, fields in self._types.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, Iterable[Mapping[str, str]]]) -> TypeGraph:
        return cls({name: [TypeField(**f) for f in fields] for name, fields in data.items()})

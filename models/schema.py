"""Allow-list entries — the schema of each message kind that may be signed
as EIP-712 typed data.

The wire shape (allow-list parameter, migration lists, config files) is::

    {"typeId": "/cosmos.bank.v1beta1.MsgSend",
     "valueTypeName": "MsgValueSend",
     "valueTypes": [{"name": "from_address", "type": "string"}, ...],
     "nestedTypes": [{"name": "Coin", "attrs": [...]}, ...]}

Field lists are tuples: their order is part of the struct hash.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class TypeField(BaseModel):
    """One ``(name, type)`` member of an EIP-712 struct type."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    type: str = Field(..., min_length=1)

    def to_dict(self) -> dict[str, str]:
        return {"name": self.name, "type": self.type}


class NestedType(BaseModel):
    """A named struct type referenced from a message value type."""

    model_config = ConfigDict(frozen=True)

    name: str = Field(..., min_length=1)
    attrs: tuple[TypeField, ...] = Field(default_factory=tuple)


class EIP712AllowedMsg(BaseModel):
    """Schema for one allow-listed message kind, keyed by ``type_id``."""

    model_config = ConfigDict(
        frozen=True,
        populate_by_name=True,
        alias_generator=to_camel,
    )

    type_id: str = Field(..., min_length=1, description="Message type URL")
    value_type_name: str = Field(..., min_length=1)
    value_types: tuple[TypeField, ...] = Field(default_factory=tuple)
    nested_types: tuple[NestedType, ...] = Field(default_factory=tuple)

    def to_wire(self) -> dict:
        """Allow-list entry in its camelCase wire shape."""
        return self.model_dump(by_alias=True, mode="json")

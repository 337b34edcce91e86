"""UnsignedTx — request body describing a transaction to be signed."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from models.coin import StdFee

from .msgs import AminoMsg


class TxMsg(BaseModel):
    """One message as submitted: type URL, amino name and amino value."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    type_url: str = Field(..., min_length=1, alias="@type")
    amino_type: str = Field(..., min_length=1, alias="type")
    value: dict[str, Any] = Field(default_factory=dict)

    def to_legacy(self) -> AminoMsg:
        return AminoMsg(type_url=self.type_url, amino_type=self.amino_type, value=dict(self.value))


class UnsignedTx(BaseModel):
    """Everything needed to build legacy sign bytes and EIP-712 typed data."""

    model_config = ConfigDict(frozen=True)

    chain_id: str = Field(..., min_length=1)
    account_number: int = Field(..., ge=0)
    sequence: int = Field(..., ge=0)
    timeout_height: int = Field(default=0, ge=0)
    fee: StdFee
    memo: str = ""
    msgs: tuple[TxMsg, ...] = Field(default_factory=tuple)

    def legacy_msgs(self) -> list[AminoMsg]:
        return [m.to_legacy() for m in self.msgs]

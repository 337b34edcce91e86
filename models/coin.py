"""Coin and StdFee — amino JSON shapes of a Cosmos fee."""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Coin(BaseModel):
    """A single denomination amount. Amounts are integers, never floats."""

    model_config = ConfigDict(frozen=True)

    denom: str = Field(..., min_length=1)
    amount: int = Field(..., ge=0)

    @field_validator("amount", mode="before")
    @classmethod
    def amount_not_float(cls, v: Any) -> Any:
        """Amino encodes amounts as strings; floats would lose precision."""
        if isinstance(v, float):
            raise ValueError("coin amount must be an integer or integer string")
        return v

    def to_amino(self) -> dict[str, str]:
        return {"amount": str(self.amount), "denom": self.denom}


class StdFee(BaseModel):
    """Legacy transaction fee: coins, gas limit and optional payer/granter."""

    model_config = ConfigDict(frozen=True)

    amount: tuple[Coin, ...] = Field(default_factory=tuple)
    gas: int = Field(..., ge=0)
    payer: str = ""
    granter: str = ""

    def to_amino(self) -> dict[str, Any]:
        """Amino JSON form; ``payer``/``granter`` are omitted when empty."""
        doc: dict[str, Any] = {
            "amount": [coin.to_amino() for coin in self.amount],
            "gas": str(self.gas),
        }
        if self.payer:
            doc["payer"] = self.payer
        if self.granter:
            doc["granter"] = self.granter
        return doc

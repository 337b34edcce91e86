"""Typed data envelope, signing domain and fee delegation options."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from .type_graph import TypeGraph

DOMAIN_NAME = "Kava Cosmos"
DOMAIN_VERSION = "1.0.0"
DOMAIN_VERIFYING_CONTRACT = "kavaCosmos"
DOMAIN_SALT = "0"

PRIMARY_TYPE = "Tx"


class TypedDataDomain(BaseModel):
    """EIP-712 domain. Only ``chain_id`` changes between chains."""

    model_config = ConfigDict(frozen=True)

    chain_id: int = Field(..., ge=0)
    name: str = DOMAIN_NAME
    version: str = DOMAIN_VERSION
    verifying_contract: str = DOMAIN_VERIFYING_CONTRACT
    salt: str = DOMAIN_SALT

    def to_message(self) -> dict[str, Any]:
        """Domain as an ``EIP712Domain`` struct value, in declared order."""
        return {
            "name": self.name,
            "version": self.version,
            "chainId": self.chain_id,
            "verifyingContract": self.verifying_contract,
            "salt": self.salt,
        }


class FeeDelegationOptions(BaseModel):
    """A third party pays the fee. Scoped to one request, never persisted."""

    model_config = ConfigDict(frozen=True)

    fee_payer: str = Field(..., min_length=1, description="Fee payer address")


@dataclass(frozen=True)
class TypedData:
    """Complete EIP-712 request: types, primary type, domain and message."""

    types: TypeGraph
    domain: TypedDataDomain
    message: dict[str, Any] = field(default_factory=dict)
    primary_type: str = PRIMARY_TYPE

    def to_dict(self) -> dict[str, Any]:
        """JSON shape handed to wallets (``eth_signTypedData_v4``)."""
        return {
            "types": self.types.to_dict(),
            "primaryType": self.primary_type,
            "domain": self.domain.to_message(),
            "message": self.message,
        }

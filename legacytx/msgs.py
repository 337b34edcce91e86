"""Legacy messages — anything that can name its type URL and produce its
own amino-JSON sign bytes.

Message kinds are plain data (``AminoMsg``) built by small factory
functions, not a class hierarchy.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Iterable, Protocol, runtime_checkable

from models.coin import Coin

from .canonical_json import canonical_dumps


@runtime_checkable
class LegacyMsg(Protocol):
    """Capability required from every message in an EIP-712 transaction."""

    def msg_type_url(self) -> str:
        """Protobuf type URL, e.g. ``/cosmos.bank.v1beta1.MsgSend``."""
        ...

    def get_sign_bytes(self) -> bytes:
        """Canonical amino JSON ``{"type": ..., "value": ...}``."""
        ...


@dataclass(frozen=True)
class AminoMsg:
    """A message as its type URL, amino route name and amino JSON value."""

    type_url: str
    amino_type: str
    value: dict[str, Any] = field(default_factory=dict)

    def msg_type_url(self) -> str:
        return self.type_url

    def get_sign_bytes(self) -> bytes:
        return canonical_dumps({"type": self.amino_type, "value": self.value})


def _coins(coins: Iterable[Coin]) -> list[dict[str, str]]:
    return [coin.to_amino() for coin in coins]


def msg_send(from_address: str, to_address: str, amount: Iterable[Coin]) -> AminoMsg:
    return AminoMsg(
        type_url="/cosmos.bank.v1beta1.MsgSend",
        amino_type="cosmos-sdk/MsgSend",
        value={
            "from_address": from_address,
            "to_address": to_address,
            "amount": _coins(amount),
        },
    )


def msg_multi_send(
    inputs: Iterable[tuple[str, Iterable[Coin]]],
    outputs: Iterable[tuple[str, Iterable[Coin]]],
) -> AminoMsg:
    return AminoMsg(
        type_url="/cosmos.bank.v1beta1.MsgMultiSend",
        amino_type="cosmos-sdk/MsgMultiSend",
        value={
            "inputs": [{"address": a, "coins": _coins(c)} for a, c in inputs],
            "outputs": [{"address": a, "coins": _coins(c)} for a, c in outputs],
        },
    )


def msg_delegate(delegator_address: str, validator_address: str, amount: Coin) -> AminoMsg:
    return AminoMsg(
        type_url="/cosmos.staking.v1beta1.MsgDelegate",
        amino_type="cosmos-sdk/MsgDelegate",
        value={
            "delegator_address": delegator_address,
            "validator_address": validator_address,
            "amount": amount.to_amino(),
        },
    )


def msg_vote(proposal_id: int, voter: str, option: int) -> AminoMsg:
    # amino writes uint64 as a string and int32 enums as numbers
    return AminoMsg(
        type_url="/cosmos.gov.v1beta1.MsgVote",
        amino_type="cosmos-sdk/MsgVote",
        value={
            "proposal_id": str(proposal_id),
            "voter": voter,
            "option": option,
        },
    )

"""Shared constants for the test suite: addresses and allow-list entries."""

from __future__ import annotations

FROM_ADDR = "kava1zyg3zyg3zyg3zyg3zyg3zyg3zyg3tfxx6f"
TO_ADDR = "kava1w3jhxap3w3jhxap3w3jhxap3w3jhxapsvvhw6h"
VAL_ADDR = "kavavaloper1vehk7cnpwgsyzmt0dehhxarjda5z6ctnv3jhqzj"

SEND_SCHEMA = {
    "typeId": "/cosmos.bank.v1beta1.MsgSend",
    "valueTypeName": "MsgValueSend",
    "valueTypes": [
        {"name": "from_address", "type": "string"},
        {"name": "to_address", "type": "string"},
        {"name": "amount", "type": "Coin[]"},
    ],
}

DELEGATE_SCHEMA = {
    "typeId": "/cosmos.staking.v1beta1.MsgDelegate",
    "valueTypeName": "MsgValueDelegate",
    "valueTypes": [
        {"name": "delegator_address", "type": "string"},
        {"name": "validator_address", "type": "string"},
        {"name": "amount", "type": "Coin"},
    ],
    "nestedTypes": [
        {
            "name": "Coin",
            "attrs": [
                {"name": "denom", "type": "string"},
                {"name": "amount", "type": "string"},
            ],
        },
        {
            "name": "Vote",
            "attrs": [{"name": "voter", "type": "string"}],
        },
    ],
}

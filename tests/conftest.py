"""Shared fixtures: a Send/Delegate allow-list and sample messages."""

from __future__ import annotations

import pytest

from eip712.registry import MessageSchemaRegistry
from legacytx.msgs import msg_delegate, msg_send
from models.coin import Coin, StdFee
from tests.helpers import DELEGATE_SCHEMA, FROM_ADDR, SEND_SCHEMA, TO_ADDR, VAL_ADDR


@pytest.fixture
def registry() -> MessageSchemaRegistry:
    return MessageSchemaRegistry.load([SEND_SCHEMA, DELEGATE_SCHEMA])


@pytest.fixture
def send_msg():
    return msg_send(FROM_ADDR, TO_ADDR, [Coin(denom="atom", amount=1)])


@pytest.fixture
def delegate_msg():
    return msg_delegate(FROM_ADDR, VAL_ADDR, Coin(denom="atom", amount=1))


@pytest.fixture
def fee() -> StdFee:
    return StdFee(amount=(Coin(denom="ukava", amount=5000),), gas=200000)

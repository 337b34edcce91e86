"""Tests for eip712.fee_delegation."""

from __future__ import annotations

import pytest

from core.errors import MalformedFeePayload, PayloadError
from eip712.fee_delegation import patch_fee_delegation
from eip712.type_graph import root_types
from models.typed_data import FeeDelegationOptions

PAYER = "kava1feepayer0000000000000000000000000000"


class TestPatchFeeDelegation:
    def _tx_data(self) -> dict:
        return {
            "account_number": "1",
            "chain_id": "kava_2222-10",
            "fee": {"amount": [{"amount": "5000", "denom": "ukava"}], "gas": "200000"},
            "memo": "",
            "sequence": "0",
        }

    def test_adds_fee_payer_and_redefines_fee(self):
        tx_data = self._tx_data()
        types = root_types()
        patch_fee_delegation(tx_data, types, FeeDelegationOptions(fee_payer=PAYER))

        assert tx_data["fee"]["feePayer"] == PAYER
        assert tx_data["fee"]["gas"] == "200000"
        assert [(f.name, f.type) for f in types["Fee"]] == [
            ("feePayer", "string"),
            ("amount", "Coin[]"),
            ("gas", "string"),
        ]

    def test_fee_keeps_its_position_in_graph(self):
        types = root_types()
        patch_fee_delegation(self._tx_data(), types, FeeDelegationOptions(fee_payer=PAYER))
        assert list(types) == ["EIP712Domain", "Tx", "Fee", "Coin"]

    def test_missing_fee_rejected(self):
        tx_data = self._tx_data()
        del tx_data["fee"]
        with pytest.raises(MalformedFeePayload, match="cannot parse fee"):
            patch_fee_delegation(tx_data, root_types(), FeeDelegationOptions(fee_payer=PAYER))

    def test_non_object_fee_rejected(self):
        tx_data = self._tx_data()
        tx_data["fee"] = "5000ukava"
        with pytest.raises(PayloadError):
            patch_fee_delegation(tx_data, root_types(), FeeDelegationOptions(fee_payer=PAYER))

    def test_graph_untouched_on_failure(self):
        types = root_types()
        with pytest.raises(MalformedFeePayload):
            patch_fee_delegation({}, types, FeeDelegationOptions(fee_payer=PAYER))
        assert [f.name for f in types["Fee"]] == ["amount", "gas"]

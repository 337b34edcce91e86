"""Tests for cli.typed_data — commands, output and exit codes."""

from __future__ import annotations

import json

import pytest
import yaml

from cli.typed_data import EXIT_INTERNAL, EXIT_OK, EXIT_REJECTED, main
from core.errors import InternalFault
from migrations.v2 import NEW_ALLOWED_MSGS
from tests.helpers import FROM_ADDR, SEND_SCHEMA, TO_ADDR

TX = {
    "chain_id": "kava_2222-10",
    "account_number": 1,
    "sequence": 0,
    "fee": {"amount": [{"denom": "ukava", "amount": 5000}], "gas": 200000},
    "memo": "",
    "msgs": [
        {
            "@type": "/cosmos.bank.v1beta1.MsgSend",
            "type": "cosmos-sdk/MsgSend",
            "value": {
                "from_address": FROM_ADDR,
                "to_address": TO_ADDR,
                "amount": [{"denom": "ukava", "amount": "10"}],
            },
        }
    ],
}


@pytest.fixture
def tx_file(tmp_path):
    path = tmp_path / "tx.json"
    path.write_text(json.dumps(TX), encoding="utf-8")
    return path


@pytest.fixture
def allowlist_file(tmp_path):
    path = tmp_path / "allowlist.yaml"
    path.write_text(yaml.safe_dump([SEND_SCHEMA]), encoding="utf-8")
    return path


class TestAllowlistCommand:
    def test_default_list_json(self, capsys):
        assert main(["allowlist"]) == EXIT_OK
        entries = json.loads(capsys.readouterr().out)
        assert len(entries) == len(NEW_ALLOWED_MSGS)
        assert entries[0]["typeId"] == NEW_ALLOWED_MSGS[0].type_id

    def test_yaml_from_file(self, capsys, allowlist_file):
        assert main(["--allowlist", str(allowlist_file), "allowlist", "--format", "yaml"]) == EXIT_OK
        entries = yaml.safe_load(capsys.readouterr().out)
        assert [e["typeId"] for e in entries] == [SEND_SCHEMA["typeId"]]

    def test_missing_file(self, capsys, tmp_path):
        assert main(["--allowlist", str(tmp_path / "nope.yaml"), "allowlist"]) == EXIT_REJECTED
        assert "ERROR" in capsys.readouterr().err


class TestSignDocCommand:
    def test_prints_sign_doc(self, capsys, tx_file):
        assert main(["sign-doc", str(tx_file)]) == EXIT_OK
        doc = json.loads(capsys.readouterr().out)
        assert doc["account_number"] == "1"
        assert doc["msg1"]["value"]["to_address"] == TO_ADDR

    def test_bad_tx(self, capsys, tmp_path):
        path = tmp_path / "tx.json"
        path.write_text("{}", encoding="utf-8")
        assert main(["sign-doc", str(path)]) == EXIT_REJECTED


class TestTypedDataCommand:
    def test_rejected_by_default_list(self, capsys, tx_file):
        assert main(["typed-data", str(tx_file)]) == EXIT_REJECTED
        assert "is not permitted" in capsys.readouterr().err

    def test_with_allowlist(self, capsys, tx_file, allowlist_file):
        code = main(
            [
                "--allowlist", str(allowlist_file),
                "--chain-id", "2221",
                "typed-data", str(tx_file),
                "--fee-payer", FROM_ADDR,
            ]
        )
        assert code == EXIT_OK
        out = json.loads(capsys.readouterr().out)
        assert out["typedData"]["domain"]["chainId"] == 2221
        assert out["typedData"]["message"]["fee"]["feePayer"] == FROM_ADDR
        assert out["digest"].startswith("0x") and len(out["digest"]) == 66

    def test_internal_fault_exit_code(self, monkeypatch, tx_file, allowlist_file):
        def broken(self, tx, fee_payer=None):
            raise InternalFault("boom")

        monkeypatch.setattr("eip712.service.TypedDataService.prepare", broken)
        assert main(["--allowlist", str(allowlist_file), "typed-data", str(tx_file)]) == EXIT_INTERNAL

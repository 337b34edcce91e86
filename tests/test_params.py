"""Tests for params — key tables, the subspace store, EvmParams and the
registry authority."""

from __future__ import annotations

import threading

import pytest

from core.errors import (
    DuplicateTypeId,
    EpochRegressionError,
    InvalidParamError,
    ParamError,
    UnregisteredParamKey,
)
from eip712.registry import MessageSchemaRegistry
from models.schema import EIP712AllowedMsg
from params.authority import RegistryAuthority
from params.evm_params import (
    PARAM_STORE_KEY_EIP712_ALLOWED_MSGS,
    PARAM_STORE_KEY_EVM_DENOM,
    PARAM_STORE_KEY_EXTRA_EIPS,
    EvmParams,
    KeyTable,
    ParamSetPair,
    param_key_table,
    v1_param_key_table,
    validate_bool,
)
from params.subspace import ParamNotFound, ParamSubspace
from tests.helpers import DELEGATE_SCHEMA, SEND_SCHEMA

SEND = EIP712AllowedMsg.model_validate(SEND_SCHEMA)
DELEGATE = EIP712AllowedMsg.model_validate(DELEGATE_SCHEMA)


# ──────────────────────────────────────────────
# Key tables
# ──────────────────────────────────────────────


class TestKeyTable:
    def test_v1_lacks_allowlist(self):
        assert PARAM_STORE_KEY_EIP712_ALLOWED_MSGS not in v1_param_key_table()
        assert PARAM_STORE_KEY_EVM_DENOM in v1_param_key_table()

    def test_current_has_allowlist(self):
        table = param_key_table()
        assert PARAM_STORE_KEY_EIP712_ALLOWED_MSGS in table
        assert table[PARAM_STORE_KEY_EIP712_ALLOWED_MSGS].attr == "eip712_allowed_msgs"

    def test_duplicate_key_rejected(self):
        pair = ParamSetPair("Flag", "flag", bool, validate_bool)
        with pytest.raises(ValueError, match="duplicate"):
            KeyTable([pair, pair])


# ──────────────────────────────────────────────
# EvmParams
# ──────────────────────────────────────────────


class TestEvmParams:
    def test_defaults_valid(self):
        params = EvmParams()
        params.validate_params()
        assert params.evm_denom == "aphoton"
        assert params.eip712_allowed_msgs == ()

    def test_bad_denom(self):
        with pytest.raises(InvalidParamError, match="invalid denom"):
            EvmParams(evm_denom="1bad").validate_params()

    def test_unknown_eip(self):
        with pytest.raises(InvalidParamError, match="not activateable"):
            EvmParams(extra_eips=(1,)).validate_params()

    def test_known_eips(self):
        EvmParams(extra_eips=(2929, 3198)).validate_params()

    def test_duplicate_allowed_msg(self):
        with pytest.raises(DuplicateTypeId):
            EvmParams(eip712_allowed_msgs=(SEND, SEND)).validate_params()

    def test_allowed_msg_lookup(self):
        params = EvmParams(eip712_allowed_msgs=(SEND, DELEGATE))
        assert params.eip712_allowed_msg_from_msg_type(DELEGATE.type_id) == DELEGATE
        assert params.eip712_allowed_msg_from_msg_type("/x.y.Nope") is None


# ──────────────────────────────────────────────
# ParamSubspace
# ──────────────────────────────────────────────


class TestParamSubspace:
    def test_unregistered_key(self):
        subspace = ParamSubspace("evm", v1_param_key_table())
        with pytest.raises(UnregisteredParamKey) as exc_info:
            subspace.set(PARAM_STORE_KEY_EIP712_ALLOWED_MSGS, ())
        assert exc_info.value.key == PARAM_STORE_KEY_EIP712_ALLOWED_MSGS
        assert exc_info.value.subspace == "evm"

    def test_no_key_table(self):
        with pytest.raises(UnregisteredParamKey):
            ParamSubspace("evm").get(PARAM_STORE_KEY_EVM_DENOM)

    def test_key_table_attached_once(self):
        subspace = ParamSubspace("evm").with_key_table(param_key_table())
        assert subspace.has_key_table()
        with pytest.raises(ParamError, match="already has a key table"):
            subspace.with_key_table(param_key_table())

    def test_get_unset(self):
        subspace = ParamSubspace("evm", param_key_table())
        with pytest.raises(ParamNotFound):
            subspace.get(PARAM_STORE_KEY_EVM_DENOM)
        assert subspace.get_if_exists(PARAM_STORE_KEY_EVM_DENOM, default="x") == "x"

    def test_set_get(self):
        subspace = ParamSubspace("evm", param_key_table())
        subspace.set(PARAM_STORE_KEY_EXTRA_EIPS, [2929])
        assert subspace.has(PARAM_STORE_KEY_EXTRA_EIPS)
        assert subspace.get(PARAM_STORE_KEY_EXTRA_EIPS) == (2929,)

    def test_validator_runs(self):
        subspace = ParamSubspace("evm", param_key_table())
        with pytest.raises(InvalidParamError):
            subspace.set(PARAM_STORE_KEY_EVM_DENOM, "!")
        assert not subspace.has(PARAM_STORE_KEY_EVM_DENOM)

    def test_type_checked(self):
        subspace = ParamSubspace("evm", param_key_table())
        with pytest.raises(InvalidParamError):
            subspace.set(PARAM_STORE_KEY_EXTRA_EIPS, ["not-an-int"])

    def test_allowlist_round_trip(self):
        subspace = ParamSubspace("evm", param_key_table())
        subspace.set(PARAM_STORE_KEY_EIP712_ALLOWED_MSGS, (SEND, DELEGATE))
        assert subspace.get(PARAM_STORE_KEY_EIP712_ALLOWED_MSGS) == (SEND, DELEGATE)

    def test_allowlist_duplicate_rejected(self):
        subspace = ParamSubspace("evm", param_key_table())
        with pytest.raises(DuplicateTypeId):
            subspace.set(PARAM_STORE_KEY_EIP712_ALLOWED_MSGS, (SEND, SEND))

    def test_param_set(self):
        subspace = ParamSubspace("evm", param_key_table())
        params = EvmParams(evm_denom="akava", extra_eips=(3529,), eip712_allowed_msgs=(SEND,))
        subspace.set_param_set(params)
        assert subspace.get_param_set() == params

    def test_param_set_v1_table(self):
        subspace = ParamSubspace("evm", v1_param_key_table())
        subspace.set_param_set(EvmParams(evm_denom="akava", eip712_allowed_msgs=(SEND,)))
        loaded = subspace.get_param_set()
        assert loaded.evm_denom == "akava"
        assert loaded.eip712_allowed_msgs == ()

    def test_param_set_needs_key_table(self):
        with pytest.raises(ParamError, match="no key table"):
            ParamSubspace("evm").set_param_set(EvmParams())


# ──────────────────────────────────────────────
# RegistryAuthority
# ──────────────────────────────────────────────


class TestRegistryAuthority:
    def test_starts_empty(self):
        authority = RegistryAuthority()
        assert authority.epoch == 0
        assert len(authority.registry) == 0

    def test_swap_advances(self):
        authority = RegistryAuthority()
        before = authority.current()
        snapshot = authority.swap(MessageSchemaRegistry.load([SEND]), epoch=1)
        assert authority.current() is snapshot
        assert snapshot.epoch == 1
        assert SEND.type_id in authority.registry
        # a snapshot taken earlier is untouched
        assert len(before.registry) == 0

    @pytest.mark.parametrize("epoch", [0, -1])
    def test_epoch_regression(self, epoch):
        authority = RegistryAuthority()
        with pytest.raises(EpochRegressionError):
            authority.swap(MessageSchemaRegistry.empty(), epoch=epoch)
        assert authority.epoch == 0

    def test_reload_from_subspace(self):
        subspace = ParamSubspace("evm", param_key_table())
        subspace.set(PARAM_STORE_KEY_EIP712_ALLOWED_MSGS, (SEND, DELEGATE))
        authority = RegistryAuthority()
        snapshot = authority.reload_from_subspace(subspace, epoch=5)
        assert snapshot.registry.type_ids() == [SEND.type_id, DELEGATE.type_id]

    def test_reload_unset_is_empty(self):
        authority = RegistryAuthority(MessageSchemaRegistry.load([SEND]))
        snapshot = authority.reload_from_subspace(ParamSubspace("evm", param_key_table()), epoch=1)
        assert len(snapshot.registry) == 0

    def test_readers_see_whole_snapshots(self):
        one = MessageSchemaRegistry.load([SEND])
        two = MessageSchemaRegistry.load([SEND, DELEGATE])
        authority = RegistryAuthority(one, epoch=0)
        seen: list[tuple[int, int]] = []
        stop = threading.Event()

        def reader():
            while not stop.is_set():
                snap = authority.current()
                seen.append((snap.epoch, len(snap.registry)))

        threads = [threading.Thread(target=reader) for _ in range(4)]
        for t in threads:
            t.start()
        for epoch in range(1, 200):
            authority.swap(two if epoch % 2 else one, epoch)
        stop.set()
        for t in threads:
            t.join()

        for epoch, size in seen:
            assert size == (2 if epoch % 2 else 1)

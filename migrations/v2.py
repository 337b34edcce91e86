"""v2 store migration — seeds the EIP-712 allow-list parameter."""

from __future__ import annotations

import structlog

from core.errors import UnregisteredParamKey
from models.schema import EIP712AllowedMsg, NestedType, TypeField
from params.evm_params import PARAM_STORE_KEY_EIP712_ALLOWED_MSGS, param_key_table
from params.subspace import ParamSubspace

logger = structlog.get_logger("migrations.v2")


def _allowed(
    type_id: str,
    value_type_name: str,
    value_types: list[tuple[str, str]],
    nested_types: tuple[NestedType, ...] = (),
) -> EIP712AllowedMsg:
    return EIP712AllowedMsg(
        type_id=type_id,
        value_type_name=value_type_name,
        value_types=tuple(TypeField(name=n, type=t) for n, t in value_types),
        nested_types=nested_types,
    )


_INCENTIVE_SELECTION = (
    NestedType(
        name="IncentiveSelection",
        attrs=(
            TypeField(name="denom", type="string"),
            TypeField(name="multiplier_name", type="string"),
        ),
    ),
)

_CLAIM_WITH_SELECTION = [("sender", "string"), ("denoms_to_claim", "IncentiveSelection[]")]

NEW_ALLOWED_MSGS: tuple[EIP712AllowedMsg, ...] = (
    # x/evmutil
    _allowed(
        "/kava.evmutil.v1beta1.MsgConvertERC20ToCoin",
        "MsgValueEVMConvertERC20ToCoin",
        [("initiator", "string"), ("receiver", "string"), ("kava_erc20_address", "string"), ("amount", "string")],
    ),
    _allowed(
        "/kava.evmutil.v1beta1.MsgConvertCoinToERC20",
        "MsgValueEVMConvertCoinToERC20",
        [("initiator", "string"), ("receiver", "string"), ("amount", "Coin")],
    ),
    # x/earn
    _allowed(
        "/kava.earn.v1beta1.MsgDeposit",
        "MsgValueEarnDeposit",
        [("depositor", "string"), ("amount", "Coin"), ("strategy", "int32")],
    ),
    _allowed(
        "/kava.earn.v1beta1.MsgWithdraw",
        "MsgValueEarnWithdraw",
        [("from", "string"), ("amount", "Coin"), ("strategy", "int32")],
    ),
    # x/staking
    _allowed(
        "/cosmos.staking.v1beta1.MsgDelegate",
        "MsgValueStakingDelegate",
        [("delegator_address", "string"), ("validator_address", "string"), ("amount", "Coin")],
    ),
    _allowed(
        "/cosmos.staking.v1beta1.MsgUndelegate",
        "MsgValueStakingUndelegate",
        [("delegator_address", "string"), ("validator_address", "string"), ("amount", "Coin")],
    ),
    _allowed(
        "/cosmos.staking.v1beta1.MsgBeginRedelegate",
        "MsgValueStakingBeginRedelegate",
        [
            ("delegator_address", "string"),
            ("validator_src_address", "string"),
            ("validator_dst_address", "string"),
            ("amount", "Coin"),
        ],
    ),
    # x/incentive
    _allowed(
        "/kava.incentive.v1beta1.MsgClaimUSDXMintingReward",
        "MsgValueIncentiveClaimUSDXMintingReward",
        [("sender", "string"), ("multiplier_name", "string")],
    ),
    _allowed(
        "/kava.incentive.v1beta1.MsgClaimHardReward",
        "MsgValueIncentiveClaimHardReward",
        _CLAIM_WITH_SELECTION,
        _INCENTIVE_SELECTION,
    ),
    _allowed(
        "/kava.incentive.v1beta1.MsgClaimDelegatorReward",
        "MsgValueIncentiveClaimDelegatorReward",
        _CLAIM_WITH_SELECTION,
        _INCENTIVE_SELECTION,
    ),
    _allowed(
        "/kava.incentive.v1beta1.MsgClaimSwapReward",
        "MsgValueIncentiveClaimSwapReward",
        _CLAIM_WITH_SELECTION,
        _INCENTIVE_SELECTION,
    ),
    _allowed(
        "/kava.incentive.v1beta1.MsgClaimSavingsReward",
        "MsgValueIncentiveClaimSavingsReward",
        _CLAIM_WITH_SELECTION,
        _INCENTIVE_SELECTION,
    ),
    _allowed(
        "/kava.incentive.v1beta1.MsgClaimEarnReward",
        "MsgValueIncentiveClaimEarnReward",
        _CLAIM_WITH_SELECTION,
        _INCENTIVE_SELECTION,
    ),
    # x/router
    _allowed(
        "/kava.router.v1beta1.MsgMintDeposit",
        "MsgValueRouterMintDeposit",
        [("depositor", "string"), ("validator", "string"), ("amount", "Coin")],
    ),
    _allowed(
        "/kava.router.v1beta1.MsgDelegateMintDeposit",
        "MsgValueRouterDelegateMintDeposit",
        [("depositor", "string"), ("validator", "string"), ("amount", "Coin")],
    ),
    _allowed(
        "/kava.router.v1beta1.MsgWithdrawBurn",
        "MsgValueRouterWithdrawBurn",
        [("from", "string"), ("validator", "string"), ("amount", "Coin")],
    ),
    _allowed(
        "/kava.router.v1beta1.MsgWithdrawBurnUndelegate",
        "MsgValueRouterWithdrawBurnUndelegate",
        [("from", "string"), ("validator", "string"), ("amount", "Coin")],
    ),
    # x/gov
    _allowed(
        "/cosmos.gov.v1beta1.MsgVote",
        "MsgValueGovVote",
        [("proposal_id", "uint64"), ("voter", "string"), ("option", "int32")],
    ),
)


def migrate_store(subspace: ParamSubspace) -> None:
    """Seed ``EIP712AllowedMsgs`` with :data:`NEW_ALLOWED_MSGS` if unset.

    A subspace without a key table gets the current one.  A key table
    that does not know the allow-list key is an upgrade wiring bug, so
    the migration fails instead of doing nothing.

    Raises
    ------
    UnregisteredParamKey
        If the subspace key table lacks ``EIP712AllowedMsgs``.
    """
    if not subspace.has_key_table():
        subspace.with_key_table(param_key_table())

    key_table = subspace.key_table
    if key_table is None or PARAM_STORE_KEY_EIP712_ALLOWED_MSGS not in key_table:
        raise UnregisteredParamKey(PARAM_STORE_KEY_EIP712_ALLOWED_MSGS, subspace.name)

    if subspace.has(PARAM_STORE_KEY_EIP712_ALLOWED_MSGS):
        logger.info("migration.v2.skipped", subspace=subspace.name, reason="already set")
        return

    subspace.set(PARAM_STORE_KEY_EIP712_ALLOWED_MSGS, NEW_ALLOWED_MSGS)
    logger.info("migration.v2.applied", subspace=subspace.name, allowed_msgs=len(NEW_ALLOWED_MSGS))

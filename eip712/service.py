"""TypedDataService — request-level entry point for EIP-712 signing data.

Takes one registry snapshot per request, runs the pipeline and logs the
outcome.  Schema and payload errors are the caller's problem and are
re-raised after a warning; an ``InternalFault`` is logged with its
traceback and re-raised untouched.
"""

from __future__ import annotations

from contextlib import contextmanager
from dataclasses import dataclass
from typing import Iterator

import structlog

from core.errors import InternalFault, PayloadError, SchemaError
from legacytx.tx import UnsignedTx
from models.typed_data import FeeDelegationOptions, TypedData
from params.authority import RegistryAuthority

from .assembler import wrap_tx_to_typed_data
from .hasher import TypedDataDigest, hash_typed_data
from .sign_doc import construct_untyped_eip712_data

logger = structlog.get_logger("eip712.service")


@dataclass(frozen=True)
class SignRequest:
    """Everything a wallet needs to sign one transaction."""

    sign_doc: bytes
    typed_data: TypedData
    digest: TypedDataDigest
    epoch: int


class TypedDataService:
    """Builds sign documents, typed data and digests for transactions.

    Parameters
    ----------
    authority:
        Owner of the allow-list registry.
    chain_id:
        EIP-155 chain id for the typed-data domain.
    """

    def __init__(self, authority: RegistryAuthority, chain_id: int) -> None:
        if chain_id < 0:
            raise ValueError("chain_id must be unsigned")
        self._authority = authority
        self._chain_id = chain_id

    @property
    def chain_id(self) -> int:
        return self._chain_id

    @contextmanager
    def _request(self, op: str, tx: UnsignedTx) -> Iterator[None]:
        log = logger.bind(op=op, chain_id=tx.chain_id, msgs=len(tx.msgs))
        try:
            yield
        except (SchemaError, PayloadError) as exc:
            log.warning("service.rejected", error=str(exc), error_type=type(exc).__name__)
            raise
        except InternalFault:
            log.error("service.internal_fault", exc_info=True)
            raise

    def sign_doc(self, tx: UnsignedTx) -> bytes:
        """Canonical legacy sign document with ``msg1..msgN`` fields."""
        with self._request("sign_doc", tx):
            return construct_untyped_eip712_data(
                tx.chain_id,
                tx.account_number,
                tx.sequence,
                tx.timeout_height,
                tx.fee,
                tx.legacy_msgs(),
                tx.memo,
            )

    def prepare(self, tx: UnsignedTx, fee_payer: str | None = None) -> SignRequest:
        """Sign document, typed data and digest for *tx*."""
        snapshot = self._authority.current()
        with self._request("prepare", tx):
            msgs = tx.legacy_msgs()
            sign_doc = construct_untyped_eip712_data(
                tx.chain_id,
                tx.account_number,
                tx.sequence,
                tx.timeout_height,
                tx.fee,
                msgs,
                tx.memo,
            )
            delegation = FeeDelegationOptions(fee_payer=fee_payer) if fee_payer else None
            typed_data = wrap_tx_to_typed_data(
                self._chain_id, msgs, sign_doc, snapshot.registry, delegation
            )
            digest = hash_typed_data(typed_data)

        logger.info(
            "service.prepared",
            chain_id=self._chain_id,
            epoch=snapshot.epoch,
            msgs=len(msgs),
            fee_delegated=delegation is not None,
            digest=digest.digest_hex,
        )
        return SignRequest(sign_doc=sign_doc, typed_data=typed_data, digest=digest, epoch=snapshot.epoch)

    def typed_data(self, tx: UnsignedTx, fee_payer: str | None = None) -> TypedData:
        return self.prepare(tx, fee_payer).typed_data

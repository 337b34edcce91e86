"""RegistryAuthority — owns the allow-list registry for each parameter epoch.

One writer swaps in a whole new snapshot; readers grab the current
snapshot reference without locking and keep using it for their request,
so a reader can never see a half-updated allow-list.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass

import structlog

from core.errors import EpochRegressionError
from eip712.registry import MessageSchemaRegistry

from .evm_params import PARAM_STORE_KEY_EIP712_ALLOWED_MSGS
from .subspace import ParamSubspace

logger = structlog.get_logger("params.authority")


@dataclass(frozen=True)
class RegistrySnapshot:
    """An immutable registry tagged with the epoch it belongs to."""

    epoch: int
    registry: MessageSchemaRegistry


class RegistryAuthority:
    """Single owner of the process-wide allow-list."""

    def __init__(self, registry: MessageSchemaRegistry | None = None, epoch: int = 0) -> None:
        self._snapshot = RegistrySnapshot(epoch=epoch, registry=registry or MessageSchemaRegistry.empty())
        self._write_lock = threading.Lock()

    def current(self) -> RegistrySnapshot:
        return self._snapshot

    @property
    def registry(self) -> MessageSchemaRegistry:
        return self._snapshot.registry

    @property
    def epoch(self) -> int:
        return self._snapshot.epoch

    def swap(self, registry: MessageSchemaRegistry, epoch: int) -> RegistrySnapshot:
        """Replace the registry. *epoch* must be newer than the current one."""
        with self._write_lock:
            current = self._snapshot
            if epoch <= current.epoch:
                raise EpochRegressionError(
                    f"registry epoch must advance: current {current.epoch}, got {epoch}"
                )
            snapshot = RegistrySnapshot(epoch=epoch, registry=registry)
            self._snapshot = snapshot

        logger.info(
            "authority.swapped",
            from_epoch=current.epoch,
            to_epoch=epoch,
            schemas=len(registry),
        )
        return snapshot

    def reload_from_subspace(self, subspace: ParamSubspace, epoch: int) -> RegistrySnapshot:
        """Build a registry from the stored allow-list and swap it in."""
        allowed = subspace.get_if_exists(PARAM_STORE_KEY_EIP712_ALLOWED_MSGS, default=())
        return self.swap(MessageSchemaRegistry.load(allowed), epoch)

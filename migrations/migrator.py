"""Migrator — runs each registered store migration exactly once."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Callable

import structlog

from core.errors import MigrationAlreadyApplied
from params.subspace import ParamSubspace

logger = structlog.get_logger("migrations.migrator")

MigrationHandler = Callable[[ParamSubspace], None]


@dataclass
class AppliedMigration:
    """Record of a migration that ran."""

    from_version: int
    height: int


@dataclass
class Migrator:
    """Registry of ``from_version -> handler`` for one module's subspace."""

    module: str
    handlers: dict[int, MigrationHandler] = field(default_factory=dict)
    applied: dict[int, AppliedMigration] = field(default_factory=dict)

    def register(self, from_version: int, handler: MigrationHandler) -> None:
        if from_version in self.handlers:
            raise ValueError(f"migration {self.module} v{from_version} already registered")
        self.handlers[from_version] = handler

    def run(self, from_version: int, subspace: ParamSubspace, height: int) -> None:
        """Run the migration out of *from_version* at upgrade *height*.

        Raises
        ------
        MigrationAlreadyApplied
            If it already ran, at this height or any other.
        KeyError
            If no migration is registered for *from_version*.
        """
        previous = self.applied.get(from_version)
        if previous is not None:
            raise MigrationAlreadyApplied(
                f"migration {self.module} v{from_version} already applied at height {previous.height}"
            )
        handler = self.handlers[from_version]
        handler(subspace)
        self.applied[from_version] = AppliedMigration(from_version=from_version, height=height)
        logger.info(
            "migrator.applied",
            module=self.module,
            from_version=from_version,
            height=height,
        )

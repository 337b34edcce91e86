"""cosmos-eip712 — store migrations package."""

from .migrator import Migrator
from .v2 import NEW_ALLOWED_MSGS, migrate_store

__all__ = [
    "Migrator",
    "NEW_ALLOWED_MSGS",
    "migrate_store",
]

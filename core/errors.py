"""Error taxonomy for typed-data construction.

``SchemaError`` and ``PayloadError`` are expected during normal operation
(a user submits a message kind that is not allow-listed, a malformed fee)
and are returned to the caller.  ``InternalFault`` means a trusted
collaborator broke its contract and the request must be aborted.
"""

from __future__ import annotations


class EIP712Error(Exception):
    """Base class for recoverable typed-data errors."""


# ── Schema errors ────────────────────────────────────────────────────


class SchemaError(EIP712Error):
    """Raised when a message or schema does not fit the allow-list."""

    def __init__(self, message: str, type_id: str | None = None) -> None:
        super().__init__(message)
        self.type_id = type_id


class DuplicateTypeId(SchemaError):
    """Raised when two allow-list entries share a message type id."""

    def __init__(self, type_id: str) -> None:
        super().__init__(
            f"duplicate eip712 allowed legacy msg type: {type_id}",
            type_id=type_id,
        )


class UnpermittedMessageType(SchemaError):
    """Raised when a message type id is absent from the allow-list."""

    def __init__(self, type_id: str) -> None:
        super().__init__(
            f'eip712 message type "{type_id}" is not permitted',
            type_id=type_id,
        )


class SchemaMismatch(SchemaError):
    """Raised when a message payload disagrees with its declared type."""

    def __init__(self, message: str, type_name: str | None = None) -> None:
        super().__init__(message, type_id=type_name)
        self.type_name = type_name


# ── Payload errors ───────────────────────────────────────────────────


class PayloadError(EIP712Error):
    """Raised when transaction data cannot be decoded or interpreted."""


class MalformedFeePayload(PayloadError):
    """Raised when the tx payload carries no parseable fee object."""

    def __init__(self, message: str = "cannot parse fee from tx data") -> None:
        super().__init__(message)


# ── Parameter store errors ───────────────────────────────────────────


class ParamError(EIP712Error):
    """Base class for parameter subspace errors."""


class UnregisteredParamKey(ParamError):
    """Raised when a key is not registered in the subspace key table."""

    def __init__(self, key: str, subspace: str) -> None:
        super().__init__(
            f"parameter {key} not registered in key table of subspace {subspace}"
        )
        self.key = key
        self.subspace = subspace


class InvalidParamError(ParamError):
    """Raised when a parameter value fails its validator."""


class MigrationAlreadyApplied(ParamError):
    """Raised when a store migration is run twice for the same height."""


class EpochRegressionError(EIP712Error):
    """Raised when a registry swap does not advance the epoch."""


# ── Internal faults ──────────────────────────────────────────────────


class InternalFault(RuntimeError):
    """A trusted collaborator violated its contract.

    Never handled as a user error: the request is aborted and the fault
    propagates to the top-level handler.
    """

    def __init__(self, message: str, cause: Exception | None = None) -> None:
        super().__init__(f"internal fault: {message}")
        self.cause = cause

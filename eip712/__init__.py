"""cosmos-eip712 — eip712 package.

Pipeline: registry lookup -> type graph -> optional fee delegation ->
typed data -> digest.  ``construct_untyped_eip712_data`` builds the
legacy sign document that doubles as the typed-data message.

The request-level facade lives in :mod:`eip712.service`.
"""

from .assembler import typed_data_domain, wrap_tx_to_typed_data
from .fee_delegation import DELEGATED_FEE_FIELDS, patch_fee_delegation
from .hasher import TypedDataDigest, compute_typed_data_hash, encode_type, hash_struct, hash_typed_data
from .registry import MessageSchemaRegistry
from .sign_doc import construct_untyped_eip712_data
from .type_graph import TypeGraphBuilder, extract_msg_types, root_types

__all__ = [
    "DELEGATED_FEE_FIELDS",
    "MessageSchemaRegistry",
    "TypeGraphBuilder",
    "TypedDataDigest",
    "compute_typed_data_hash",
    "construct_untyped_eip712_data",
    "encode_type",
    "extract_msg_types",
    "hash_struct",
    "hash_typed_data",
    "patch_fee_delegation",
    "root_types",
    "typed_data_domain",
    "wrap_tx_to_typed_data",
]

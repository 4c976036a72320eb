"""
Hash Functions

SHA-256 helpers and the domain-separated transaction hash. The signed
preimage is ``network_id || ENVELOPE_TYPE_TX || xdr(transaction)`` where
``network_id`` is the SHA-256 of the network passphrase, so the same
transaction body hashes differently on every network.
"""

import hashlib

from ..runtime.errors import ConfigError, ErrorCode
from .xdr import Transaction, TransactionSignaturePayload


def sha256_bytes(input_bytes: bytes) -> bytes:
    """
    Compute SHA-256 hash of input bytes.

    Args:
        input_bytes: Input bytes to hash

    Returns:
        SHA-256 hash as bytes (32 bytes)
    """
    return hashlib.sha256(input_bytes).digest()


def network_id(passphrase: str) -> bytes:
    """
    Derive the 32-byte network id from a network passphrase.

    Raises:
        ConfigError: If the passphrase is empty
    """
    if not passphrase:
        raise ConfigError("network passphrase is empty", ErrorCode.NETWORK_NOT_SET)
    return sha256_bytes(passphrase.encode("utf-8"))


def transaction_signature_base(tx: Transaction, passphrase: str) -> bytes:
    """
    Build the signature payload preimage for ``tx`` on a network.

    Args:
        tx: Wire transaction body
        passphrase: Network passphrase

    Returns:
        Encoded TransactionSignaturePayload
    """
    return TransactionSignaturePayload(network_id(passphrase), tx).to_xdr_bytes()


def hash_transaction(tx: Transaction, passphrase: str) -> bytes:
    """
    Hash a transaction for signing.

    Args:
        tx: Wire transaction body
        passphrase: Network passphrase

    Returns:
        Transaction hash for signing (32 bytes)
    """
    return sha256_bytes(transaction_signature_base(tx, passphrase))

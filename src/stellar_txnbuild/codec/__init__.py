"""
Ledger Binary Codec Module

Canonical XDR encoding/decoding for transactions and envelopes.

Key components:
- writer.py: XDR primitive writer
- reader.py: XDR primitive reader
- xdr.py: Wire structures for transactions, operations and envelopes
- strkey.py: Base32 account id and seed encoding
- hashes.py: SHA-256 helpers and the network-separated transaction hash
"""

from .hashes import sha256_bytes, network_id, hash_transaction, transaction_signature_base
from .reader import XdrReader
from .writer import XdrWriter
from . import strkey, xdr

__all__ = [
    "XdrReader",
    "XdrWriter",
    "strkey",
    "xdr",
    "sha256_bytes",
    "network_id",
    "hash_transaction",
    "transaction_signature_base",
]

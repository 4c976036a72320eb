"""
Transaction signers.
"""

from .signer import Signer, SignerError
from .ed25519 import Ed25519Signer

__all__ = [
    "Signer",
    "SignerError",
    "Ed25519Signer",
]

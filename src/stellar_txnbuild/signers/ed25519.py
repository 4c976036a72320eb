"""
ED25519 signer implementation.

Signs transaction hashes with an in-memory account keypair.
"""

from typing import Union

from ..crypto.keypair import Keypair
from ..runtime.errors import TxnBuildError
from .signer import Signer, SignerError


class Ed25519Signer(Signer):
    """ED25519 signer implementation."""

    def __init__(self, keypair_or_secret: Union[Keypair, str]):
        """
        Initialize ED25519 signer.

        Args:
            keypair_or_secret: Signing keypair or ``S...`` secret seed
        """
        if isinstance(keypair_or_secret, str):
            keypair_or_secret = Keypair.from_secret(keypair_or_secret)
        if not keypair_or_secret.can_sign():
            raise SignerError(f"keypair {keypair_or_secret.address} has no secret seed")
        self.keypair = keypair_or_secret

    def get_public_key(self) -> bytes:
        return self.keypair.raw_public_key

    def sign(self, digest: bytes) -> bytes:
        """
        Sign a digest with the private key.

        Args:
            digest: Hash to sign

        Returns:
            Raw 64-byte signature
        """
        try:
            return self.keypair.sign(digest)
        except TxnBuildError:
            raise
        except Exception as e:
            raise SignerError(f"ed25519 signing failed: {e}", cause=e) from e

    def verify(self, signature: bytes, digest: bytes) -> bool:
        return self.keypair.verify(digest, signature)

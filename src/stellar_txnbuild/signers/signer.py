"""
Base signer interface.

A signer is the crypto collaborator of the signing pipeline: given the
32-byte transaction hash it returns a decorated signature. Key material may
live in memory, in a hardware module or behind a remote service; the
pipeline only sees this interface.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from ..codec import strkey
from ..codec.xdr import DecoratedSignature
from ..runtime.errors import CryptoError


class SignerError(CryptoError):
    """Base exception for signer operations."""
    pass


class Signer(ABC):
    """
    Base signer interface.
    """

    @abstractmethod
    def get_public_key(self) -> bytes:
        """
        Get the raw 32-byte public key.

        Returns:
            Public key bytes
        """
        pass

    @abstractmethod
    def sign(self, digest: bytes) -> bytes:
        """
        Sign a digest.

        Args:
            digest: 32-byte hash to sign

        Returns:
            Signature bytes

        Raises:
            SignerError: If signing fails
        """
        pass

    @abstractmethod
    def verify(self, signature: bytes, digest: bytes) -> bool:
        """
        Verify a signature against a digest.

        Args:
            signature: Signature bytes to verify
            digest: 32-byte hash that was signed

        Returns:
            True if signature is valid
        """
        pass

    def get_address(self) -> str:
        """The signer's account address."""
        return strkey.encode_account_id(self.get_public_key())

    def hint(self) -> bytes:
        """Signature hint: the last four bytes of the public key."""
        return self.get_public_key()[-4:]

    def sign_decorated(self, digest: bytes) -> DecoratedSignature:
        """
        Sign a digest and attach the key hint.

        Args:
            digest: 32-byte transaction hash

        Returns:
            DecoratedSignature ready to append to an envelope
        """
        return DecoratedSignature(hint=self.hint(), signature=self.sign(digest))

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self.get_address()}')"


__all__ = [
    "Signer",
    "SignerError",
]

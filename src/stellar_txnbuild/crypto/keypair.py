"""
Account keypairs.

A Keypair binds an Ed25519 public key to its ``G...`` address and, when the
secret is known, to its ``S...`` seed. Address-only keypairs can verify but
not sign.
"""

from __future__ import annotations
from typing import Optional

from ..codec import strkey
from ..codec.xdr import DecoratedSignature, PublicKey, SignerKey, SignerKeyType
from ..runtime.errors import CryptoError, ErrorCode
from .ed25519 import Ed25519PrivateKey, Ed25519PublicKey


class Keypair:
    """Ed25519 account keypair."""

    def __init__(self, public_key: Ed25519PublicKey, private_key: Optional[Ed25519PrivateKey] = None):
        self._public_key = public_key
        self._private_key = private_key

    @classmethod
    def from_secret(cls, secret: str) -> Keypair:
        """
        Create a signing keypair from an ``S...`` secret seed.

        Args:
            secret: StrKey-encoded seed

        Returns:
            Keypair able to sign
        """
        return cls.from_raw_seed(strkey.decode_seed(secret))

    @classmethod
    def from_raw_seed(cls, seed: bytes) -> Keypair:
        """Create a signing keypair from a raw 32-byte seed."""
        private_key = Ed25519PrivateKey(seed)
        return cls(private_key.public_key(), private_key)

    @classmethod
    def from_address(cls, address: str) -> Keypair:
        """Create a verify-only keypair from a ``G...`` address."""
        return cls(Ed25519PublicKey(strkey.decode_account_id(address)))

    @classmethod
    def random(cls) -> Keypair:
        """Generate a fresh random signing keypair."""
        private_key = Ed25519PrivateKey.generate()
        return cls(private_key.public_key(), private_key)

    @property
    def address(self) -> str:
        return strkey.encode_account_id(self._public_key.to_bytes())

    @property
    def secret(self) -> str:
        if self._private_key is None:
            raise CryptoError("keypair has no secret seed", ErrorCode.INVALID_KEY)
        return strkey.encode_seed(self._private_key.to_bytes())

    @property
    def raw_public_key(self) -> bytes:
        return self._public_key.to_bytes()

    def can_sign(self) -> bool:
        return self._private_key is not None

    def hint(self) -> bytes:
        """Last four bytes of the public key, used as the signature hint."""
        return self._public_key.to_bytes()[-4:]

    def xdr_account_id(self) -> PublicKey:
        return PublicKey(self._public_key.to_bytes())

    def xdr_signer_key(self) -> SignerKey:
        return SignerKey(SignerKeyType.ED25519, self._public_key.to_bytes())

    def sign(self, data: bytes) -> bytes:
        """
        Sign ``data`` with the secret seed.

        Raises:
            CryptoError: If the keypair is address-only
        """
        if self._private_key is None:
            raise CryptoError(
                f"cannot sign with address-only keypair {self.address}", ErrorCode.SIGNING_FAILED
            )
        return self._private_key.sign(data)

    def sign_decorated(self, data: bytes) -> DecoratedSignature:
        """Sign ``data`` and pair the signature with this key's hint."""
        return DecoratedSignature(hint=self.hint(), signature=self.sign(data))

    def verify(self, data: bytes, signature: bytes) -> bool:
        return self._public_key.verify(signature, data)

    def __eq__(self, other) -> bool:
        if not isinstance(other, Keypair):
            return False
        return self._public_key == other._public_key

    def __hash__(self) -> int:
        return hash(self._public_key)

    def __repr__(self) -> str:
        return f"Keypair('{self.address}', can_sign={self.can_sign()})"

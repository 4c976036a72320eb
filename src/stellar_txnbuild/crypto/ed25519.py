"""
Ed25519 keys.

Account keys are raw 32-byte Ed25519 public keys and 32-byte seeds; the
signatures they produce are 64 bytes. The curve arithmetic is done by the
``cryptography`` package.
"""

from __future__ import annotations
import os

from cryptography.exceptions import InvalidSignature
from cryptography.hazmat.primitives import serialization
from cryptography.hazmat.primitives.asymmetric.ed25519 import (
    Ed25519PrivateKey as _RawPrivateKey,
    Ed25519PublicKey as _RawPublicKey,
)

from ..runtime.errors import CryptoError, ErrorCode

KEY_BYTES = 32
SIGNATURE_BYTES = 64


class Ed25519Error(CryptoError):
    """Malformed key material."""

    default_code = ErrorCode.INVALID_KEY


def _require_key_bytes(raw: bytes, what: str) -> bytes:
    if len(raw) != KEY_BYTES:
        raise Ed25519Error(f"{what} must be {KEY_BYTES} bytes, got {len(raw)}")
    return bytes(raw)


class Ed25519PublicKey:
    """Verifying half of an account key."""

    def __init__(self, raw: bytes):
        """
        Args:
            raw: 32-byte public key, as carried in an account address

        Raises:
            Ed25519Error: If the bytes are not a valid curve point encoding
        """
        self._raw = _require_key_bytes(raw, "Ed25519 public key")
        try:
            self._key = _RawPublicKey.from_public_bytes(self._raw)
        except ValueError as e:
            raise Ed25519Error(f"invalid Ed25519 public key: {e}", cause=e) from e

    def to_bytes(self) -> bytes:
        return self._raw

    def verify(self, signature: bytes, message: bytes) -> bool:
        """True if ``signature`` is this key's signature over ``message``."""
        if len(signature) != SIGNATURE_BYTES:
            return False
        try:
            self._key.verify(signature, message)
        except InvalidSignature:
            return False
        return True

    def __eq__(self, other) -> bool:
        return isinstance(other, Ed25519PublicKey) and self._raw == other._raw

    def __hash__(self) -> int:
        return hash(self._raw)

    def __repr__(self) -> str:
        return f"Ed25519PublicKey({self._raw.hex()!r})"


class Ed25519PrivateKey:
    """Signing key derived from a 32-byte seed."""

    def __init__(self, seed: bytes):
        """
        Args:
            seed: 32-byte seed, as carried in an ``S...`` secret

        Raises:
            Ed25519Error: If the seed has the wrong length
        """
        self._seed = _require_key_bytes(seed, "Ed25519 seed")
        self._key = _RawPrivateKey.from_private_bytes(self._seed)
        raw_public = self._key.public_key().public_bytes(
            encoding=serialization.Encoding.Raw,
            format=serialization.PublicFormat.Raw,
        )
        self._public_key = Ed25519PublicKey(raw_public)

    @classmethod
    def generate(cls) -> Ed25519PrivateKey:
        """New key from a random seed."""
        return cls(os.urandom(KEY_BYTES))

    def to_bytes(self) -> bytes:
        """The seed."""
        return self._seed

    def public_key(self) -> Ed25519PublicKey:
        return self._public_key

    def sign(self, message: bytes) -> bytes:
        """Deterministic 64-byte signature over ``message``."""
        return self._key.sign(message)

    def __repr__(self) -> str:
        # never print the seed
        return f"Ed25519PrivateKey(public={self._public_key.to_bytes().hex()!r})"

"""
StrKey address encoding.

Account ids and secret seeds travel as base32 strings made of a version
byte, the 32-byte key and a CRC16-XModem checksum (little-endian).
"""

from __future__ import annotations
import base64
import binascii
import struct
from enum import IntEnum

from ..runtime.errors import EncodingError, ErrorCode

KEY_LENGTH = 32
ENCODED_LENGTH = 56


class VersionByte(IntEnum):
    """StrKey version bytes; the first base32 character follows from them."""

    ACCOUNT_ID = 6 << 3   # 'G'
    SEED = 18 << 3        # 'S'


def crc16_xmodem(data: bytes) -> int:
    """CRC16-XModem (poly 0x1021, init 0) as used by StrKey checksums."""
    crc = 0
    for byte in data:
        crc ^= byte << 8
        for _ in range(8):
            if crc & 0x8000:
                crc = ((crc << 1) ^ 0x1021) & 0xFFFF
            else:
                crc = (crc << 1) & 0xFFFF
    return crc


def encode_check(version: VersionByte, payload: bytes) -> str:
    """
    Encode a payload under a version byte.

    Args:
        version: Version byte selecting the key kind
        payload: Raw 32-byte key

    Returns:
        56-character base32 StrKey
    """
    if len(payload) != KEY_LENGTH:
        raise EncodingError(f"strkey payload must be {KEY_LENGTH} bytes, got {len(payload)}",
                            ErrorCode.INVALID_ADDRESS)
    body = bytes([version]) + payload
    checksum = struct.pack("<H", crc16_xmodem(body))
    return base64.b32encode(body + checksum).decode("ascii")


def decode_check(version: VersionByte, encoded: str) -> bytes:
    """
    Decode and verify a StrKey.

    Args:
        version: Expected version byte
        encoded: StrKey string

    Returns:
        Raw 32-byte key

    Raises:
        EncodingError: On bad length, alphabet, version byte or checksum
    """
    if not isinstance(encoded, str) or len(encoded) != ENCODED_LENGTH:
        raise EncodingError(f"invalid strkey length for {encoded!r}", ErrorCode.INVALID_ADDRESS)
    try:
        raw = base64.b32decode(encoded.encode("ascii"), casefold=False)
    except (binascii.Error, UnicodeEncodeError, ValueError) as e:
        raise EncodingError(f"invalid base32 in strkey {encoded!r}", ErrorCode.INVALID_ADDRESS, cause=e) from e

    body, checksum = raw[:-2], raw[-2:]
    if body[0] != version:
        raise EncodingError(
            f"invalid version byte: expected {version.name}, got {body[0]}",
            ErrorCode.INVALID_ADDRESS,
        )
    if struct.pack("<H", crc16_xmodem(body)) != checksum:
        raise EncodingError(f"invalid checksum in strkey {encoded!r}", ErrorCode.INVALID_ADDRESS)
    return body[1:]


def encode_account_id(public_key: bytes) -> str:
    """Encode a raw ed25519 public key as a ``G...`` address."""
    return encode_check(VersionByte.ACCOUNT_ID, public_key)


def decode_account_id(address: str) -> bytes:
    """Decode a ``G...`` address into the raw ed25519 public key."""
    return decode_check(VersionByte.ACCOUNT_ID, address)


def encode_seed(seed: bytes) -> str:
    """Encode a raw ed25519 seed as an ``S...`` secret."""
    return encode_check(VersionByte.SEED, seed)


def decode_seed(secret: str) -> bytes:
    """Decode an ``S...`` secret into the raw ed25519 seed."""
    return decode_check(VersionByte.SEED, secret)


def is_valid_account_id(address: str) -> bool:
    """Check whether ``address`` is a well-formed account id."""
    try:
        decode_account_id(address)
    except EncodingError:
        return False
    return True


__all__ = [
    "VersionByte",
    "crc16_xmodem",
    "encode_check",
    "decode_check",
    "encode_account_id",
    "decode_account_id",
    "encode_seed",
    "decode_seed",
    "is_valid_account_id",
]

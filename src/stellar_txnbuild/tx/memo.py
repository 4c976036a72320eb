"""
Transaction memos.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import Union

from ..codec.xdr import Memo as XdrMemo, MemoType, MEMO_TEXT_MAX_BYTES
from ..runtime.errors import EncodingError, ErrorCode
from .amount import MAX_UINT64

MEMO_HASH_BYTES = 32


class Memo(ABC):
    """Memo capability: convert to the wire memo."""

    @abstractmethod
    def to_xdr(self) -> XdrMemo:
        pass


class MemoText(Memo):
    """UTF-8 text of at most 28 bytes."""

    def __init__(self, text: str):
        self.text = text

    def to_xdr(self) -> XdrMemo:
        if not isinstance(self.text, str):
            raise EncodingError("memo text must be a string", ErrorCode.INVALID_MEMO)
        size = len(self.text.encode("utf-8"))
        if size > MEMO_TEXT_MAX_BYTES:
            raise EncodingError(f"memo text is {size} bytes, limit is {MEMO_TEXT_MAX_BYTES}",
                                ErrorCode.INVALID_MEMO)
        return XdrMemo(MemoType.TEXT, text=self.text)


class MemoID(Memo):
    """Unsigned 64-bit id."""

    def __init__(self, id: int):
        self.id = id

    def to_xdr(self) -> XdrMemo:
        if isinstance(self.id, bool) or not isinstance(self.id, int) or not 0 <= self.id <= MAX_UINT64:
            raise EncodingError(f"memo id {self.id!r} is not a uint64", ErrorCode.INVALID_MEMO)
        return XdrMemo(MemoType.ID, id=self.id)


class _HashMemo(Memo):
    memo_type = MemoType.HASH

    def __init__(self, value: Union[bytes, bytearray]):
        self.value = bytes(value)

    def to_xdr(self) -> XdrMemo:
        if len(self.value) > MEMO_HASH_BYTES:
            raise EncodingError(
                f"{self.__class__.__name__} is {len(self.value)} bytes, limit is {MEMO_HASH_BYTES}",
                ErrorCode.INVALID_MEMO,
            )
        # shorter inputs are right-padded with zeros
        return XdrMemo(self.memo_type, hash=self.value.ljust(MEMO_HASH_BYTES, b"\x00"))


class MemoHash(_HashMemo):
    """32-byte hash, e.g. of a document the transaction refers to."""

    memo_type = MemoType.HASH


class MemoReturn(_HashMemo):
    """32-byte hash of the transaction being refunded."""

    memo_type = MemoType.RETURN


def memo_to_xdr(memo) -> XdrMemo:
    """Wire memo for an optional memo; absent encodes as MEMO_NONE."""
    if memo is None:
        return XdrMemo()
    return memo.to_xdr()


__all__ = [
    "Memo",
    "MemoText",
    "MemoID",
    "MemoHash",
    "MemoReturn",
    "memo_to_xdr",
]

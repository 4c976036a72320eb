"""
XDR Reader

Decodes the primitives written by XdrWriter. Reading past the end of the
buffer, a non-zero padding byte or an over-long variable field is reported
as EncodingError with the UNMARSHAL_ERROR code.
"""

import builtins
import struct
from typing import Optional

from ..runtime.errors import EncodingError, ErrorCode


class XdrReader:
    """
    XDR reader over an in-memory buffer.
    """

    def __init__(self, buf: builtins.bytes):
        """
        Initialize reader with byte buffer.

        Args:
            buf: Byte buffer to read from
        """
        self._buf = bytes(buf)
        self._off = 0

    @property
    def eof(self) -> bool:
        """True once the whole buffer has been consumed."""
        return self._off >= len(self._buf)

    def _take(self, n: int) -> builtins.bytes:
        if self._off + n > len(self._buf):
            raise EncodingError(
                f"buffer overflow: attempting to read {n} bytes at offset {self._off}",
                ErrorCode.UNMARSHAL_ERROR,
            )
        out = self._buf[self._off : self._off + n]
        self._off += n
        return out

    def _skip_padding(self, n: int) -> None:
        pad = (4 - n % 4) % 4
        if pad and self._take(pad) != b"\x00" * pad:
            raise EncodingError("non-zero XDR padding", ErrorCode.UNMARSHAL_ERROR)

    def u32(self) -> int:
        """Read unsigned 32-bit integer."""
        return struct.unpack(">I", self._take(4))[0]

    def i32(self) -> int:
        """Read signed 32-bit integer."""
        return struct.unpack(">i", self._take(4))[0]

    def u64(self) -> int:
        """Read unsigned 64-bit integer."""
        return struct.unpack(">Q", self._take(8))[0]

    def i64(self) -> int:
        """Read signed 64-bit integer."""
        return struct.unpack(">q", self._take(8))[0]

    def boolean(self) -> bool:
        """Read a boolean; only 0 and 1 are valid encodings."""
        v = self.u32()
        if v not in (0, 1):
            raise EncodingError(f"invalid XDR boolean {v}", ErrorCode.UNMARSHAL_ERROR)
        return v == 1

    def fixed_opaque(self, size: int) -> builtins.bytes:
        """Read fixed-length opaque data of ``size`` bytes plus padding."""
        out = self._take(size)
        self._skip_padding(size)
        return out

    def var_opaque(self, max_len: Optional[int] = None) -> builtins.bytes:
        """Read variable-length opaque data."""
        n = self.u32()
        if max_len is not None and n > max_len:
            raise EncodingError(f"opaque length {n} exceeds limit of {max_len}", ErrorCode.UNMARSHAL_ERROR)
        out = self._take(n)
        self._skip_padding(n)
        return out

    def string(self, max_len: Optional[int] = None) -> str:
        """Read a UTF-8 string."""
        raw = self.var_opaque(max_len)
        try:
            return raw.decode("utf-8")
        except UnicodeDecodeError as e:
            raise EncodingError("invalid UTF-8 in XDR string", ErrorCode.UNMARSHAL_ERROR, cause=e) from e

    def optional(self) -> bool:
        """Read the presence flag of an optional value."""
        return self.boolean()

    def expect_eof(self) -> None:
        """Fail if unread bytes remain."""
        if not self.eof:
            raise EncodingError(
                f"{len(self._buf) - self._off} trailing bytes after XDR value",
                ErrorCode.UNMARSHAL_ERROR,
            )

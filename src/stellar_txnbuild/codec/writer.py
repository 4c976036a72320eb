"""
XDR Writer

Implements the External Data Representation (RFC 4506) primitives used by
the ledger wire format: big-endian integers, booleans, fixed and variable
length opaque data and strings, all padded to 4-byte boundaries.
"""

import struct
from typing import List, Optional

from ..runtime.errors import EncodingError, ErrorCode

_UINT32_MAX = 0xFFFFFFFF
_UINT64_MAX = 0xFFFFFFFFFFFFFFFF
_INT32_MIN, _INT32_MAX = -(2 ** 31), 2 ** 31 - 1
_INT64_MIN, _INT64_MAX = -(2 ** 63), 2 ** 63 - 1


def _padding(n: int) -> int:
    return (4 - n % 4) % 4


class XdrWriter:
    """
    XDR writer accumulating encoded bytes.

    Every method validates its input range and raises EncodingError rather
    than silently truncating, so a value that does not fit its wire type
    never reaches the encoded output.
    """

    def __init__(self):
        """Initialize writer with empty byte buffer."""
        self._bb: List[bytes] = []

    def u32(self, v: int) -> None:
        """
        Write unsigned 32-bit integer (big-endian).

        Args:
            v: Integer value to write (0 .. 2**32-1)
        """
        if not 0 <= v <= _UINT32_MAX:
            raise EncodingError(f"value {v} out of range for uint32", ErrorCode.MARSHAL_ERROR)
        self._bb.append(struct.pack(">I", v))

    def i32(self, v: int) -> None:
        """
        Write signed 32-bit integer (big-endian, two's complement).

        Args:
            v: Integer value to write
        """
        if not _INT32_MIN <= v <= _INT32_MAX:
            raise EncodingError(f"value {v} out of range for int32", ErrorCode.MARSHAL_ERROR)
        self._bb.append(struct.pack(">i", v))

    def u64(self, v: int) -> None:
        """
        Write unsigned 64-bit integer (big-endian).

        Args:
            v: Integer value to write (0 .. 2**64-1)
        """
        if not 0 <= v <= _UINT64_MAX:
            raise EncodingError(f"value {v} out of range for uint64", ErrorCode.MARSHAL_ERROR)
        self._bb.append(struct.pack(">Q", v))

    def i64(self, v: int) -> None:
        """
        Write signed 64-bit integer (big-endian, two's complement).

        Args:
            v: Integer value to write
        """
        if not _INT64_MIN <= v <= _INT64_MAX:
            raise EncodingError(f"value {v} out of range for int64", ErrorCode.MARSHAL_ERROR)
        self._bb.append(struct.pack(">q", v))

    def boolean(self, v: bool) -> None:
        """Write a boolean as a 32-bit 0 or 1."""
        self.u32(1 if v else 0)

    def fixed_opaque(self, v: bytes, size: int) -> None:
        """
        Write fixed-length opaque data, padded to a multiple of four bytes.

        Args:
            v: Bytes to write, exactly ``size`` long
            size: Declared length of the field
        """
        if len(v) != size:
            raise EncodingError(f"fixed opaque expects {size} bytes, got {len(v)}", ErrorCode.MARSHAL_ERROR)
        self._bb.append(bytes(v))
        self._bb.append(b"\x00" * _padding(size))

    def var_opaque(self, v: bytes, max_len: Optional[int] = None) -> None:
        """
        Write variable-length opaque data: uint32 length, data, padding.

        Args:
            v: Bytes to write
            max_len: Declared upper bound of the field, if any
        """
        if max_len is not None and len(v) > max_len:
            raise EncodingError(f"opaque data of {len(v)} bytes exceeds limit of {max_len}", ErrorCode.MARSHAL_ERROR)
        self.u32(len(v))
        self._bb.append(bytes(v))
        self._bb.append(b"\x00" * _padding(len(v)))

    def string(self, s: str, max_len: Optional[int] = None) -> None:
        """
        Write a string as variable-length opaque UTF-8 bytes.

        Args:
            s: String to write
            max_len: Declared upper bound in bytes, if any
        """
        self.var_opaque(s.encode("utf-8"), max_len)

    def optional(self, present: bool) -> bool:
        """Write the presence flag of an optional value and return it."""
        self.boolean(present)
        return present

    def to_bytes(self) -> bytes:
        """
        Return accumulated bytes as immutable bytes object.

        Returns:
            Bytes containing all written data
        """
        return b"".join(self._bb)

"""
Tests for the XDR primitives and wire structures.
"""

import pytest

from stellar_txnbuild.codec import XdrReader, XdrWriter
from stellar_txnbuild.codec.xdr import (
    Asset, AssetType, DecoratedSignature, Memo, MemoType, Operation, OperationType, PublicKey,
    TimeBounds, Transaction, TransactionEnvelope, BumpSequenceOp, MAX_OPERATIONS,
)
from stellar_txnbuild.runtime.errors import EncodingError, ErrorCode

KEY = bytes(range(32))


class TestWriter:
    """Tests for XdrWriter primitives."""

    def test_integers_are_big_endian(self):
        w = XdrWriter()
        w.u32(1)
        w.i32(-1)
        w.u64(2)
        w.i64(-2)
        assert w.to_bytes() == (
            b"\x00\x00\x00\x01" + b"\xff\xff\xff\xff"
            + b"\x00" * 7 + b"\x02" + b"\xff" * 7 + b"\xfe"
        )

    @pytest.mark.parametrize("method,value", [
        ("u32", -1), ("u32", 2**32), ("i32", 2**31), ("u64", 2**64), ("i64", -(2**63) - 1),
    ])
    def test_out_of_range(self, method, value):
        with pytest.raises(EncodingError) as exc_info:
            getattr(XdrWriter(), method)(value)
        assert exc_info.value.code == ErrorCode.MARSHAL_ERROR

    def test_var_opaque_is_padded(self):
        w = XdrWriter()
        w.var_opaque(b"Apple")
        assert w.to_bytes() == b"\x00\x00\x00\x05Apple\x00\x00\x00"

    def test_var_opaque_limit(self):
        with pytest.raises(EncodingError):
            XdrWriter().var_opaque(b"x" * 5, max_len=4)

    def test_fixed_opaque_size_mismatch(self):
        with pytest.raises(EncodingError):
            XdrWriter().fixed_opaque(b"abc", 4)

    def test_string_counts_utf8_bytes(self):
        w = XdrWriter()
        w.string("é")
        assert w.to_bytes() == b"\x00\x00\x00\x02\xc3\xa9\x00\x00"


class TestReader:
    """Tests for XdrReader primitives."""

    def test_reads_what_writer_wrote(self):
        w = XdrWriter()
        w.u32(7)
        w.i64(-5)
        w.boolean(True)
        w.string("Fruit")
        r = XdrReader(w.to_bytes())
        assert (r.u32(), r.i64(), r.boolean(), r.string()) == (7, -5, True, "Fruit")
        assert r.eof

    def test_short_buffer(self):
        with pytest.raises(EncodingError) as exc_info:
            XdrReader(b"\x00\x00").u32()
        assert exc_info.value.code == ErrorCode.UNMARSHAL_ERROR

    def test_nonzero_padding(self):
        with pytest.raises(EncodingError, match="padding"):
            XdrReader(b"\x00\x00\x00\x01a\x01\x00\x00").var_opaque()

    def test_invalid_boolean(self):
        with pytest.raises(EncodingError):
            XdrReader(b"\x00\x00\x00\x02").boolean()

    def test_trailing_bytes(self):
        r = XdrReader(b"\x00\x00\x00\x01\x00")
        r.u32()
        with pytest.raises(EncodingError, match="trailing"):
            r.expect_eof()


def _transaction(**overrides):
    fields = dict(
        source_account=PublicKey(KEY),
        fee=100,
        seq_num=3556091187167236,
        time_bounds=TimeBounds(0, 0),
        memo=Memo(),
        operations=(Operation(OperationType.INFLATION),),
    )
    fields.update(overrides)
    return Transaction(**fields)


class TestStructures:
    """Tests for wire structures."""

    def test_transaction_layout(self):
        raw = _transaction().to_xdr_bytes()
        assert raw[:4] == b"\x00\x00\x00\x00"          # key type ed25519
        assert raw[4:36] == KEY
        assert raw[36:40] == b"\x00\x00\x00\x64"       # fee
        assert raw[48:52] == b"\x00\x00\x00\x01"       # timebounds present
        assert raw[-4:] == b"\x00\x00\x00\x00"         # ext

    def test_absent_timebounds(self):
        with_tb = _transaction().to_xdr_bytes()
        without_tb = _transaction(time_bounds=None).to_xdr_bytes()
        assert len(with_tb) - len(without_tb) == 16

    def test_envelope_decode(self):
        sig = DecoratedSignature(b"\x01\x02\x03\x04", b"s" * 64)
        envelope = TransactionEnvelope(_transaction(memo=Memo(MemoType.TEXT, text="hi")), (sig,))
        assert TransactionEnvelope.from_base64(envelope.to_base64()) == envelope

    def test_credit_asset_decode(self):
        asset = Asset(AssetType.CREDIT_ALPHANUM12, b"ABCDE".ljust(12, b"\x00"), PublicKey(KEY))
        assert Asset.from_xdr_bytes(asset.to_xdr_bytes()) == asset

    def test_operation_body_type_is_checked(self):
        with pytest.raises(EncodingError):
            Operation(OperationType.INFLATION, BumpSequenceOp(1))
        with pytest.raises(EncodingError):
            Operation(OperationType.BUMP_SEQUENCE, None)

    def test_operation_limit(self):
        ops = (Operation(OperationType.INFLATION),) * (MAX_OPERATIONS + 1)
        with pytest.raises(EncodingError):
            _transaction(operations=ops).to_xdr_bytes()

    def test_invalid_base64(self):
        with pytest.raises(EncodingError) as exc_info:
            TransactionEnvelope.from_base64("not base64!")
        assert exc_info.value.code == ErrorCode.UNMARSHAL_ERROR

    def test_unknown_operation_discriminant(self):
        raw = bytearray(_transaction().to_xdr_bytes())
        # operation type of the single operation sits right before ext
        raw[-5] = 0x63
        with pytest.raises(EncodingError, match="unknown OperationType"):
            Transaction.from_xdr_bytes(bytes(raw))

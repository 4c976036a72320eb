"""
Wire-level transaction structures.

Frozen dataclasses mirroring the ledger's XDR definitions for transactions,
operations and envelopes. Each structure knows how to pack itself into an
XdrWriter and unpack itself from an XdrReader; sequences are stored as
tuples so every value is hashable and compares by content.
"""

from __future__ import annotations
import base64
import binascii
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Optional, Tuple, Type, TypeVar, Union, Dict

from ..runtime.errors import EncodingError, ErrorCode
from . import strkey
from .reader import XdrReader
from .writer import XdrWriter

T = TypeVar("T", bound="XdrStruct")

MAX_OPERATIONS = 100
MAX_SIGNATURES = 20
MAX_PATH_LENGTH = 5
MEMO_TEXT_MAX_BYTES = 28
DATA_NAME_MAX_BYTES = 64
DATA_VALUE_MAX_BYTES = 64
HOME_DOMAIN_MAX_BYTES = 32
SIGNATURE_MAX_BYTES = 64


class PublicKeyType(IntEnum):
    ED25519 = 0


class AssetType(IntEnum):
    NATIVE = 0
    CREDIT_ALPHANUM4 = 1
    CREDIT_ALPHANUM12 = 2


class MemoType(IntEnum):
    NONE = 0
    TEXT = 1
    ID = 2
    HASH = 3
    RETURN = 4


class SignerKeyType(IntEnum):
    ED25519 = 0
    PRE_AUTH_TX = 1
    HASH_X = 2


class EnvelopeType(IntEnum):
    """Domain-separation tags prefixed to signed payloads."""

    SCP = 1
    TX = 2
    AUTH = 3


class OperationType(IntEnum):
    """Operation discriminants; the closed set of supported operation kinds."""

    CREATE_ACCOUNT = 0
    PAYMENT = 1
    PATH_PAYMENT = 2
    MANAGE_OFFER = 3
    CREATE_PASSIVE_OFFER = 4
    SET_OPTIONS = 5
    CHANGE_TRUST = 6
    ALLOW_TRUST = 7
    ACCOUNT_MERGE = 8
    INFLATION = 9
    MANAGE_DATA = 10
    BUMP_SEQUENCE = 11


def _unpack_enum(enum_cls, raw: int):
    try:
        return enum_cls(raw)
    except ValueError as e:
        raise EncodingError(f"unknown {enum_cls.__name__} discriminant {raw}",
                            ErrorCode.UNMARSHAL_ERROR, cause=e) from e


class XdrStruct:
    """Mixin giving every wire structure byte and base64 round trips."""

    def pack(self, w: XdrWriter) -> None:
        raise NotImplementedError

    @classmethod
    def unpack(cls: Type[T], r: XdrReader) -> T:
        raise NotImplementedError

    def to_xdr_bytes(self) -> bytes:
        w = XdrWriter()
        self.pack(w)
        return w.to_bytes()

    @classmethod
    def from_xdr_bytes(cls: Type[T], data: bytes) -> T:
        r = XdrReader(data)
        value = cls.unpack(r)
        r.expect_eof()
        return value

    def to_base64(self) -> str:
        return base64.b64encode(self.to_xdr_bytes()).decode("ascii")

    @classmethod
    def from_base64(cls: Type[T], encoded: str) -> T:
        try:
            data = base64.b64decode(encoded, validate=True)
        except (binascii.Error, ValueError) as e:
            raise EncodingError("invalid base64 XDR", ErrorCode.UNMARSHAL_ERROR, cause=e) from e
        return cls.from_xdr_bytes(data)


# =============================================================================
# Keys and assets
# =============================================================================

@dataclass(frozen=True)
class PublicKey(XdrStruct):
    """Ed25519 public key; the wire form of an AccountID."""

    ed25519: bytes

    @classmethod
    def from_address(cls, address: str) -> PublicKey:
        return cls(strkey.decode_account_id(address))

    def to_address(self) -> str:
        return strkey.encode_account_id(self.ed25519)

    def pack(self, w: XdrWriter) -> None:
        w.i32(PublicKeyType.ED25519)
        w.fixed_opaque(self.ed25519, 32)

    @classmethod
    def unpack(cls, r: XdrReader) -> PublicKey:
        _unpack_enum(PublicKeyType, r.i32())
        return cls(r.fixed_opaque(32))


AccountID = PublicKey


@dataclass(frozen=True)
class Asset(XdrStruct):
    """Native lumens or an issued credit asset (code padded with zeros)."""

    type: AssetType
    code: Optional[bytes] = None
    issuer: Optional[PublicKey] = None

    def pack(self, w: XdrWriter) -> None:
        w.i32(self.type)
        if self.type == AssetType.NATIVE:
            return
        w.fixed_opaque(self.code, 4 if self.type == AssetType.CREDIT_ALPHANUM4 else 12)
        self.issuer.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> Asset:
        asset_type = _unpack_enum(AssetType, r.i32())
        if asset_type == AssetType.NATIVE:
            return cls(asset_type)
        code = r.fixed_opaque(4 if asset_type == AssetType.CREDIT_ALPHANUM4 else 12)
        return cls(asset_type, code, PublicKey.unpack(r))


@dataclass(frozen=True)
class AllowTrustAsset(XdrStruct):
    """Asset code without issuer, as carried by AllowTrust."""

    type: AssetType
    code: bytes

    def pack(self, w: XdrWriter) -> None:
        if self.type == AssetType.NATIVE:
            raise EncodingError("allow trust asset cannot be native", ErrorCode.MARSHAL_ERROR)
        w.i32(self.type)
        w.fixed_opaque(self.code, 4 if self.type == AssetType.CREDIT_ALPHANUM4 else 12)

    @classmethod
    def unpack(cls, r: XdrReader) -> AllowTrustAsset:
        asset_type = _unpack_enum(AssetType, r.i32())
        if asset_type == AssetType.NATIVE:
            raise EncodingError("allow trust asset cannot be native", ErrorCode.UNMARSHAL_ERROR)
        return cls(asset_type, r.fixed_opaque(4 if asset_type == AssetType.CREDIT_ALPHANUM4 else 12))


@dataclass(frozen=True)
class Price(XdrStruct):
    n: int
    d: int

    def pack(self, w: XdrWriter) -> None:
        w.i32(self.n)
        w.i32(self.d)

    @classmethod
    def unpack(cls, r: XdrReader) -> Price:
        return cls(r.i32(), r.i32())


@dataclass(frozen=True)
class SignerKey(XdrStruct):
    type: SignerKeyType
    key: bytes

    def pack(self, w: XdrWriter) -> None:
        w.i32(self.type)
        w.fixed_opaque(self.key, 32)

    @classmethod
    def unpack(cls, r: XdrReader) -> SignerKey:
        return cls(_unpack_enum(SignerKeyType, r.i32()), r.fixed_opaque(32))


@dataclass(frozen=True)
class Signer(XdrStruct):
    key: SignerKey
    weight: int

    def pack(self, w: XdrWriter) -> None:
        self.key.pack(w)
        w.u32(self.weight)

    @classmethod
    def unpack(cls, r: XdrReader) -> Signer:
        return cls(SignerKey.unpack(r), r.u32())


# =============================================================================
# Transaction header fields
# =============================================================================

@dataclass(frozen=True)
class TimeBounds(XdrStruct):
    min_time: int
    max_time: int

    def pack(self, w: XdrWriter) -> None:
        w.u64(self.min_time)
        w.u64(self.max_time)

    @classmethod
    def unpack(cls, r: XdrReader) -> TimeBounds:
        return cls(r.u64(), r.u64())


@dataclass(frozen=True)
class Memo(XdrStruct):
    """Tagged memo; exactly one payload field is set for non-NONE types."""

    type: MemoType = MemoType.NONE
    text: Optional[str] = None
    id: Optional[int] = None
    hash: Optional[bytes] = None

    def pack(self, w: XdrWriter) -> None:
        w.i32(self.type)
        if self.type == MemoType.TEXT:
            w.string(self.text, MEMO_TEXT_MAX_BYTES)
        elif self.type == MemoType.ID:
            w.u64(self.id)
        elif self.type in (MemoType.HASH, MemoType.RETURN):
            w.fixed_opaque(self.hash, 32)

    @classmethod
    def unpack(cls, r: XdrReader) -> Memo:
        memo_type = _unpack_enum(MemoType, r.i32())
        if memo_type == MemoType.TEXT:
            return cls(memo_type, text=r.string(MEMO_TEXT_MAX_BYTES))
        if memo_type == MemoType.ID:
            return cls(memo_type, id=r.u64())
        if memo_type in (MemoType.HASH, MemoType.RETURN):
            return cls(memo_type, hash=r.fixed_opaque(32))
        return cls(memo_type)


# =============================================================================
# Operation bodies
# =============================================================================

@dataclass(frozen=True)
class CreateAccountOp(XdrStruct):
    destination: PublicKey
    starting_balance: int

    def pack(self, w: XdrWriter) -> None:
        self.destination.pack(w)
        w.i64(self.starting_balance)

    @classmethod
    def unpack(cls, r: XdrReader) -> CreateAccountOp:
        return cls(PublicKey.unpack(r), r.i64())


@dataclass(frozen=True)
class PaymentOp(XdrStruct):
    destination: PublicKey
    asset: Asset
    amount: int

    def pack(self, w: XdrWriter) -> None:
        self.destination.pack(w)
        self.asset.pack(w)
        w.i64(self.amount)

    @classmethod
    def unpack(cls, r: XdrReader) -> PaymentOp:
        return cls(PublicKey.unpack(r), Asset.unpack(r), r.i64())


@dataclass(frozen=True)
class PathPaymentOp(XdrStruct):
    send_asset: Asset
    send_max: int
    destination: PublicKey
    dest_asset: Asset
    dest_amount: int
    path: Tuple[Asset, ...] = ()

    def pack(self, w: XdrWriter) -> None:
        self.send_asset.pack(w)
        w.i64(self.send_max)
        self.destination.pack(w)
        self.dest_asset.pack(w)
        w.i64(self.dest_amount)
        if len(self.path) > MAX_PATH_LENGTH:
            raise EncodingError(f"path of {len(self.path)} assets exceeds limit of {MAX_PATH_LENGTH}",
                                ErrorCode.MARSHAL_ERROR)
        w.u32(len(self.path))
        for asset in self.path:
            asset.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> PathPaymentOp:
        send_asset = Asset.unpack(r)
        send_max = r.i64()
        destination = PublicKey.unpack(r)
        dest_asset = Asset.unpack(r)
        dest_amount = r.i64()
        n = r.u32()
        if n > MAX_PATH_LENGTH:
            raise EncodingError(f"path length {n} exceeds limit", ErrorCode.UNMARSHAL_ERROR)
        path = tuple(Asset.unpack(r) for _ in range(n))
        return cls(send_asset, send_max, destination, dest_asset, dest_amount, path)


@dataclass(frozen=True)
class ManageOfferOp(XdrStruct):
    selling: Asset
    buying: Asset
    amount: int
    price: Price
    offer_id: int = 0

    def pack(self, w: XdrWriter) -> None:
        self.selling.pack(w)
        self.buying.pack(w)
        w.i64(self.amount)
        self.price.pack(w)
        w.u64(self.offer_id)

    @classmethod
    def unpack(cls, r: XdrReader) -> ManageOfferOp:
        return cls(Asset.unpack(r), Asset.unpack(r), r.i64(), Price.unpack(r), r.u64())


@dataclass(frozen=True)
class CreatePassiveOfferOp(XdrStruct):
    selling: Asset
    buying: Asset
    amount: int
    price: Price

    def pack(self, w: XdrWriter) -> None:
        self.selling.pack(w)
        self.buying.pack(w)
        w.i64(self.amount)
        self.price.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> CreatePassiveOfferOp:
        return cls(Asset.unpack(r), Asset.unpack(r), r.i64(), Price.unpack(r))


@dataclass(frozen=True)
class SetOptionsOp(XdrStruct):
    """Every field is optional on the wire and encoded with a presence flag."""

    inflation_dest: Optional[PublicKey] = None
    clear_flags: Optional[int] = None
    set_flags: Optional[int] = None
    master_weight: Optional[int] = None
    low_threshold: Optional[int] = None
    med_threshold: Optional[int] = None
    high_threshold: Optional[int] = None
    home_domain: Optional[str] = None
    signer: Optional[Signer] = None

    _UINT_FIELDS = ("clear_flags", "set_flags", "master_weight",
                    "low_threshold", "med_threshold", "high_threshold")

    def pack(self, w: XdrWriter) -> None:
        if w.optional(self.inflation_dest is not None):
            self.inflation_dest.pack(w)
        for name in self._UINT_FIELDS:
            value = getattr(self, name)
            if w.optional(value is not None):
                w.u32(value)
        if w.optional(self.home_domain is not None):
            w.string(self.home_domain, HOME_DOMAIN_MAX_BYTES)
        if w.optional(self.signer is not None):
            self.signer.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> SetOptionsOp:
        fields: Dict[str, object] = {}
        fields["inflation_dest"] = PublicKey.unpack(r) if r.optional() else None
        for name in cls._UINT_FIELDS:
            fields[name] = r.u32() if r.optional() else None
        fields["home_domain"] = r.string(HOME_DOMAIN_MAX_BYTES) if r.optional() else None
        fields["signer"] = Signer.unpack(r) if r.optional() else None
        return cls(**fields)


@dataclass(frozen=True)
class ChangeTrustOp(XdrStruct):
    line: Asset
    limit: int

    def pack(self, w: XdrWriter) -> None:
        self.line.pack(w)
        w.i64(self.limit)

    @classmethod
    def unpack(cls, r: XdrReader) -> ChangeTrustOp:
        return cls(Asset.unpack(r), r.i64())


@dataclass(frozen=True)
class AllowTrustOp(XdrStruct):
    trustor: PublicKey
    asset: AllowTrustAsset
    authorize: bool

    def pack(self, w: XdrWriter) -> None:
        self.trustor.pack(w)
        self.asset.pack(w)
        w.boolean(self.authorize)

    @classmethod
    def unpack(cls, r: XdrReader) -> AllowTrustOp:
        return cls(PublicKey.unpack(r), AllowTrustAsset.unpack(r), r.boolean())


@dataclass(frozen=True)
class ManageDataOp(XdrStruct):
    data_name: str
    data_value: Optional[bytes] = None

    def pack(self, w: XdrWriter) -> None:
        w.string(self.data_name, DATA_NAME_MAX_BYTES)
        if w.optional(self.data_value is not None):
            w.var_opaque(self.data_value, DATA_VALUE_MAX_BYTES)

    @classmethod
    def unpack(cls, r: XdrReader) -> ManageDataOp:
        name = r.string(DATA_NAME_MAX_BYTES)
        value = r.var_opaque(DATA_VALUE_MAX_BYTES) if r.optional() else None
        return cls(name, value)


@dataclass(frozen=True)
class BumpSequenceOp(XdrStruct):
    bump_to: int

    def pack(self, w: XdrWriter) -> None:
        w.i64(self.bump_to)

    @classmethod
    def unpack(cls, r: XdrReader) -> BumpSequenceOp:
        return cls(r.i64())


OperationBodyValue = Union[
    CreateAccountOp, PaymentOp, PathPaymentOp, ManageOfferOp, CreatePassiveOfferOp,
    SetOptionsOp, ChangeTrustOp, AllowTrustOp, PublicKey, ManageDataOp, BumpSequenceOp,
]

# Inflation carries no body; account merge carries the bare destination key.
OPERATION_BODY_TYPES: Dict[OperationType, Optional[Type[XdrStruct]]] = {
    OperationType.CREATE_ACCOUNT: CreateAccountOp,
    OperationType.PAYMENT: PaymentOp,
    OperationType.PATH_PAYMENT: PathPaymentOp,
    OperationType.MANAGE_OFFER: ManageOfferOp,
    OperationType.CREATE_PASSIVE_OFFER: CreatePassiveOfferOp,
    OperationType.SET_OPTIONS: SetOptionsOp,
    OperationType.CHANGE_TRUST: ChangeTrustOp,
    OperationType.ALLOW_TRUST: AllowTrustOp,
    OperationType.ACCOUNT_MERGE: PublicKey,
    OperationType.INFLATION: None,
    OperationType.MANAGE_DATA: ManageDataOp,
    OperationType.BUMP_SEQUENCE: BumpSequenceOp,
}


@dataclass(frozen=True)
class Operation(XdrStruct):
    """A wire operation: optional per-operation source plus a tagged body."""

    type: OperationType
    body: Optional[OperationBodyValue] = None
    source_account: Optional[PublicKey] = None

    def __post_init__(self):
        expected = OPERATION_BODY_TYPES[self.type]
        if expected is None:
            if self.body is not None:
                raise EncodingError(f"{self.type.name} carries no body", ErrorCode.MARSHAL_ERROR)
        elif not isinstance(self.body, expected):
            raise EncodingError(
                f"{self.type.name} body must be {expected.__name__}, got {type(self.body).__name__}",
                ErrorCode.MARSHAL_ERROR,
            )

    def pack(self, w: XdrWriter) -> None:
        if w.optional(self.source_account is not None):
            self.source_account.pack(w)
        w.i32(self.type)
        if self.body is not None:
            self.body.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> Operation:
        source = PublicKey.unpack(r) if r.optional() else None
        op_type = _unpack_enum(OperationType, r.i32())
        body_cls = OPERATION_BODY_TYPES[op_type]
        body = body_cls.unpack(r) if body_cls is not None else None
        return cls(op_type, body, source)


# =============================================================================
# Transaction and envelope
# =============================================================================

@dataclass(frozen=True)
class Transaction(XdrStruct):
    """The signable transaction body."""

    source_account: PublicKey
    fee: int
    seq_num: int
    time_bounds: Optional[TimeBounds] = None
    memo: Memo = field(default_factory=Memo)
    operations: Tuple[Operation, ...] = ()

    def pack(self, w: XdrWriter) -> None:
        self.source_account.pack(w)
        w.u32(self.fee)
        w.i64(self.seq_num)
        if w.optional(self.time_bounds is not None):
            self.time_bounds.pack(w)
        self.memo.pack(w)
        if len(self.operations) > MAX_OPERATIONS:
            raise EncodingError(f"{len(self.operations)} operations exceed limit of {MAX_OPERATIONS}",
                                ErrorCode.MARSHAL_ERROR)
        w.u32(len(self.operations))
        for op in self.operations:
            op.pack(w)
        # ext: reserved union, only arm 0 is defined
        w.i32(0)

    @classmethod
    def unpack(cls, r: XdrReader) -> Transaction:
        source = PublicKey.unpack(r)
        fee = r.u32()
        seq_num = r.i64()
        time_bounds = TimeBounds.unpack(r) if r.optional() else None
        memo = Memo.unpack(r)
        n = r.u32()
        if n > MAX_OPERATIONS:
            raise EncodingError(f"operation count {n} exceeds limit", ErrorCode.UNMARSHAL_ERROR)
        operations = tuple(Operation.unpack(r) for _ in range(n))
        ext = r.i32()
        if ext != 0:
            raise EncodingError(f"unsupported transaction ext {ext}", ErrorCode.UNMARSHAL_ERROR)
        return cls(source, fee, seq_num, time_bounds, memo, operations)


@dataclass(frozen=True)
class DecoratedSignature(XdrStruct):
    """Signature plus the last four bytes of the signing public key."""

    hint: bytes
    signature: bytes

    def pack(self, w: XdrWriter) -> None:
        w.fixed_opaque(self.hint, 4)
        w.var_opaque(self.signature, SIGNATURE_MAX_BYTES)

    @classmethod
    def unpack(cls, r: XdrReader) -> DecoratedSignature:
        return cls(r.fixed_opaque(4), r.var_opaque(SIGNATURE_MAX_BYTES))


@dataclass(frozen=True)
class TransactionEnvelope(XdrStruct):
    """A transaction body with its ordered signatures."""

    tx: Transaction
    signatures: Tuple[DecoratedSignature, ...] = ()

    def pack(self, w: XdrWriter) -> None:
        self.tx.pack(w)
        if len(self.signatures) > MAX_SIGNATURES:
            raise EncodingError(f"{len(self.signatures)} signatures exceed limit of {MAX_SIGNATURES}",
                                ErrorCode.MARSHAL_ERROR)
        w.u32(len(self.signatures))
        for sig in self.signatures:
            sig.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> TransactionEnvelope:
        tx = Transaction.unpack(r)
        n = r.u32()
        if n > MAX_SIGNATURES:
            raise EncodingError(f"signature count {n} exceeds limit", ErrorCode.UNMARSHAL_ERROR)
        return cls(tx, tuple(DecoratedSignature.unpack(r) for _ in range(n)))


@dataclass(frozen=True)
class TransactionSignaturePayload(XdrStruct):
    """The preimage hashed for signing: network id, envelope tag, transaction."""

    network_id: bytes
    tx: Transaction

    def pack(self, w: XdrWriter) -> None:
        w.fixed_opaque(self.network_id, 32)
        w.i32(EnvelopeType.TX)
        self.tx.pack(w)

    @classmethod
    def unpack(cls, r: XdrReader) -> TransactionSignaturePayload:
        network_id = r.fixed_opaque(32)
        tag = _unpack_enum(EnvelopeType, r.i32())
        if tag != EnvelopeType.TX:
            raise EncodingError(f"unsupported envelope type {tag.name}", ErrorCode.UNMARSHAL_ERROR)
        return cls(network_id, Transaction.unpack(r))

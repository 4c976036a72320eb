"""
Operation contract and registry.

Every operation variant converts itself to the wire Operation through
``build_xdr()``. Variants are a closed set keyed by OperationType; defining
a second class for an already registered type is an error.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import ClassVar, Dict, Optional, Type

from ...codec import strkey
from ...codec.xdr import Operation as XdrOperation, OperationType, PublicKey, OperationBodyValue
from ...runtime.errors import EncodingError, ValidationError, ErrorCode
from ..amount import parse_amount, AmountLike, MAX_INT64
from ..asset import Asset

OPERATION_REGISTRY: Dict[OperationType, Type["Operation"]] = {}


class Operation(ABC):
    """
    Base class for all operations.

    Subclasses set ``operation_type`` and implement ``build_body()``.
    ``source_account`` optionally overrides the transaction source for
    this operation only.
    """

    operation_type: ClassVar[OperationType]
    source_account: Optional[str]

    def __init_subclass__(cls, **kwargs):
        super().__init_subclass__(**kwargs)
        op_type = cls.__dict__.get("operation_type")
        if op_type is None:
            return
        existing = OPERATION_REGISTRY.get(op_type)
        if existing is not None:
            raise TypeError(
                f"operation type {op_type.name} already registered to {existing.__name__}"
            )
        OPERATION_REGISTRY[op_type] = cls

    @abstractmethod
    def build_body(self) -> Optional[OperationBodyValue]:
        """Validate the fields and return the wire body."""
        pass

    def build_xdr(self) -> XdrOperation:
        """
        Return the fully configured wire operation.

        Raises:
            ValidationError: If a field breaks an operation rule
            EncodingError: If an address or asset cannot be encoded
        """
        body = self.build_body()
        source = None
        if getattr(self, "source_account", None):
            source = account_id(self.source_account, "source account")
        return XdrOperation(self.operation_type, body, source)

    @property
    def kind(self) -> str:
        return type(self).__name__


def lookup_operation(op_type: OperationType) -> Type[Operation]:
    """Return the operation class registered for a wire type."""
    try:
        return OPERATION_REGISTRY[OperationType(op_type)]
    except (KeyError, ValueError) as e:
        raise ValidationError(f"no operation registered for type {op_type}",
                              ErrorCode.INVALID_OPERATION, cause=e) from e


def account_id(address: str, field_name: str) -> PublicKey:
    """Decode an account address, naming the field on failure."""
    try:
        return PublicKey(strkey.decode_account_id(address))
    except EncodingError as e:
        raise e.wrap(f"failed to set {field_name} address") from e


def stroops(value: AmountLike, field_name: str) -> int:
    try:
        return parse_amount(value)
    except ValidationError as e:
        raise e.wrap(f"failed to parse {field_name}") from e


def require_asset(asset: Optional[Asset], message: str) -> Asset:
    if asset is None:
        raise ValidationError(message, ErrorCode.INVALID_ASSET)
    return asset


def require_int(value, field_name: str, low: int, high: int) -> int:
    if isinstance(value, bool) or not isinstance(value, int) or not low <= value <= high:
        raise ValidationError(f"{field_name} {value!r} out of range [{low}, {high}]",
                              ErrorCode.INVALID_OPERATION)
    return value


__all__ = [
    "Operation",
    "OPERATION_REGISTRY",
    "lookup_operation",
]

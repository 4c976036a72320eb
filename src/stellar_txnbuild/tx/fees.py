"""
Transaction fee policy.

The fee of a transaction is linear in its operation count: ``base_fee``
stroops per operation, unless the caller sets an explicit non-zero fee.
"""

from __future__ import annotations
from typing import Optional

from pydantic import BaseModel, Field, ValidationError as PydanticValidationError

from ..config import DEFAULT_BASE_FEE, get_config
from ..runtime.errors import ValidationError, ErrorCode

MAX_FEE = 0xFFFFFFFF


class FeePolicy(BaseModel):
    """Per-operation fee parameters."""

    base_fee: int = Field(default=DEFAULT_BASE_FEE, ge=1, le=MAX_FEE,
                          description="Fee per operation in stroops")

    model_config = {"frozen": True}

    @classmethod
    def with_base_fee(cls, base_fee: int) -> FeePolicy:
        """
        Policy charging ``base_fee`` per operation.

        Raises:
            ValidationError: If the base fee is not a positive uint32
        """
        try:
            return cls(base_fee=base_fee)
        except PydanticValidationError as e:
            raise ValidationError(f"invalid base fee {base_fee!r}", ErrorCode.INVALID_FEE, cause=e) from e

    @classmethod
    def from_config(cls) -> FeePolicy:
        """Policy using the active config's base fee."""
        return cls.with_base_fee(get_config().base_fee)

    def compute_fee(self, operation_count: int, explicit_fee: Optional[int] = None) -> int:
        """
        Compute the total transaction fee.

        Args:
            operation_count: Number of operations in the transaction
            explicit_fee: Caller override; ``None`` or ``0`` means unset

        Returns:
            Fee in stroops

        Raises:
            ValidationError: If the fee does not fit the wire's uint32
        """
        if explicit_fee:
            fee = explicit_fee
        else:
            fee = self.base_fee * operation_count
        if fee < 0 or fee > MAX_FEE:
            raise ValidationError(f"fee {fee} out of range [0, {MAX_FEE}]", ErrorCode.INVALID_FEE,
                                  {"operation_count": operation_count})
        return fee


def compute_fee(operation_count: int, explicit_fee: Optional[int] = None,
                base_fee: int = DEFAULT_BASE_FEE) -> int:
    """Compute a fee with an ad-hoc base fee."""
    return FeePolicy.with_base_fee(base_fee).compute_fee(operation_count, explicit_fee)


__all__ = [
    "FeePolicy",
    "DEFAULT_BASE_FEE",
    "MAX_FEE",
    "compute_fee",
]

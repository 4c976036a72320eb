"""
Payment operations.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from typing import List, Optional

from ...codec.xdr import PaymentOp, PathPaymentOp, OperationType, MAX_PATH_LENGTH
from ...runtime.errors import ValidationError, ErrorCode
from ..amount import AmountLike
from ..asset import Asset
from .base import Operation, account_id, stroops, require_asset


@dataclass
class Payment(Operation):
    """Send ``amount`` of ``asset`` to ``destination``."""

    operation_type = OperationType.PAYMENT

    destination: str = ""
    amount: AmountLike = "0"
    asset: Optional[Asset] = None
    source_account: Optional[str] = None

    def build_body(self) -> PaymentOp:
        destination = account_id(self.destination, "destination")
        asset = require_asset(self.asset, "you must specify an asset for payment")
        return PaymentOp(destination, asset.to_xdr(), stroops(self.amount, "amount"))


@dataclass
class PathPayment(Operation):
    """
    Send at most ``send_max`` of ``send_asset`` so that ``destination``
    receives exactly ``dest_amount`` of ``dest_asset``, converting through
    the intermediate assets in ``path``.
    """

    operation_type = OperationType.PATH_PAYMENT

    send_asset: Optional[Asset] = None
    send_max: AmountLike = "0"
    destination: str = ""
    dest_asset: Optional[Asset] = None
    dest_amount: AmountLike = "0"
    path: List[Asset] = field(default_factory=list)
    source_account: Optional[str] = None

    def build_body(self) -> PathPaymentOp:
        send_asset = require_asset(self.send_asset, "you must specify an asset to send for path payment")
        dest_asset = require_asset(self.dest_asset, "you must specify a destination asset for path payment")
        if len(self.path) > MAX_PATH_LENGTH:
            raise ValidationError(
                f"path payment path has {len(self.path)} assets, limit is {MAX_PATH_LENGTH}",
                ErrorCode.INVALID_OPERATION,
            )
        return PathPaymentOp(
            send_asset=send_asset.to_xdr(),
            send_max=stroops(self.send_max, "send max"),
            destination=account_id(self.destination, "destination"),
            dest_asset=dest_asset.to_xdr(),
            dest_amount=stroops(self.dest_amount, "destination amount"),
            path=tuple(asset.to_xdr() for asset in self.path),
        )


__all__ = [
    "Payment",
    "PathPayment",
]

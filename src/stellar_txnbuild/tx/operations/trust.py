"""
Trustline operations.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ...codec.xdr import ChangeTrustOp, AllowTrustOp, OperationType
from ...runtime.errors import ValidationError, ErrorCode
from ..amount import AmountLike
from ..asset import Asset, CreditAsset
from .base import Operation, account_id, stroops, require_asset, MAX_INT64


@dataclass
class ChangeTrust(Operation):
    """Create, update or (with limit 0) remove a trustline."""

    operation_type = OperationType.CHANGE_TRUST

    line: Optional[Asset] = None
    limit: Optional[AmountLike] = None
    source_account: Optional[str] = None

    def build_body(self) -> ChangeTrustOp:
        line = require_asset(self.line, "you must specify an asset for the trustline")
        if line.is_native():
            raise ValidationError("trustline cannot be extended to a native (XLM) asset",
                                  ErrorCode.INVALID_ASSET)
        limit = MAX_INT64 if self.limit is None else stroops(self.limit, "limit")
        return ChangeTrustOp(line.to_xdr(), limit)


def remove_trustline_op(asset: Asset, source_account: Optional[str] = None) -> ChangeTrust:
    """ChangeTrust that removes the trustline to ``asset``."""
    return ChangeTrust(line=asset, limit="0", source_account=source_account)


@dataclass
class AllowTrust(Operation):
    """Authorize or deauthorize ``trustor`` to hold an asset issued by the source."""

    operation_type = OperationType.ALLOW_TRUST

    trustor: str = ""
    type: Optional[Asset] = None
    authorize: bool = False
    source_account: Optional[str] = None

    def build_body(self) -> AllowTrustOp:
        trustor = account_id(self.trustor, "trustor")
        asset = require_asset(self.type, "you must specify an asset for allow trust")
        if asset.is_native() or not isinstance(asset, CreditAsset):
            raise ValidationError("trustline doesn't exist for a native (XLM) asset",
                                  ErrorCode.INVALID_ASSET)
        return AllowTrustOp(trustor, asset.to_allow_trust_asset(), bool(self.authorize))


__all__ = [
    "ChangeTrust",
    "AllowTrust",
    "remove_trustline_op",
]

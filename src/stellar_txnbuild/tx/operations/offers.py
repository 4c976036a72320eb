"""
Offer operations and the helpers for the common offer life cycle.
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional

from ...codec.xdr import ManageOfferOp, CreatePassiveOfferOp, OperationType, Price
from ...runtime.errors import ValidationError, ErrorCode
from ..amount import AmountLike, PriceLike, parse_price, MAX_UINT64
from ..asset import Asset, NativeAsset, CreditAsset
from .base import Operation, stroops, require_asset, require_int

# Deleting an offer only needs its id; the ledger ignores the assets, so
# any well-formed pair will do.
_DELETE_SELLING = NativeAsset()
_DELETE_BUYING = CreditAsset("FAKE", "GBAQPADEYSKYMYXTMASBUIS5JI3LMOAWSTM2CHGDBJ3QDDPNCSO3DVAA")


def _price(value: PriceLike) -> Price:
    try:
        return parse_price(value)
    except ValidationError as e:
        raise e.wrap("failed to parse price") from e


def _assets(selling: Optional[Asset], buying: Optional[Asset]):
    selling = require_asset(selling, "you must specify a selling asset for the offer")
    buying = require_asset(buying, "you must specify a buying asset for the offer")
    return selling.to_xdr(), buying.to_xdr()


@dataclass
class ManageOffer(Operation):
    """Create (``offer_id=0``), update or delete (amount 0) an offer."""

    operation_type = OperationType.MANAGE_OFFER

    selling: Optional[Asset] = None
    buying: Optional[Asset] = None
    amount: AmountLike = "0"
    price: PriceLike = "1"
    offer_id: int = 0
    source_account: Optional[str] = None

    def build_body(self) -> ManageOfferOp:
        selling, buying = _assets(self.selling, self.buying)
        return ManageOfferOp(
            selling=selling,
            buying=buying,
            amount=stroops(self.amount, "amount"),
            price=_price(self.price),
            offer_id=require_int(self.offer_id, "offer id", 0, MAX_UINT64),
        )


def create_offer_op(selling: Asset, buying: Asset, amount: AmountLike, price: PriceLike,
                    source_account: Optional[str] = None) -> ManageOffer:
    """ManageOffer creating a new offer."""
    return ManageOffer(selling, buying, amount, price, 0, source_account)


def update_offer_op(selling: Asset, buying: Asset, amount: AmountLike, price: PriceLike,
                    offer_id: int, source_account: Optional[str] = None) -> ManageOffer:
    """ManageOffer replacing the terms of offer ``offer_id``."""
    if offer_id == 0:
        raise ValidationError("updating an offer requires a non-zero offer id", ErrorCode.INVALID_OPERATION)
    return ManageOffer(selling, buying, amount, price, offer_id, source_account)


def delete_offer_op(offer_id: int, source_account: Optional[str] = None) -> ManageOffer:
    """ManageOffer removing offer ``offer_id``."""
    return ManageOffer(_DELETE_SELLING, _DELETE_BUYING, "0", "1", offer_id, source_account)


@dataclass
class CreatePassiveOffer(Operation):
    """Offer that does not take offers of equal price."""

    operation_type = OperationType.CREATE_PASSIVE_OFFER

    selling: Optional[Asset] = None
    buying: Optional[Asset] = None
    amount: AmountLike = "0"
    price: PriceLike = "1"
    source_account: Optional[str] = None

    def build_body(self) -> CreatePassiveOfferOp:
        selling, buying = _assets(self.selling, self.buying)
        return CreatePassiveOfferOp(
            selling=selling,
            buying=buying,
            amount=stroops(self.amount, "amount"),
            price=_price(self.price),
        )


__all__ = [
    "ManageOffer",
    "CreatePassiveOffer",
    "create_offer_op",
    "update_offer_op",
    "delete_offer_op",
]

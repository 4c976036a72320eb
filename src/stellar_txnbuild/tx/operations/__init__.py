"""
Operation variants.

Importing this package registers every supported operation type.
"""

from .base import Operation, OPERATION_REGISTRY, lookup_operation
from .accounts import (
    AccountFlag, AccountSigner, CreateAccount, AccountMerge, Inflation,
    SetOptions, ManageData, BumpSequence,
)
from .payments import Payment, PathPayment
from .offers import ManageOffer, CreatePassiveOffer, create_offer_op, update_offer_op, delete_offer_op
from .trust import ChangeTrust, AllowTrust, remove_trustline_op

__all__ = [
    "Operation",
    "OPERATION_REGISTRY",
    "lookup_operation",
    "AccountFlag",
    "AccountSigner",
    "CreateAccount",
    "AccountMerge",
    "Inflation",
    "SetOptions",
    "ManageData",
    "BumpSequence",
    "Payment",
    "PathPayment",
    "ManageOffer",
    "CreatePassiveOffer",
    "create_offer_op",
    "update_offer_op",
    "delete_offer_op",
    "ChangeTrust",
    "AllowTrust",
    "remove_trustline_op",
]

"""
Transaction building.

Key components:
- account.py: Source account capability
- asset.py / amount.py: Assets, amounts and prices
- memo.py: Memo variants
- timebounds.py: Validity window and its factories
- fees.py: Fee policy
- operations/: Operation variants
- transaction.py: Builder, signing pipeline and envelope serializer
"""

from .account import Account, SimpleAccount, HorizonAccount
from .amount import parse_amount, format_amount, parse_price
from .asset import Asset, NativeAsset, CreditAsset
from .fees import FeePolicy, DEFAULT_BASE_FEE, compute_fee
from .memo import Memo, MemoText, MemoID, MemoHash, MemoReturn
from .operations import *  # noqa: F401,F403
from .operations import __all__ as _operations_all
from .timebounds import Timebounds, TIMEOUT_INFINITE, set_timebounds, set_timeout, set_no_timeout
from .transaction import Transaction, BuiltTransaction, SignedTransaction, TransactionState

__all__ = [
    "Account",
    "SimpleAccount",
    "HorizonAccount",
    "parse_amount",
    "format_amount",
    "parse_price",
    "Asset",
    "NativeAsset",
    "CreditAsset",
    "FeePolicy",
    "DEFAULT_BASE_FEE",
    "compute_fee",
    "Memo",
    "MemoText",
    "MemoID",
    "MemoHash",
    "MemoReturn",
    "Timebounds",
    "TIMEOUT_INFINITE",
    "set_timebounds",
    "set_timeout",
    "set_no_timeout",
    "Transaction",
    "BuiltTransaction",
    "SignedTransaction",
    "TransactionState",
] + list(_operations_all)

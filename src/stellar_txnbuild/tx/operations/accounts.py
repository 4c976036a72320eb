"""
Account-level operations: creation, merge, options, data entries,
sequence bumps and inflation.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntFlag
from typing import Iterable, Optional, Union

from ...codec.xdr import (
    CreateAccountOp, SetOptionsOp, ManageDataOp, BumpSequenceOp, OperationType,
    Signer as XdrSigner, SignerKey, SignerKeyType,
    DATA_NAME_MAX_BYTES, DATA_VALUE_MAX_BYTES, HOME_DOMAIN_MAX_BYTES,
)
from ...runtime.errors import ValidationError, ErrorCode
from ..amount import AmountLike, MAX_UINT32
from .base import Operation, account_id, stroops, require_int, MAX_INT64


class AccountFlag(IntFlag):
    """Issuer flags toggled by SetOptions."""

    AUTH_REQUIRED = 1
    AUTH_REVOCABLE = 2
    AUTH_IMMUTABLE = 4


FlagsLike = Union[int, Iterable[AccountFlag]]


def _combine_flags(flags: Optional[FlagsLike], field_name: str) -> Optional[int]:
    if flags is None:
        return None
    if isinstance(flags, int):
        combined = int(flags)
    else:
        combined = 0
        for flag in flags:
            combined |= int(flag)
    return require_int(combined, field_name, 0, MAX_UINT32)


@dataclass
class CreateAccount(Operation):
    """Create and fund a new account."""

    operation_type = OperationType.CREATE_ACCOUNT

    destination: str = ""
    amount: AmountLike = "0"
    source_account: Optional[str] = None

    def build_body(self) -> CreateAccountOp:
        return CreateAccountOp(
            account_id(self.destination, "destination"),
            stroops(self.amount, "starting balance"),
        )


@dataclass
class AccountMerge(Operation):
    """Transfer all lumens to ``destination`` and remove the source account."""

    operation_type = OperationType.ACCOUNT_MERGE

    destination: str = ""
    source_account: Optional[str] = None

    def build_body(self):
        return account_id(self.destination, "destination")


@dataclass
class Inflation(Operation):
    """Run the inflation process. Carries no body."""

    operation_type = OperationType.INFLATION

    source_account: Optional[str] = None

    def build_body(self) -> None:
        return None


@dataclass
class AccountSigner:
    """An additional ed25519 signer and its weight."""

    address: str
    weight: int


@dataclass
class SetOptions(Operation):
    """
    Set account options. Only fields that are not None are sent.

    Weights and thresholds are 0-255; a signer with weight 0 is removed.
    """

    operation_type = OperationType.SET_OPTIONS

    inflation_destination: Optional[str] = None
    clear_flags: Optional[FlagsLike] = None
    set_flags: Optional[FlagsLike] = None
    master_weight: Optional[int] = None
    low_threshold: Optional[int] = None
    medium_threshold: Optional[int] = None
    high_threshold: Optional[int] = None
    home_domain: Optional[str] = None
    signer: Optional[AccountSigner] = None
    source_account: Optional[str] = None

    @staticmethod
    def _weight(value: Optional[int], field_name: str) -> Optional[int]:
        if value is None:
            return None
        return require_int(value, field_name, 0, 255)

    def build_body(self) -> SetOptionsOp:
        inflation_dest = None
        if self.inflation_destination is not None:
            inflation_dest = account_id(self.inflation_destination, "inflation destination")

        if self.home_domain is not None:
            size = len(self.home_domain.encode("utf-8"))
            if size > HOME_DOMAIN_MAX_BYTES:
                raise ValidationError(
                    f"home domain is {size} bytes, limit is {HOME_DOMAIN_MAX_BYTES}",
                    ErrorCode.INVALID_OPERATION,
                )

        signer = None
        if self.signer is not None:
            key = account_id(self.signer.address, "signer")
            signer = XdrSigner(
                SignerKey(SignerKeyType.ED25519, key.ed25519),
                require_int(self.signer.weight, "signer weight", 0, 255),
            )

        return SetOptionsOp(
            inflation_dest=inflation_dest,
            clear_flags=_combine_flags(self.clear_flags, "clear flags"),
            set_flags=_combine_flags(self.set_flags, "set flags"),
            master_weight=self._weight(self.master_weight, "master weight"),
            low_threshold=self._weight(self.low_threshold, "low threshold"),
            med_threshold=self._weight(self.medium_threshold, "medium threshold"),
            high_threshold=self._weight(self.high_threshold, "high threshold"),
            home_domain=self.home_domain,
            signer=signer,
        )


@dataclass
class ManageData(Operation):
    """Set, modify or (with ``value=None``) delete a named data entry."""

    operation_type = OperationType.MANAGE_DATA

    name: str = ""
    value: Optional[bytes] = None
    source_account: Optional[str] = None

    def build_body(self) -> ManageDataOp:
        size = len(self.name.encode("utf-8"))
        if not 1 <= size <= DATA_NAME_MAX_BYTES:
            raise ValidationError(f"data name must be 1-{DATA_NAME_MAX_BYTES} bytes, got {size}",
                                  ErrorCode.INVALID_OPERATION)
        value = None
        if self.value is not None:
            value = bytes(self.value)
            if len(value) > DATA_VALUE_MAX_BYTES:
                raise ValidationError(
                    f"data value must be at most {DATA_VALUE_MAX_BYTES} bytes, got {len(value)}",
                    ErrorCode.INVALID_OPERATION,
                )
        return ManageDataOp(self.name, value)


@dataclass
class BumpSequence(Operation):
    """Bump the source account's sequence number to ``bump_to``."""

    operation_type = OperationType.BUMP_SEQUENCE

    bump_to: int = 0
    source_account: Optional[str] = None

    def build_body(self) -> BumpSequenceOp:
        return BumpSequenceOp(require_int(self.bump_to, "bump to", 0, MAX_INT64))


__all__ = [
    "AccountFlag",
    "AccountSigner",
    "CreateAccount",
    "AccountMerge",
    "Inflation",
    "SetOptions",
    "ManageData",
    "BumpSequence",
]

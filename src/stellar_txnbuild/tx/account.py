"""
Source account capability.

The builder needs two things from the source account: its address and
the next sequence number. Where those come from (a cached record, a
ledger query, a test fixture) is the caller's concern.
"""

from __future__ import annotations
from abc import ABC, abstractmethod

from pydantic import BaseModel, Field

from ..runtime.errors import SequenceError
from .amount import MAX_INT64

MAX_SEQUENCE = MAX_INT64


class Account(ABC):
    """Capability consumed by the transaction builder."""

    @abstractmethod
    def get_account_id(self) -> str:
        """The account's ``G...`` address."""
        pass

    @abstractmethod
    def increment_sequence_number(self) -> int:
        """
        Advance the sequence number and return the new value.

        Raises:
            SequenceError: If the sequence cannot be obtained
        """
        pass


class SimpleAccount(Account):
    """In-memory account record."""

    def __init__(self, account_id: str, sequence: int = 0):
        self.account_id = account_id
        self.sequence = sequence

    def get_account_id(self) -> str:
        return self.account_id

    def increment_sequence_number(self) -> int:
        if self.sequence >= MAX_SEQUENCE:
            raise SequenceError(f"sequence number {self.sequence} would overflow int64")
        self.sequence += 1
        return self.sequence

    def __repr__(self) -> str:
        return f"SimpleAccount('{self.account_id}', sequence={self.sequence})"


class HorizonAccount(BaseModel, Account):
    """
    Account as returned by a ledger API, sequence kept as a decimal string.

    Only the fields the builder needs are modelled.
    """

    account_id: str = Field(description="Account address")
    sequence: str = Field(description="Current sequence number as a decimal string")

    model_config = {"populate_by_name": True, "extra": "ignore"}

    def get_account_id(self) -> str:
        return self.account_id

    def increment_sequence_number(self) -> int:
        if not (self.sequence.isascii() and self.sequence.isdigit()):
            raise SequenceError(f"failed to parse sequence number {self.sequence!r}")
        current = int(self.sequence)
        if current >= MAX_SEQUENCE:
            raise SequenceError(f"sequence number {self.sequence} out of range")
        current += 1
        self.sequence = str(current)
        return current


__all__ = [
    "Account",
    "SimpleAccount",
    "HorizonAccount",
]

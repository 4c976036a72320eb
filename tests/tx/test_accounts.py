"""
Unit tests for source account implementations.
"""

import pytest

from stellar_txnbuild.runtime.errors import SequenceError
from stellar_txnbuild.tx.account import HorizonAccount, SimpleAccount, MAX_SEQUENCE

ADDRESS = "GDQNY3PBOJOKYZSRMK2S7LHHGWZIUISD4QORETLMXEWXBI7KFZZMKTL3"


class TestSimpleAccount:

    def test_increment(self):
        account = SimpleAccount(ADDRESS, 7)
        assert account.get_account_id() == ADDRESS
        assert account.increment_sequence_number() == 8
        assert account.increment_sequence_number() == 9
        assert account.sequence == 9

    def test_overflow(self):
        account = SimpleAccount(ADDRESS, MAX_SEQUENCE)
        with pytest.raises(SequenceError):
            account.increment_sequence_number()
        assert account.sequence == MAX_SEQUENCE


class TestHorizonAccount:

    def test_increment_keeps_string_form(self):
        account = HorizonAccount(account_id=ADDRESS, sequence="3556091187167234")
        assert account.increment_sequence_number() == 3556091187167235
        assert account.sequence == "3556091187167235"

    def test_extra_fields_are_ignored(self):
        account = HorizonAccount.model_validate({
            "account_id": ADDRESS,
            "sequence": "1",
            "balances": [],
            "subentry_count": 0,
        })
        assert account.get_account_id() == ADDRESS

    @pytest.mark.parametrize("sequence", ["", "abc", "-1", "1.5", " 1", "\u0661\u0662"])
    def test_malformed_sequence(self, sequence):
        account = HorizonAccount(account_id=ADDRESS, sequence=sequence)
        with pytest.raises(SequenceError):
            account.increment_sequence_number()
        assert account.sequence == sequence

    def test_sequence_at_int64_limit(self):
        account = HorizonAccount(account_id=ADDRESS, sequence=str(MAX_SEQUENCE))
        with pytest.raises(SequenceError):
            account.increment_sequence_number()

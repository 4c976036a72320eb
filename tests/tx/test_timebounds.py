"""
Unit tests for transaction timebounds.

Tests the factories, validation order and how the builder attaches
timebounds to the wire transaction.
"""

import pytest
from datetime import datetime, timezone

from helpers import mk_transaction

from stellar_txnbuild.runtime.errors import BuildError, ConfigError, ValidationError, ErrorCode
from stellar_txnbuild.tx.timebounds import (
    Timebounds, TIMEOUT_INFINITE, set_timebounds, set_timeout, set_no_timeout,
)


class TestFactories:
    """Tests for the Timebounds factories."""

    def test_set_timebounds(self):
        tb = set_timebounds(1, 10)
        assert tb.min_time == 1
        assert tb.max_time == 10
        assert tb.explicitly_constructed

    def test_set_no_timeout(self):
        tb = set_no_timeout(5)
        assert tb.min_time == 5
        assert tb.max_time == TIMEOUT_INFINITE
        assert tb.is_unbounded()

    def test_set_timeout_with_fixed_clock(self):
        tb = set_timeout(0, 300, now=1_700_000_000)
        assert tb.max_time == 1_700_000_300
        assert not tb.is_unbounded()

    def test_set_timeout_reads_utc_clock(self):
        """Test max time is roughly now plus the timeout."""
        tb = set_timeout(0, 300)
        expected = int(datetime.now(timezone.utc).timestamp()) + 300
        assert abs(tb.max_time - expected) < 2

    def test_classmethod_and_module_aliases_agree(self):
        assert Timebounds.set_timebounds(1, 2) == set_timebounds(1, 2)
        assert Timebounds.set_no_timeout(0) == set_no_timeout(0)


class TestValidation:
    """Tests for Timebounds.validate()."""

    def test_direct_construction_is_rejected(self):
        with pytest.raises(ConfigError) as exc_info:
            Timebounds(1, 10).validate()
        assert exc_info.value.code == ErrorCode.TIMEBOUNDS_NOT_CONSTRUCTED

    def test_not_constructed_is_checked_before_ranges(self):
        """Test that a negative window still reports the construction error first."""
        with pytest.raises(ConfigError):
            Timebounds(-1, -5).validate()

    @pytest.mark.parametrize("min_time,max_time,message", [
        (-1, 10, "invalid timebound: minTime cannot be negative"),
        (0, -1, "invalid timebound: maxTime cannot be negative"),
        (10, 5, "invalid timebound: maxTime < minTime"),
        (-1, -1, "invalid timebound: minTime cannot be negative"),
    ])
    def test_invalid_windows(self, min_time, max_time, message):
        with pytest.raises(ValidationError) as exc_info:
            set_timebounds(min_time, max_time).validate()
        assert exc_info.value.message == message
        assert exc_info.value.code == ErrorCode.INVALID_TIMEBOUNDS

    @pytest.mark.parametrize("min_time,max_time", [
        (0, 0),
        (10, 0),
        (5, 5),
        (1, 100),
    ])
    def test_valid_windows(self, min_time, max_time):
        set_timebounds(min_time, max_time).validate()

    def test_to_xdr(self):
        xdr_tb = set_timebounds(1, 2).to_xdr()
        assert (xdr_tb.min_time, xdr_tb.max_time) == (1, 2)


class TestBuilderIntegration:
    """Tests for timebounds flowing through Transaction.build()."""

    def test_no_timeout_is_attached(self, kp0):
        built = mk_transaction(kp0, "1", timebounds=set_no_timeout(0)).build()
        assert built.tx.time_bounds is not None
        assert (built.tx.time_bounds.min_time, built.tx.time_bounds.max_time) == (0, 0)

    def test_explicit_window_is_attached(self, kp0):
        built = mk_transaction(kp0, "1", timebounds=set_timebounds(100, 200)).build()
        assert (built.tx.time_bounds.min_time, built.tx.time_bounds.max_time) == (100, 200)

    def test_none_builds_without_timebounds(self, kp0, caplog):
        with caplog.at_level("WARNING", logger="stellar_txnbuild.tx.transaction"):
            built = mk_transaction(kp0, "1", timebounds=None).build()
        assert built.tx.time_bounds is None
        assert "without timebounds" in caplog.text

    def test_unconstructed_timebounds_fail_build(self, kp0):
        tx = mk_transaction(kp0, "1", timebounds=Timebounds(0, 10))
        with pytest.raises(ConfigError):
            tx.build()

    def test_inverted_window_fails_build_sign_encode(self, kp0):
        tx = mk_transaction(kp0, "1", timebounds=set_timebounds(10, 5))
        with pytest.raises(ValidationError) as exc_info:
            tx.build_sign_encode()
        assert exc_info.value.message == "couldn't build transaction: invalid timebound: maxTime < minTime"

    def test_failed_build_leaves_transaction_unbuilt(self, kp0):
        tx = mk_transaction(kp0, "1", timebounds=set_timebounds(-1, 5))
        with pytest.raises(ValidationError):
            tx.build()
        with pytest.raises(BuildError):
            tx.built

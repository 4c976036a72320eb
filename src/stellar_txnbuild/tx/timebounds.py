"""
Transaction timebounds.

Timebounds are the window of ledger close times over which a transaction
is valid. Every transaction benefits from an upper bound: once submitted,
a pending transaction under network congestion may stay unresolved for a
long time, while with an upper bound the submitter knows by when it has
either succeeded or failed.

A Timebounds value must come from one of the factories below. A directly
constructed ``Timebounds()`` carries no explicit window and fails
validation, so an unbounded transaction is always a deliberate choice.
"""

from __future__ import annotations
from dataclasses import dataclass, field
from datetime import datetime, timezone
from typing import Optional

from ..codec.xdr import TimeBounds as XdrTimeBounds
from ..runtime.errors import ConfigError, ValidationError, ErrorCode

# Upper bound meaning "no expiry". Rarely needed outside of certain
# contracts and deterministic testing.
TIMEOUT_INFINITE = 0


@dataclass(frozen=True)
class Timebounds:
    """Validity window in Unix seconds; ``max_time == 0`` means unbounded."""

    min_time: int = 0
    max_time: int = 0
    explicitly_constructed: bool = field(default=False, repr=False)

    @classmethod
    def set_timebounds(cls, min_time: int, max_time: int) -> Timebounds:
        """Timebounds from an explicit min and max time."""
        return cls(min_time, max_time, True)

    @classmethod
    def set_timeout(cls, min_time: int, timeout: int, now: Optional[int] = None) -> Timebounds:
        """
        Timebounds expiring ``timeout`` seconds from now.

        The UTC wall clock is read once, here; make sure it is accurate.

        Args:
            min_time: Lower bound in Unix seconds
            timeout: Seconds from now until expiry
            now: Override for the current Unix time
        """
        if now is None:
            now = int(datetime.now(timezone.utc).timestamp())
        return cls(min_time, now + timeout, True)

    @classmethod
    def set_no_timeout(cls, min_time: int) -> Timebounds:
        """Timebounds with an indefinite upper bound."""
        return cls(min_time, TIMEOUT_INFINITE, True)

    def validate(self) -> None:
        """
        Sanity-check the window and confirm it came from a factory.

        Raises:
            ConfigError: If not built by a factory
            ValidationError: If a bound is negative or the window is inverted
        """
        if not self.explicitly_constructed:
            raise ConfigError(
                "timebounds must be constructed using set_timebounds(), set_timeout(), or set_no_timeout()",
                ErrorCode.TIMEBOUNDS_NOT_CONSTRUCTED,
            )
        if self.min_time < 0:
            raise ValidationError("invalid timebound: minTime cannot be negative",
                                  ErrorCode.INVALID_TIMEBOUNDS)
        if self.max_time < 0:
            raise ValidationError("invalid timebound: maxTime cannot be negative",
                                  ErrorCode.INVALID_TIMEBOUNDS)
        if self.max_time != TIMEOUT_INFINITE and self.max_time < self.min_time:
            raise ValidationError("invalid timebound: maxTime < minTime",
                                  ErrorCode.INVALID_TIMEBOUNDS)

    def is_unbounded(self) -> bool:
        return self.max_time == TIMEOUT_INFINITE

    def to_xdr(self) -> XdrTimeBounds:
        self.validate()
        return XdrTimeBounds(self.min_time, self.max_time)


set_timebounds = Timebounds.set_timebounds
set_timeout = Timebounds.set_timeout
set_no_timeout = Timebounds.set_no_timeout


__all__ = [
    "Timebounds",
    "TIMEOUT_INFINITE",
    "set_timebounds",
    "set_timeout",
    "set_no_timeout",
]

"""
Transaction builder, signing pipeline and envelope serializer.

A transaction moves through three states, each held by its own value:

    Transaction        caller-populated configuration (UNBUILT)
      .build()  ->  BuiltTransaction   frozen wire body + network (BUILT)
      .sign()   ->  SignedTransaction  frozen envelope with signatures (SIGNED)

Every transition returns a new immutable value, so a signature always
covers exactly the body it is serialized with.

Usage:
    tx = Transaction(
        source_account=SimpleAccount(kp.address, 3556091187167235),
        operations=[Inflation()],
        timebounds=set_no_timeout(0),
        network_passphrase=TEST_NETWORK_PASSPHRASE,
    )
    envelope_b64 = tx.build_sign_encode(Ed25519Signer(kp))
"""

from __future__ import annotations
import base64
import logging
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Sequence, Tuple

from ..codec import strkey
from ..codec.hashes import hash_transaction, transaction_signature_base
from ..codec.xdr import (
    DecoratedSignature, PublicKey, Transaction as XdrTransaction, TransactionEnvelope,
    MAX_OPERATIONS, MAX_SIGNATURES,
)
from ..config import get_config
from ..runtime.errors import (
    TxnBuildError, BuildError, ConfigError, CryptoError, EncodingError,
    SequenceError, ValidationError, ErrorCode,
)
from ..signers.signer import Signer
from .account import Account, MAX_SEQUENCE
from .fees import FeePolicy
from .memo import Memo, memo_to_xdr
from .operations.base import Operation
from .timebounds import Timebounds

logger = logging.getLogger(__name__)


class TransactionState(Enum):
    UNBUILT = "unbuilt"
    BUILT = "built"
    SIGNED = "signed"


def _hash(tx: XdrTransaction, passphrase: str) -> bytes:
    try:
        return hash_transaction(tx, passphrase)
    except ConfigError:
        raise
    except TxnBuildError as e:
        raise CryptoError(f"failed to hash transaction: {e.message}", ErrorCode.CRYPTO_ERROR, cause=e) from e


def _sign_digest(signer: Signer, digest: bytes) -> DecoratedSignature:
    try:
        signature = signer.sign_decorated(digest)
    except CryptoError:
        raise
    except Exception as e:
        raise CryptoError(f"failed to sign transaction: {e}", ErrorCode.SIGNING_FAILED, cause=e) from e
    if not isinstance(signature, DecoratedSignature) or len(signature.hint) != 4:
        raise CryptoError(f"signer {signer!r} returned a malformed decorated signature",
                          ErrorCode.SIGNING_FAILED)
    return signature


def _encode(envelope: TransactionEnvelope) -> bytes:
    try:
        return envelope.to_xdr_bytes()
    except EncodingError as e:
        raise e.wrap("failed to marshal XDR") from e


@dataclass(frozen=True)
class SignedTransaction:
    """A built body with its ordered signatures. Immutable."""

    built: BuiltTransaction
    signatures: Tuple[DecoratedSignature, ...] = ()

    state = TransactionState.SIGNED

    @property
    def envelope(self) -> TransactionEnvelope:
        return TransactionEnvelope(self.built.tx, self.signatures)

    @property
    def network_passphrase(self) -> str:
        return self.built.network_passphrase

    def hash(self) -> bytes:
        return self.built.hash()

    def sign(self, *signers: Signer) -> SignedTransaction:
        """
        Return a new value with one signature per signer appended, in order.

        Raises:
            ConfigError: If the network passphrase is empty
            CryptoError: If hashing or signing fails
        """
        if not signers:
            raise ValidationError("at least one signer is required")
        if len(self.signatures) + len(signers) > MAX_SIGNATURES:
            raise ValidationError(f"an envelope holds at most {MAX_SIGNATURES} signatures")
        digest = self.built.hash()
        added = []
        for signer in signers:
            added.append(_sign_digest(signer, digest))
            logger.debug("Signed transaction %s with %r", digest.hex(), signer)
        return SignedTransaction(self.built, self.signatures + tuple(added))

    def marshal_binary(self) -> bytes:
        """Canonical binary encoding of the envelope."""
        return _encode(self.envelope)

    def base64(self) -> str:
        """Standard base64 of ``marshal_binary()``."""
        return base64.b64encode(self.marshal_binary()).decode("ascii")

    @classmethod
    def from_envelope(cls, envelope: TransactionEnvelope, network_passphrase: str) -> SignedTransaction:
        return cls(BuiltTransaction(envelope.tx, network_passphrase), tuple(envelope.signatures))

    @classmethod
    def from_base64(cls, encoded: str, network_passphrase: str) -> SignedTransaction:
        """Decode a transport-form envelope."""
        return cls.from_envelope(TransactionEnvelope.from_base64(encoded), network_passphrase)


@dataclass(frozen=True)
class BuiltTransaction:
    """A frozen wire transaction body bound to a network."""

    tx: XdrTransaction
    network_passphrase: str

    state = TransactionState.BUILT

    def hash(self) -> bytes:
        """
        Network-separated transaction hash.

        Raises:
            ConfigError: If the network passphrase is empty
        """
        return _hash(self.tx, self.network_passphrase)

    def signature_base(self) -> bytes:
        """The preimage whose SHA-256 is ``hash()``."""
        return transaction_signature_base(self.tx, self.network_passphrase)

    def sign(self, *signers: Signer) -> SignedTransaction:
        return SignedTransaction(self).sign(*signers)

    def to_envelope(self) -> TransactionEnvelope:
        return TransactionEnvelope(self.tx)

    def marshal_binary(self) -> bytes:
        """Binary encoding of the unsigned envelope."""
        return _encode(self.to_envelope())

    def base64(self) -> str:
        return base64.b64encode(self.marshal_binary()).decode("ascii")


class Transaction:
    """
    Caller-populated transaction configuration.

    ``timebounds`` must be given: a Timebounds from one of its factories, or
    ``None`` to deliberately build without timebounds. ``fee`` is an
    explicit total fee; when unset or zero the fee policy applies, using
    ``base_fee`` per operation if given.
    """

    def __init__(
        self,
        source_account: Account,
        operations: Optional[Sequence[Operation]] = None,
        *,
        timebounds: Optional[Timebounds],
        memo: Optional[Memo] = None,
        fee: Optional[int] = None,
        base_fee: Optional[int] = None,
        network_passphrase: Optional[str] = None,
        fee_policy: Optional[FeePolicy] = None,
    ):
        config = get_config()
        self.source_account = source_account
        self.operations: List[Operation] = list(operations or [])
        self.timebounds = timebounds
        self.memo = memo
        self.fee = fee
        self.network_passphrase = config.network_passphrase if network_passphrase is None else network_passphrase
        if fee_policy is None:
            fee_policy = FeePolicy.with_base_fee(config.base_fee if base_fee is None else base_fee)
        self.fee_policy = fee_policy
        self._built: Optional[BuiltTransaction] = None

    @property
    def state(self) -> TransactionState:
        return TransactionState.UNBUILT if self._built is None else TransactionState.BUILT

    @property
    def built(self) -> BuiltTransaction:
        if self._built is None:
            raise BuildError("transaction has not been built", ErrorCode.INVALID_STATE)
        return self._built

    def _source_public_key(self) -> PublicKey:
        if self.source_account is None:
            raise ConfigError("transaction has no source account")
        address = self.source_account.get_account_id()
        try:
            return PublicKey(strkey.decode_account_id(address))
        except EncodingError as e:
            raise e.wrap("invalid source account", {"address": address}) from e

    def _next_sequence(self) -> int:
        try:
            seq = self.source_account.increment_sequence_number()
        except SequenceError:
            raise
        except Exception as e:
            raise SequenceError(f"failed to parse sequence number: {e}", cause=e) from e
        if isinstance(seq, bool) or not isinstance(seq, int) or not 0 <= seq <= MAX_SEQUENCE:
            raise SequenceError(f"account returned invalid sequence number {seq!r}")
        return seq

    def _build_operations(self):
        staged = []
        for index, op in enumerate(self.operations):
            kind = type(op).__name__
            try:
                staged.append(op.build_xdr())
            except TxnBuildError as e:
                raise e.wrap(
                    f"failed to build operation #{index} {kind}",
                    {"index": index, "operation": kind},
                ) from e
            except Exception as e:
                raise BuildError(
                    f"failed to build operation #{index} {kind}: {e}",
                    details={"index": index, "operation": kind},
                    cause=e,
                ) from e
        return tuple(staged)

    def _build_timebounds(self):
        if self.timebounds is None:
            logger.warning("Building transaction without timebounds; it stays valid indefinitely")
            return None
        return self.timebounds.to_xdr()

    def _build_memo(self):
        try:
            return memo_to_xdr(self.memo)
        except EncodingError as e:
            raise e.wrap("couldn't build memo XDR") from e

    def build(self) -> BuiltTransaction:
        """
        Run the build pipeline and freeze the result.

        The source account's sequence number is consumed once per attempt
        that gets past address resolution. A failed build leaves this
        transaction unbuilt.

        Returns:
            The frozen built transaction

        Raises:
            BuildError: If already built, or an operation fails unexpectedly
            EncodingError: If the source address or memo cannot be encoded
            SequenceError: If the account cannot supply a sequence number
            ValidationError: If there are too many operations, or an operation
                or the timebounds are invalid; operation errors keep their own
                class and name the failing index
            ConfigError: If there is no source account, or the timebounds were
                not made by a factory
        """
        if self._built is not None:
            raise BuildError("transaction has already been built", ErrorCode.INVALID_STATE)
        count = len(self.operations)
        if count > MAX_OPERATIONS:
            raise ValidationError(
                f"transaction has {count} operations, limit is {MAX_OPERATIONS}",
                ErrorCode.INVALID_OPERATION,
                {"operation_count": count},
            )

        source = self._source_public_key()
        seq_num = self._next_sequence()
        operations = self._build_operations()
        time_bounds = self._build_timebounds()
        memo = self._build_memo()
        fee = self.fee_policy.compute_fee(len(operations), self.fee)

        built = BuiltTransaction(
            XdrTransaction(
                source_account=source,
                fee=fee,
                seq_num=seq_num,
                time_bounds=time_bounds,
                memo=memo,
                operations=operations,
            ),
            self.network_passphrase,
        )
        self._built = built
        logger.debug("Built transaction: seq=%d ops=%d fee=%d", seq_num, len(operations), fee)
        return built

    def build_sign_encode(self, *signers: Signer) -> str:
        """
        Build, sign with every signer in order, and return the base64 envelope.

        Each stage's error is re-raised with the stage named and its
        original error class kept.
        """
        try:
            built = self.build()
        except TxnBuildError as e:
            raise e.wrap("couldn't build transaction") from e

        try:
            signed = built.sign(*signers)
        except TxnBuildError as e:
            raise e.wrap("couldn't sign transaction") from e

        try:
            encoded = signed.base64()
        except TxnBuildError as e:
            raise e.wrap("couldn't encode transaction") from e

        logger.debug("Encoded transaction envelope (%d signatures)", len(signed.signatures))
        return encoded


__all__ = [
    "Transaction",
    "BuiltTransaction",
    "SignedTransaction",
    "TransactionState",
]

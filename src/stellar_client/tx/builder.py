"""
Transaction builder.

Collects operations, fee, memo and preconditions, reserves the source
account's next sequence number and produces an unsigned Transaction.
"""

from __future__ import annotations

import logging
import time
from typing import List, Optional, Union

from ..account import Account
from ..runtime import strkey
from ..runtime.errors import (
    AddressError,
    BuilderError,
    BuilderStateError,
    ErrorCode,
    MissingSourceError,
    TimeBoundsConflictError,
)
from ..xdr import types as xdr
from .fees import NetworkParams, check_fee, total_fee
from .memo import Memo
from .preconditions import LedgerBounds, TimeBounds
from .transaction import Transaction

logger = logging.getLogger(__name__)

TIMEOUT_INFINITE = 0
INT64_MAX = 2 ** 63 - 1


def _signer_key_from_string(key: str) -> xdr.SignerKey:
    if not isinstance(key, str) or not key:
        raise AddressError(f"Invalid signer key: {key!r}")
    if key[0] == "G":
        return xdr.SignerKey(xdr.SignerKeyType.SIGNER_KEY_TYPE_ED25519, strkey.decode_ed25519_public_key(key))
    if key[0] == "T":
        return xdr.SignerKey(xdr.SignerKeyType.SIGNER_KEY_TYPE_PRE_AUTH_TX, strkey.decode_pre_auth_tx(key))
    if key[0] == "X":
        return xdr.SignerKey(xdr.SignerKeyType.SIGNER_KEY_TYPE_HASH_X, strkey.decode_sha256_hash(key))
    raise AddressError(f"Unsupported signer key: {key!r}", code=ErrorCode.UNSUPPORTED_ADDRESS_KIND)


class TransactionBuilder:
    """
    Single-use assembler for one transaction.

    Mutators return the builder for chaining. ``build()`` is terminal: it
    consumes the builder and advances the source account's sequence number
    by one; a failed build leaves the account untouched.
    """

    def __init__(
        self,
        source_account: Optional[Account],
        network_passphrase: str,
        base_fee: Optional[int] = None,
        time_bounds: Optional[TimeBounds] = None,
        params: Optional[NetworkParams] = None,
    ):
        """
        Args:
            source_account: Account whose sequence number the transaction consumes
            network_passphrase: Passphrase of the target network
            base_fee: Fee per operation in stroops (defaults to params.base_fee)
            time_bounds: Initial validity window
            params: Network limits (defaults to NetworkParams())
        """
        self._source = source_account
        self._network_passphrase = network_passphrase
        self._params = params or NetworkParams()
        self._base_fee = base_fee
        self._total_fee: Optional[int] = None
        self._memo = Memo.none()
        self._time_bounds = time_bounds
        self._ledger_bounds: Optional[LedgerBounds] = None
        self._min_account_sequence: Optional[int] = None
        self._min_account_sequence_age = 0
        self._min_account_sequence_ledger_gap = 0
        self._extra_signers: List[xdr.SignerKey] = []
        self._operations: List[xdr.Operation] = []
        self._built = False

    def _ensure_accumulating(self) -> None:
        if self._built:
            raise BuilderStateError()

    @property
    def operations(self) -> List[xdr.Operation]:
        return list(self._operations)

    @property
    def time_bounds(self) -> Optional[TimeBounds]:
        return self._time_bounds

    # Mutators

    def set_fee(self, base_fee: int) -> TransactionBuilder:
        """Set the fee per operation, in stroops."""
        self._ensure_accumulating()
        self._base_fee = base_fee
        return self

    def set_total_fee(self, fee: int) -> TransactionBuilder:
        """Set an explicit total fee, overriding base fee x operation count."""
        self._ensure_accumulating()
        self._total_fee = fee
        return self

    def add_operation(self, operation: xdr.Operation) -> TransactionBuilder:
        """Append an operation; operation order is preserved in the transaction."""
        self._ensure_accumulating()
        if not isinstance(operation, xdr.Operation):
            raise BuilderError(f"operation must be an xdr.Operation, got {type(operation).__name__}")
        self._operations.append(operation)
        return self

    def add_memo(self, memo_text: str) -> TransactionBuilder:
        """Attach a text memo."""
        self._ensure_accumulating()
        self._memo = Memo.text(memo_text)
        return self

    def set_memo(self, memo: Memo) -> TransactionBuilder:
        self._ensure_accumulating()
        if not isinstance(memo, Memo):
            raise BuilderError(f"memo must be a Memo, got {type(memo).__name__}")
        self._memo = memo
        return self

    def set_time_bounds(self, time_bounds: TimeBounds) -> TransactionBuilder:
        self._ensure_accumulating()
        if not isinstance(time_bounds, TimeBounds):
            raise BuilderError(f"time_bounds must be TimeBounds, got {type(time_bounds).__name__}")
        self._time_bounds = time_bounds
        return self

    def set_ledger_bounds(self, ledger_bounds: LedgerBounds) -> TransactionBuilder:
        self._ensure_accumulating()
        if not isinstance(ledger_bounds, LedgerBounds):
            raise BuilderError(f"ledger_bounds must be LedgerBounds, got {type(ledger_bounds).__name__}")
        self._ledger_bounds = ledger_bounds
        return self

    def set_min_account_sequence(self, sequence: Union[str, int]) -> TransactionBuilder:
        """Only valid when the source account's sequence is at least this value."""
        self._ensure_accumulating()
        if isinstance(sequence, str) and sequence.isascii() and sequence.isdigit():
            sequence = int(sequence)
        if isinstance(sequence, bool) or not isinstance(sequence, int) or not 0 <= sequence <= INT64_MAX:
            raise BuilderError(f"min account sequence must be an int64, got {sequence!r}",
                               code=ErrorCode.INVALID_SEQUENCE)
        self._min_account_sequence = sequence
        return self

    def set_min_account_sequence_age(self, seconds: int) -> TransactionBuilder:
        self._ensure_accumulating()
        if isinstance(seconds, bool) or not isinstance(seconds, int) or seconds < 0:
            raise BuilderError(f"min account sequence age must be a non-negative integer, got {seconds!r}")
        self._min_account_sequence_age = seconds
        return self

    def set_min_account_sequence_ledger_gap(self, gap: int) -> TransactionBuilder:
        self._ensure_accumulating()
        if isinstance(gap, bool) or not isinstance(gap, int) or gap < 0:
            raise BuilderError(f"min account sequence ledger gap must be a non-negative integer, got {gap!r}")
        self._min_account_sequence_ledger_gap = gap
        return self

    def add_extra_signer(self, signer_key: str) -> TransactionBuilder:
        """Require an extra signature from a G..., T... or X... signer."""
        self._ensure_accumulating()
        self._extra_signers.append(_signer_key_from_string(signer_key))
        return self

    def set_timeout(self, timeout_seconds: int) -> TransactionBuilder:
        """
        Make the transaction valid for `timeout_seconds` from now.

        ``TIMEOUT_INFINITE`` (0) means no upper bound. An existing min time is kept.

        Raises:
            TimeBoundsConflictError: If a non-zero max time is already set
            BuilderError: If the timeout is negative
        """
        self._ensure_accumulating()
        if self._time_bounds is not None and self._time_bounds.max_time > 0:
            raise TimeBoundsConflictError()
        if isinstance(timeout_seconds, bool) or not isinstance(timeout_seconds, int):
            raise BuilderError(f"timeout must be an integer, got {timeout_seconds!r}")
        if timeout_seconds < 0:
            raise BuilderError("timeout cannot be negative")

        min_time = self._time_bounds.min_time if self._time_bounds is not None else 0
        max_time = int(time.time()) + timeout_seconds if timeout_seconds > 0 else 0
        self._time_bounds = TimeBounds(min_time=min_time, max_time=max_time)
        return self

    # Build

    def _preconditions(self) -> xdr.Preconditions:
        time_bounds = self._time_bounds.to_xdr_object() if self._time_bounds is not None else None
        needs_v2 = (
            self._ledger_bounds is not None
            or self._min_account_sequence is not None
            or self._min_account_sequence_age > 0
            or self._min_account_sequence_ledger_gap > 0
            or self._extra_signers
        )
        if needs_v2:
            if len(self._extra_signers) > xdr.MAX_EXTRA_SIGNERS:
                raise BuilderError(
                    f"At most {xdr.MAX_EXTRA_SIGNERS} extra signers are allowed, got {len(self._extra_signers)}"
                )
            v2 = xdr.PreconditionsV2(
                time_bounds=time_bounds,
                ledger_bounds=self._ledger_bounds.to_xdr_object() if self._ledger_bounds else None,
                min_seq_num=self._min_account_sequence,
                min_seq_age=self._min_account_sequence_age,
                min_seq_ledger_gap=self._min_account_sequence_ledger_gap,
                extra_signers=tuple(self._extra_signers),
            )
            return xdr.Preconditions(xdr.PreconditionType.PRECOND_V2, v2=v2)
        if time_bounds is not None:
            return xdr.Preconditions(xdr.PreconditionType.PRECOND_TIME, time_bounds=time_bounds)
        return xdr.Preconditions()

    def _fee(self) -> int:
        if self._total_fee is not None:
            return check_fee(self._total_fee, self._params, "total fee")
        base_fee = self._base_fee if self._base_fee is not None else self._params.base_fee
        return total_fee(base_fee, len(self._operations), self._params)

    def build(self) -> Transaction:
        """
        Produce the unsigned transaction and consume the builder.

        The transaction uses the account's sequence number plus one, and that
        value is committed back to the account only once the transaction has
        been fully assembled and encoded.

        Raises:
            MissingSourceError: No source account
            BuilderError: No operations, too many operations or an out-of-range sequence
            FeeOverflowError: Total fee does not fit uint32
            AccountInUseError: Another builder holds the account
            CodecError: The transaction cannot be encoded
        """
        self._ensure_accumulating()
        if self._source is None:
            raise MissingSourceError()
        if not self._operations:
            raise BuilderError("Transaction must contain at least one operation")
        if len(self._operations) > self._params.max_operations:
            raise BuilderError(
                f"Transaction holds at most {self._params.max_operations} operations, got {len(self._operations)}"
            )

        fee = self._fee()
        cond = self._preconditions()

        with self._source.exclusive() as account:
            sequence = int(account.sequence_number()) + 1
            if sequence > INT64_MAX:
                raise BuilderError(
                    f"Sequence number {sequence} exceeds int64",
                    code=ErrorCode.INVALID_SEQUENCE,
                )
            tx = xdr.Transaction(
                source_account=account.muxed_account(),
                fee=fee,
                seq_num=sequence,
                cond=cond,
                memo=self._memo.to_xdr_object(),
                operations=tuple(self._operations),
            )
            tx.to_xdr_bytes()
            account.increment_sequence_number()

        self._built = True
        logger.debug(
            f"Built transaction for {self._source.account_id}: sequence {sequence}, "
            f"fee {fee}, {len(self._operations)} operation(s)"
        )
        return Transaction(tx, self._network_passphrase)

"""
In-memory account state: an address and its sequence counter.
"""

from __future__ import annotations

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Union

from .runtime.address import Address
from .runtime.errors import AccountInUseError, BuilderError, ErrorCode
from .xdr import types as xdr

logger = logging.getLogger(__name__)


def _parse_sequence(sequence: Union[str, int]) -> int:
    if isinstance(sequence, bool):
        raise BuilderError("sequence must be a decimal string", code=ErrorCode.INVALID_SEQUENCE)
    if isinstance(sequence, str):
        if not sequence.isascii() or not sequence.isdigit():
            raise BuilderError(
                f"sequence must be a decimal string, got {sequence!r}",
                code=ErrorCode.INVALID_SEQUENCE,
            )
        return int(sequence)
    if isinstance(sequence, int) and sequence >= 0:
        return sequence
    raise BuilderError(f"invalid sequence: {sequence!r}", code=ErrorCode.INVALID_SEQUENCE)


class Account:
    """
    One signer's on-ledger identity and current sequence number.

    The sequence is held with arbitrary precision and only moves forward, by
    one, when a TransactionBuilder consumes it. ``exclusive()`` guards the
    read-increment-commit step so that two builders cannot race on the same
    account.
    """

    def __init__(self, account_id: str, sequence: Union[str, int]):
        """
        Args:
            account_id: G... or M... address
            sequence: Current sequence number as a decimal string

        Raises:
            AddressError: If the address is malformed
            BuilderError: If the sequence is not a non-negative decimal
        """
        self._address = Address.from_string(account_id)
        self._account_id = account_id
        self._sequence = _parse_sequence(sequence)
        self._lock = threading.Lock()

    @property
    def account_id(self) -> str:
        return self._account_id

    @property
    def address(self) -> Address:
        return self._address

    @property
    def base_address(self) -> str:
        return self._address.base_address

    def muxed_account(self) -> xdr.MuxedAccount:
        return self._address.to_muxed_account()

    def sequence_number(self) -> str:
        """Current sequence number as a decimal string."""
        return str(self._sequence)

    def next_sequence_number(self) -> str:
        """The sequence number the next built transaction will use."""
        return str(self._sequence + 1)

    def increment_sequence_number(self) -> None:
        """Advance the stored sequence number by exactly one."""
        self._sequence += 1
        logger.debug(f"Account {self._account_id} sequence advanced to {self._sequence}")

    @contextmanager
    def exclusive(self) -> Iterator[Account]:
        """
        Hold the account exclusively for the duration of the block.

        Raises:
            AccountInUseError: If another builder currently holds it
        """
        if not self._lock.acquire(blocking=False):
            raise AccountInUseError(details={"account_id": self._account_id})
        try:
            yield self
        finally:
            self._lock.release()

    def __repr__(self) -> str:
        return f"Account(account_id='{self._account_id}', sequence='{self._sequence}')"

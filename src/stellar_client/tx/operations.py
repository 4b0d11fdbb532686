"""
Operation builders.

Each builder validates its inputs and returns an immutable ``xdr.Operation``
record. The optional ``source`` override is decoded (checksum validated) but
never normalized: an M... source stays muxed, a G... source stays plain.
"""

from __future__ import annotations

from typing import Optional, Union

from ..runtime.address import Address, decode_account_id, decode_address_to_muxed_account
from ..runtime.errors import AddressError, ErrorCode, OperationError
from ..xdr import types as xdr
from .amounts import AmountLike, MAX_INT64, check_stroops, from_stroops, to_stroops
from .asset import Asset


def _source(source: Optional[str]) -> Optional[xdr.MuxedAccount]:
    if source is None:
        return None
    return decode_address_to_muxed_account(source)


def _destination(destination: str, decode):
    try:
        return decode(destination)
    except AddressError as e:
        raise OperationError(
            f"destination is invalid: {destination!r}",
            code=ErrorCode.INVALID_DESTINATION,
            cause=e,
        )


def create_account(destination: str, starting_balance: int,
                   source: Optional[str] = None) -> xdr.Operation:
    """
    Create and fund a new account.

    Threshold: Medium

    Args:
        destination: G... address of the new account (muxed addresses are rejected)
        starting_balance: Initial balance in stroops, >= 0
        source: Optional per-operation source account

    Raises:
        OperationError: If the destination is not a plain account or the balance is invalid
    """
    account_id = _destination(destination, decode_account_id)
    balance = check_stroops(starting_balance, "starting_balance")
    body = xdr.CreateAccountOp(account_id, balance)
    return xdr.Operation(xdr.OperationType.CREATE_ACCOUNT, body, _source(source))


def payment(destination: str, asset: Asset, amount: AmountLike,
            source: Optional[str] = None) -> xdr.Operation:
    """
    Send an amount of an asset to a destination account.

    Threshold: Medium

    Args:
        destination: G... or M... address
        asset: Asset to send
        amount: Positive decimal amount in units, at most 7 fractional digits
        source: Optional per-operation source account
    """
    muxed = _destination(destination, decode_address_to_muxed_account)
    if not isinstance(asset, Asset):
        raise OperationError(f"asset must be an Asset, got {type(asset).__name__}")
    body = xdr.PaymentOp(muxed, asset.to_xdr_object(), to_stroops(amount))
    return xdr.Operation(xdr.OperationType.PAYMENT, body, _source(source))


def account_merge(destination: str, source: Optional[str] = None) -> xdr.Operation:
    """
    Transfer the native balance of an account to another account and remove
    the source account from the ledger.

    Threshold: High
    """
    muxed = _destination(destination, decode_address_to_muxed_account)
    return xdr.Operation(xdr.OperationType.ACCOUNT_MERGE, muxed, _source(source))


def bump_sequence(bump_to: Union[str, int], source: Optional[str] = None) -> xdr.Operation:
    """
    Bump the source account's sequence number to `bump_to`.

    Threshold: Low
    """
    if isinstance(bump_to, str) and bump_to.isascii() and bump_to.isdigit():
        bump_to = int(bump_to)
    if isinstance(bump_to, bool) or not isinstance(bump_to, int) or not 0 <= bump_to <= MAX_INT64:
        raise OperationError(f"bump_to must be a non-negative int64 sequence, got {bump_to!r}")
    return xdr.Operation(xdr.OperationType.BUMP_SEQUENCE, xdr.BumpSequenceOp(bump_to), _source(source))


def manage_data(name: str, value: Union[None, str, bytes],
                source: Optional[str] = None) -> xdr.Operation:
    """
    Set, modify or (with ``value=None``) delete a data entry.

    Threshold: Medium
    """
    raw_name = name.encode("utf-8") if isinstance(name, str) else None
    if not raw_name or len(raw_name) > xdr.DATA_NAME_MAX:
        raise OperationError(f"name must be a string of 1-{xdr.DATA_NAME_MAX} bytes, got {name!r}")
    raw_value = None
    if value is not None:
        raw_value = value.encode("utf-8") if isinstance(value, str) else bytes(value)
        if len(raw_value) > xdr.DATA_VALUE_MAX:
            raise OperationError(f"value cannot be longer than {xdr.DATA_VALUE_MAX} bytes, got {len(raw_value)}")
    body = xdr.ManageDataOp(raw_name, raw_value)
    return xdr.Operation(xdr.OperationType.MANAGE_DATA, body, _source(source))


_TYPE_NAMES = {
    xdr.OperationType.CREATE_ACCOUNT: "createAccount",
    xdr.OperationType.PAYMENT: "payment",
    xdr.OperationType.ACCOUNT_MERGE: "accountMerge",
    xdr.OperationType.BUMP_SEQUENCE: "bumpSequence",
    xdr.OperationType.MANAGE_DATA: "manageData",
}


def describe(op: xdr.Operation) -> dict:
    """
    Human-readable view of an operation record.

    Addresses are rendered as strkeys and amounts as 7-decimal unit strings.
    """
    result = {"type": _TYPE_NAMES.get(op.type, op.type.name.lower())}
    if op.source_account is not None:
        result["source"] = Address.from_muxed_account(op.source_account).to_string()
    body = op.body
    if op.type == xdr.OperationType.CREATE_ACCOUNT:
        result["destination"] = Address.from_account_id(body.destination).to_string()
        result["starting_balance"] = from_stroops(body.starting_balance)
    elif op.type == xdr.OperationType.PAYMENT:
        result["destination"] = Address.from_muxed_account(body.destination).to_string()
        result["asset"] = str(Asset.from_xdr_object(body.asset))
        result["amount"] = from_stroops(body.amount)
    elif op.type == xdr.OperationType.ACCOUNT_MERGE:
        result["destination"] = Address.from_muxed_account(body).to_string()
    elif op.type == xdr.OperationType.BUMP_SEQUENCE:
        result["bump_to"] = str(body.bump_to)
    elif op.type == xdr.OperationType.MANAGE_DATA:
        result["name"] = body.data_name.decode("utf-8", errors="replace")
        result["value"] = body.data_value
    return result


__all__ = [
    "create_account",
    "payment",
    "account_merge",
    "bump_sequence",
    "manage_data",
    "describe",
]

"""
Address and muxed-account conversion tests.
"""

import pytest
from pydantic import BaseModel, ValidationError

from stellar_client.runtime import strkey
from stellar_client.runtime.address import (
    Address,
    decode,
    decode_account_id,
    decode_address_to_muxed_account,
    encode,
    encode_muxed_account,
    encode_muxed_account_to_address,
    extract_base_address,
)
from stellar_client.runtime.errors import AddressError, ErrorCode
from stellar_client.xdr import types as xdr

from helpers import DESTINATION_ADDRESS, SOURCE_ADDRESS

UINT64_MAX = 2 ** 64 - 1


class TestAddressParsing:
    """Address.from_string and the decode/encode pair."""

    def test_simple_address(self):
        address = Address.from_string(SOURCE_ADDRESS)
        assert not address.is_muxed
        assert address.id is None
        assert address.to_string() == SOURCE_ADDRESS
        assert address.base_address == SOURCE_ADDRESS

    def test_muxed_address(self):
        muxed_text = Address(strkey.decode_ed25519_public_key(SOURCE_ADDRESS), 420).to_string()
        assert muxed_text.startswith("M")

        address = decode(muxed_text)
        assert address.is_muxed
        assert address.id == 420
        assert address.base_address == SOURCE_ADDRESS
        assert encode(address) == muxed_text

    def test_id_extremes(self):
        key = strkey.decode_ed25519_public_key(DESTINATION_ADDRESS)
        for mux_id in (0, 1, UINT64_MAX):
            text = Address(key, mux_id).to_string()
            assert Address.from_string(text).id == mux_id

    def test_muxed_id_zero_is_still_muxed(self):
        """An id of zero is a muxed address, not the plain key."""
        key = strkey.decode_ed25519_public_key(DESTINATION_ADDRESS)
        text = Address(key, 0).to_string()
        assert text != DESTINATION_ADDRESS
        assert Address.from_string(text).is_muxed

    def test_unsupported_kind(self):
        seed_text = strkey.encode_ed25519_secret_seed(bytes(32))
        with pytest.raises(AddressError) as exc_info:
            Address.from_string(seed_text)
        assert exc_info.value.code == ErrorCode.UNSUPPORTED_ADDRESS_KIND

    def test_empty_and_non_string(self):
        with pytest.raises(AddressError):
            Address.from_string("")
        with pytest.raises(AddressError):
            Address.from_string(None)

    def test_checksum_validated(self):
        tampered = SOURCE_ADDRESS[:-1] + ("A" if SOURCE_ADDRESS[-1] != "A" else "B")
        with pytest.raises(AddressError):
            Address.from_string(tampered)

    def test_equality_and_hash(self):
        a = Address.from_string(SOURCE_ADDRESS)
        b = Address.from_string(SOURCE_ADDRESS)
        assert a == b
        assert hash(a) == hash(b)
        assert a != SOURCE_ADDRESS
        assert a.to_string() == SOURCE_ADDRESS
        assert len({a, b}) == 1
        assert a != Address.from_string(DESTINATION_ADDRESS)

    def test_key_length_checked(self):
        with pytest.raises(AddressError):
            Address(bytes(31))


class TestMuxedAccountRecords:
    """Conversions between text and the MuxedAccount/AccountID records."""

    def test_plain_address_lifts_to_ed25519_arm(self):
        record = decode_address_to_muxed_account(SOURCE_ADDRESS)
        assert record.type == xdr.CryptoKeyType.KEY_TYPE_ED25519
        assert record.id is None
        assert record.ed25519 == strkey.decode_ed25519_public_key(SOURCE_ADDRESS)

    def test_muxed_address_keeps_muxed_arm(self):
        record = encode_muxed_account(SOURCE_ADDRESS, "9223372036854775808")
        text = encode_muxed_account_to_address(record)
        decoded = decode_address_to_muxed_account(text)
        assert decoded.type == xdr.CryptoKeyType.KEY_TYPE_MUXED_ED25519
        assert decoded == record

    def test_encode_muxed_account_accepts_int_and_string(self):
        assert encode_muxed_account(SOURCE_ADDRESS, 7) == encode_muxed_account(SOURCE_ADDRESS, "7")

    @pytest.mark.parametrize("bad_id", ["-1", "abc", "", "18446744073709551616", -1, 2 ** 64, True])
    def test_encode_muxed_account_rejects_bad_id(self, bad_id):
        with pytest.raises(AddressError):
            encode_muxed_account(SOURCE_ADDRESS, bad_id)

    def test_encode_muxed_account_requires_plain_address(self):
        muxed_text = encode_muxed_account_to_address(encode_muxed_account(SOURCE_ADDRESS, 1))
        with pytest.raises(AddressError):
            encode_muxed_account(muxed_text, 2)

    def test_decode_account_id(self):
        record = decode_account_id(DESTINATION_ADDRESS)
        assert isinstance(record, xdr.PublicKey)
        assert record.ed25519 == strkey.decode_ed25519_public_key(DESTINATION_ADDRESS)

    def test_decode_account_id_rejects_muxed(self):
        muxed_text = encode_muxed_account_to_address(encode_muxed_account(DESTINATION_ADDRESS, 5))
        with pytest.raises(AddressError) as exc_info:
            decode_account_id(muxed_text)
        assert exc_info.value.code == ErrorCode.UNSUPPORTED_ADDRESS_KIND

    def test_extract_base_address(self):
        muxed_text = encode_muxed_account_to_address(encode_muxed_account(DESTINATION_ADDRESS, 12))
        assert extract_base_address(muxed_text) == DESTINATION_ADDRESS
        assert extract_base_address(DESTINATION_ADDRESS) == DESTINATION_ADDRESS

    def test_record_wire_layout(self):
        """The muxed arm writes the id before the key."""
        record = encode_muxed_account(SOURCE_ADDRESS, 1)
        data = record.to_xdr_bytes()
        assert data[:4] == b"\x00\x00\x01\x00"
        assert data[4:12] == b"\x00\x00\x00\x00\x00\x00\x00\x01"
        assert data[12:] == record.ed25519


class TestPydanticIntegration:
    """Address is usable as a pydantic field type."""

    class Payee(BaseModel):
        address: Address

    def test_validates_from_string(self):
        payee = self.Payee(address=SOURCE_ADDRESS)
        assert isinstance(payee.address, Address)
        assert payee.address == Address.from_string(SOURCE_ADDRESS)

    def test_rejects_bad_address(self):
        with pytest.raises(ValidationError):
            self.Payee(address="GNOTANADDRESS")

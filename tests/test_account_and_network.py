"""
Account sequence handling and network id tests.
"""

import hashlib

import pytest

from helpers import SOURCE_ADDRESS, mk_muxed_address

from stellar_client import Account, Network, Networks, network_id
from stellar_client.runtime.errors import AccountInUseError, AddressError, BuilderError, ErrorCode
from stellar_client.xdr import types as xdr


class TestAccount:
    """Account address and sequence counter."""

    def test_plain_account(self):
        account = Account(SOURCE_ADDRESS, "7")
        assert account.account_id == SOURCE_ADDRESS
        assert account.base_address == SOURCE_ADDRESS
        assert account.sequence_number() == "7"
        assert account.next_sequence_number() == "8"
        assert account.muxed_account().type == xdr.CryptoKeyType.KEY_TYPE_ED25519

    def test_muxed_account(self):
        muxed = mk_muxed_address(SOURCE_ADDRESS, 3)
        account = Account(muxed, "1")
        assert account.account_id == muxed
        assert account.base_address == SOURCE_ADDRESS
        assert account.muxed_account().id == 3

    def test_increment_is_exactly_one(self):
        account = Account(SOURCE_ADDRESS, "9223372036854775806")
        account.increment_sequence_number()
        assert account.sequence_number() == "9223372036854775807"

    def test_sequence_beyond_int64_is_held_exactly(self):
        account = Account(SOURCE_ADDRESS, "99999999999999999999999")
        assert account.next_sequence_number() == "100000000000000000000000"

    @pytest.mark.parametrize("sequence", ["-1", "1.5", "abc", "", -1, True, None])
    def test_bad_sequence(self, sequence):
        with pytest.raises(BuilderError) as exc_info:
            Account(SOURCE_ADDRESS, sequence)
        assert exc_info.value.code == ErrorCode.INVALID_SEQUENCE

    def test_bad_address(self):
        with pytest.raises(AddressError):
            Account("GNOTANACCOUNT", "0")

    def test_exclusive_use(self):
        account = Account(SOURCE_ADDRESS, "0")
        with account.exclusive() as held:
            assert held is account
            with pytest.raises(AccountInUseError):
                with account.exclusive():
                    pass
        with account.exclusive():
            pass

    def test_lock_released_on_error(self):
        account = Account(SOURCE_ADDRESS, "0")
        with pytest.raises(RuntimeError):
            with account.exclusive():
                raise RuntimeError("boom")
        with account.exclusive():
            pass


class TestNetwork:
    """Network passphrases and ids."""

    def test_network_id_is_passphrase_hash(self):
        assert network_id(Networks.PUBLIC) == hashlib.sha256(Networks.PUBLIC.encode()).digest()

    def test_well_known_passphrases(self):
        assert Networks.PUBLIC == "Public Global Stellar Network ; September 2015"
        assert Networks.TESTNET == "Test SDF Network ; September 2015"

    def test_network_object(self):
        assert Network.testnet_network().network_id() == network_id(Networks.TESTNET)
        assert Network.public_network() == Network(Networks.PUBLIC)
        assert Network.public_network() != Network.testnet_network()

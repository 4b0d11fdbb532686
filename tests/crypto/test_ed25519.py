"""
Ed25519 key pair tests.

Tests key derivation, strkey forms, signing, verification and signature
hints.
"""

import hashlib

import pytest

from stellar_client.crypto import Keypair, verify_ed25519
from stellar_client.crypto.ed25519 import Ed25519KeyPair, Ed25519PublicKey
from stellar_client.network import Networks
from stellar_client.runtime import strkey
from stellar_client.runtime.errors import AddressError, SignatureError

# RFC 8032, section 7.1, test 1
RFC_SEED = bytes.fromhex("9d61b19deffd5a60ba844af492ec2cc44449c5697b326919703bac031cae7f60")
RFC_PUBLIC = bytes.fromhex("d75a980182b10ab7d54bfed3c964073a0ee172f3daa62325af021a68f707511a")
RFC_SIGNATURE = bytes.fromhex(
    "e5564300c360ac729086e2cc806e828a84877f1eb8e5d974d873e065224901555"
    "fb8821590a33bacc61e39701cf9b46bd25bf5f0595bbe24655141438e7a100b"
)


class TestKeyDerivation:
    """Key pair construction."""

    def test_rfc8032_public_key(self):
        keypair = Ed25519KeyPair.from_raw_ed25519_seed(RFC_SEED)
        assert keypair.public_key_bytes() == RFC_PUBLIC

    def test_strkey_forms(self):
        keypair = Ed25519KeyPair.from_raw_ed25519_seed(RFC_SEED)
        assert keypair.address == strkey.encode_ed25519_public_key(RFC_PUBLIC)
        assert keypair.address.startswith("G")
        assert keypair.secret_seed().startswith("S")

    def test_secret_round_trip(self, fake_keypair):
        restored = Ed25519KeyPair.from_secret(fake_keypair.secret_seed())
        assert restored == fake_keypair
        assert restored.address == fake_keypair.address

    def test_generate_is_random(self):
        assert Ed25519KeyPair.generate().address != Ed25519KeyPair.generate().address

    def test_seed_length_checked(self):
        with pytest.raises(SignatureError):
            Ed25519KeyPair.from_raw_ed25519_seed(bytes(31))

    def test_secret_must_be_a_seed(self, fake_keypair):
        with pytest.raises(AddressError):
            Ed25519KeyPair.from_secret(fake_keypair.address)

    def test_master_keypair(self):
        master = Ed25519KeyPair.master(Networks.TESTNET)
        expected = Ed25519KeyPair.from_raw_ed25519_seed(hashlib.sha256(Networks.TESTNET.encode()).digest())
        assert master == expected

    def test_keypair_alias(self):
        assert Keypair is Ed25519KeyPair

    def test_mismatched_seed_rejected(self, fake_keypair, second_keypair):
        with pytest.raises(SignatureError):
            Ed25519KeyPair(second_keypair.public_key, RFC_SEED)


class TestSigning:
    """Signing, verification and hints."""

    def test_rfc8032_signature(self):
        keypair = Ed25519KeyPair.from_raw_ed25519_seed(RFC_SEED)
        assert keypair.sign(b"") == RFC_SIGNATURE
        assert keypair.verify(b"", RFC_SIGNATURE)

    def test_signature_hint_is_last_four_bytes(self, fake_keypair):
        assert fake_keypair.signature_hint() == fake_keypair.public_key_bytes()[-4:]

    def test_sign_decorated(self, fake_keypair):
        decorated = fake_keypair.sign_decorated(b"payload")
        assert decorated.hint == fake_keypair.signature_hint()
        assert len(decorated.signature) == 64
        assert fake_keypair.verify(b"payload", decorated.signature)

    def test_tampered_message_fails(self, fake_keypair):
        signature = fake_keypair.sign(b"payload")
        assert not fake_keypair.verify(b"payloae", signature)

    def test_other_key_fails(self, fake_keypair, second_keypair):
        signature = fake_keypair.sign(b"payload")
        assert not second_keypair.verify(b"payload", signature)

    def test_public_only_keypair_cannot_sign(self, fake_keypair):
        public_only = Ed25519KeyPair.from_public_key(fake_keypair.address)
        assert not public_only.can_sign
        with pytest.raises(SignatureError):
            public_only.sign(b"payload")
        with pytest.raises(SignatureError):
            public_only.secret_seed()
        assert public_only.verify(b"payload", fake_keypair.sign(b"payload"))


class TestVerifyHelper:
    """verify_ed25519 accepts either key form and never raises."""

    def test_address_and_raw_forms(self, fake_keypair):
        signature = fake_keypair.sign(b"msg")
        assert verify_ed25519(fake_keypair.address, signature, b"msg")
        assert verify_ed25519(fake_keypair.public_key_bytes(), signature, b"msg")

    def test_invalid_key_is_false(self, fake_keypair):
        signature = fake_keypair.sign(b"msg")
        assert not verify_ed25519("GNOTAKEY", signature, b"msg")
        assert not verify_ed25519(bytes(5), signature, b"msg")

    def test_public_key_from_address(self, fake_keypair):
        key = Ed25519PublicKey.from_address(fake_keypair.address)
        assert key == fake_keypair.public_key
        assert key.to_address() == fake_keypair.address

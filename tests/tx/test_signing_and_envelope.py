"""
Signing and envelope tests.

The signing payload binds a transaction to one network; signatures are
appended in order and envelopes survive a decode/encode round-trip.
"""

import base64
import hashlib
import sys
from pathlib import Path

import pytest

sys.path.insert(0, str(Path(__file__).parent.parent))
from helpers import DESTINATION_ADDRESS, mk_payment_transaction

from stellar_client.crypto.ed25519 import Ed25519KeyPair, verify_ed25519
from stellar_client.network import Networks, network_id
from stellar_client.runtime.address import Address
from stellar_client.runtime.errors import CodecError, MarshalError, SignatureError, UnmarshalError
from stellar_client.tx import operations
from stellar_client.tx.amounts import ONE
from stellar_client.tx.builder import TIMEOUT_INFINITE
from stellar_client.tx.signing import signature_base, signing_payload, signing_payload_for_passphrase
from stellar_client.tx.transaction import Transaction
from stellar_client.xdr import types as xdr


class TestSigningPayload:
    """sha256(network_id || ENVELOPE_TYPE_TX || xdr(tx))."""

    def test_layout(self, fake_keypair):
        tx = mk_payment_transaction(fake_keypair).to_xdr_object()
        net_id = network_id(Networks.TESTNET)
        expected = net_id + b"\x00\x00\x00\x02" + tx.to_xdr_bytes()
        assert signature_base(tx, net_id) == expected
        assert signing_payload(tx, net_id) == hashlib.sha256(expected).digest()
        assert signing_payload_for_passphrase(tx, Networks.TESTNET) == hashlib.sha256(expected).digest()

    def test_network_binding(self, fake_keypair):
        tx = mk_payment_transaction(fake_keypair).to_xdr_object()
        assert signing_payload_for_passphrase(tx, Networks.TESTNET) != \
            signing_payload_for_passphrase(tx, Networks.PUBLIC)

    def test_network_id_length_checked(self, fake_keypair):
        tx = mk_payment_transaction(fake_keypair).to_xdr_object()
        with pytest.raises(SignatureError):
            signature_base(tx, b"\x00" * 31)

    def test_transaction_hash(self, fake_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        assert transaction.hash() == hashlib.sha256(transaction.signature_base()).digest()
        assert transaction.hash_hex() == transaction.hash().hex()


class TestSign:
    """Transaction.sign and externally produced signatures."""

    def test_sign_and_verify(self, fake_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        transaction.sign(fake_keypair)

        assert len(transaction.signatures) == 1
        decorated = transaction.signatures[0]
        assert decorated.hint == fake_keypair.public_key_bytes()[-4:]
        assert verify_ed25519(fake_keypair.address, decorated.signature, transaction.hash())

    def test_tampered_transaction_fails_verification(self, fake_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        transaction.sign(fake_keypair)
        signature = transaction.signatures[0].signature

        tampered = bytearray(transaction.signature_base())
        tampered[-10] ^= 0x01
        assert not verify_ed25519(fake_keypair.address, signature, hashlib.sha256(bytes(tampered)).digest())

    def test_signature_does_not_verify_on_other_network(self, fake_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        transaction.sign(fake_keypair)
        public = Transaction(transaction.to_xdr_object(), Networks.PUBLIC)
        assert not verify_ed25519(fake_keypair.address, transaction.signatures[0].signature, public.hash())

    def test_multiple_signers_in_order(self, fake_keypair, second_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        transaction.sign(fake_keypair, second_keypair)
        assert [s.hint for s in transaction.signatures] == [
            fake_keypair.signature_hint(),
            second_keypair.signature_hint(),
        ]

    def test_resigning_appends(self, fake_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        transaction.sign(fake_keypair)
        transaction.sign(fake_keypair)
        assert len(transaction.signatures) == 2
        assert transaction.signatures[0] == transaction.signatures[1]

    def test_public_only_signer(self, fake_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        with pytest.raises(SignatureError):
            transaction.sign(Ed25519KeyPair.from_public_key(fake_keypair.address))
        assert transaction.signatures == []

    def test_failed_signer_attaches_nothing(self, fake_keypair, second_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        verify_only = Ed25519KeyPair.from_public_key(second_keypair.address)
        with pytest.raises(SignatureError):
            transaction.sign(fake_keypair, verify_only)
        assert transaction.signatures == []

        transaction.sign(fake_keypair)
        assert len(transaction.signatures) == 1

    def test_add_signature_verifies(self, fake_keypair, second_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        signature = second_keypair.sign(transaction.hash())
        transaction.add_signature(second_keypair.address, base64.b64encode(signature).decode())
        assert transaction.signatures == [xdr.DecoratedSignature(second_keypair.signature_hint(), signature)]

    def test_add_signature_rejects_wrong_signer(self, fake_keypair, second_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        signature = second_keypair.sign(transaction.hash())
        with pytest.raises(SignatureError):
            transaction.add_signature(fake_keypair.address, signature)
        assert transaction.signatures == []

    def test_add_signature_rejects_bad_base64(self, fake_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        with pytest.raises(SignatureError):
            transaction.add_signature(fake_keypair.address, "***")

    def test_add_decorated_signature(self, fake_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        decorated = xdr.DecoratedSignature(b"\x00\x01\x02\x03", b"\x04" * 64)
        transaction.add_decorated_signature(decorated)
        assert transaction.signatures == [decorated]


class TestCreateAccountEndToEnd:
    """Build, sign and verify a single create-account transaction."""

    def test_sign_verify_and_tamper(self, fake_keypair, builder, source_account):
        transaction = builder.add_operation(
            operations.create_account(DESTINATION_ADDRESS, 10 * ONE)
        ).set_timeout(TIMEOUT_INFINITE).build()
        assert source_account.sequence_number() == "1"
        assert transaction.source == fake_keypair.address

        transaction.sign(fake_keypair)
        signature = transaction.signatures[0].signature
        assert verify_ed25519(fake_keypair.address, signature, transaction.hash())

        body = transaction.to_xdr_object().to_xdr_bytes()
        net_id = network_id(Networks.TESTNET)
        assert hashlib.sha256(net_id + b"\x00\x00\x00\x02" + body).digest() == transaction.hash()

        tampered = bytearray(body)
        tampered[-5] ^= 0xFF
        payload = hashlib.sha256(net_id + b"\x00\x00\x00\x02" + bytes(tampered)).digest()
        assert not verify_ed25519(fake_keypair.address, signature, payload)


class TestEnvelope:
    """Envelope production and decoding."""

    def test_envelope_shape(self, fake_keypair):
        transaction = mk_payment_transaction(fake_keypair, memo_text="hello")
        transaction.sign(fake_keypair)
        envelope = transaction.to_envelope()
        assert envelope.type == xdr.EnvelopeType.ENVELOPE_TYPE_TX
        assert envelope.v1.tx == transaction.to_xdr_object()
        assert envelope.v1.signatures == tuple(transaction.signatures)

        data = base64.b64decode(transaction.to_xdr())
        assert data[:4] == b"\x00\x00\x00\x02"

    def test_round_trip(self, fake_keypair, second_keypair):
        transaction = mk_payment_transaction(fake_keypair, sequence="41", memo_text="round trip")
        transaction.sign(fake_keypair, second_keypair)
        text = transaction.to_xdr()

        decoded = Transaction.from_xdr(text, Networks.TESTNET)
        assert decoded == transaction
        assert decoded.to_xdr() == text
        assert decoded.sequence == "42"
        assert decoded.hash() == transaction.hash()
        assert decoded.operations[0].body.destination.ed25519 == \
            transaction.operations[0].body.destination.ed25519

    def test_decoded_transaction_can_be_signed(self, fake_keypair, second_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        transaction.sign(fake_keypair)
        decoded = Transaction.from_xdr(transaction.to_xdr(), Networks.TESTNET)
        decoded.sign(second_keypair)
        assert len(decoded.signatures) == 2
        assert len(transaction.signatures) == 1

    def test_signature_limit(self, fake_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        for _ in range(20):
            transaction.sign(fake_keypair)
        transaction.to_xdr()

        transaction.sign(fake_keypair)
        with pytest.raises(MarshalError):
            transaction.to_xdr()
        with pytest.raises(CodecError):
            transaction.to_envelope()

    def test_malformed_envelope(self):
        with pytest.raises(UnmarshalError):
            Transaction.from_xdr(base64.b64encode(b"\x00\x00\x00\x02\x00").decode(), Networks.TESTNET)

    def test_repr(self, fake_keypair):
        transaction = mk_payment_transaction(fake_keypair)
        assert "sequence='1'" in repr(transaction)
        assert fake_keypair.address in repr(transaction)

    def test_destination_preserved(self, fake_keypair):
        transaction = mk_payment_transaction(fake_keypair, destination=DESTINATION_ADDRESS)
        decoded = Transaction.from_xdr(transaction.to_xdr(), Networks.TESTNET)
        assert Address.from_muxed_account(decoded.operations[0].body.destination).to_string() == DESTINATION_ADDRESS

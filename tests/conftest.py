"""
Test bootstrap:
- Make tests/helpers importable at collection time
- Deterministic Ed25519 key pairs so that signatures and addresses are stable
- Accounts and builders wired to the test network
"""
import sys
import pathlib

import pytest

TESTS_DIR = pathlib.Path(__file__).parent
if str(TESTS_DIR) not in sys.path:
    sys.path.insert(0, str(TESTS_DIR))

from helpers import mk_ed25519_keypair  # noqa: E402

from stellar_client.account import Account  # noqa: E402
from stellar_client.network import Networks  # noqa: E402
from stellar_client.tx.builder import TransactionBuilder  # noqa: E402


@pytest.fixture
def fake_keypair():
    """Provide a deterministic Ed25519 key pair for testing."""
    return mk_ed25519_keypair(b'test_seed_for_deterministic_key_pair'[:32])


@pytest.fixture
def second_keypair():
    """A second deterministic key pair, distinct from fake_keypair."""
    return mk_ed25519_keypair(bytes(range(32)))


@pytest.fixture
def source_account(fake_keypair):
    """Account owned by fake_keypair, at sequence 0."""
    return Account(fake_keypair.address, "0")


@pytest.fixture
def builder(source_account):
    """Transaction builder on the test network with the default base fee."""
    return TransactionBuilder(source_account, Networks.TESTNET)

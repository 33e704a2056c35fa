from types import SimpleNamespace
from unittest.mock import Mock

import pytest
import structlog
from solders.hash import Hash
from solders.keypair import Keypair


def account_info(exists=True):
    return SimpleNamespace(value=SimpleNamespace(lamports=2039280) if exists else None)


def token_balance(amount: int):
    return SimpleNamespace(value=SimpleNamespace(amount=str(amount), decimals=6))


def signature_status(err=None):
    return SimpleNamespace(value=[SimpleNamespace(err=err)])


def make_client(balance: int = 100_000_000, exists: bool = True) -> Mock:
    client = Mock()
    client.get_account_info.return_value = account_info(exists)
    client.get_token_account_balance.return_value = token_balance(balance)
    client.get_latest_blockhash.return_value = SimpleNamespace(
        value=SimpleNamespace(blockhash=Hash.default(), last_valid_block_height=1_000)
    )
    client.send_transaction.side_effect = lambda tx, opts=None: SimpleNamespace(value=tx.signatures[0])
    client.confirm_transaction.return_value = signature_status()
    client.get_signature_statuses.return_value = SimpleNamespace(value=[None])
    return client


@pytest.fixture
def owner():
    return Keypair.from_seed(bytes(range(32)))


@pytest.fixture
def client():
    return make_client()


@pytest.fixture
def client_factory():
    return make_client


@pytest.fixture(autouse=True)
def reset_structlog():
    # configure_logging binds the current sys.stderr, which capsys closes after each test
    yield
    structlog.reset_defaults()

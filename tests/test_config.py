import json

import base58
import pytest
from solders.keypair import Keypair

from cctp_client.config import DEFAULT_RPC_URL, load_settings, parse_keypair
from cctp_client.errors import ConfigurationError

RECIPIENT = "0x" + "11" * 32


@pytest.fixture(autouse=True)
def clean_env(monkeypatch, tmp_path):
    monkeypatch.chdir(tmp_path)
    for name in (
        "SOLANA_RPC_URL",
        "SOLANA_PRIVATE_KEY",
        "APTOS_RECIPIENT_ADDRESS",
        "DEPOSIT_USDC",
        "DESTINATION_DOMAIN",
        "MAX_SEND_ATTEMPTS",
    ):
        monkeypatch.delenv(name, raising=False)


def test_defaults(monkeypatch):
    kp = Keypair()
    monkeypatch.setenv("SOLANA_PRIVATE_KEY", str(kp))
    monkeypatch.setenv("APTOS_RECIPIENT_ADDRESS", RECIPIENT)
    settings = load_settings()
    assert settings.solana_rpc_url == DEFAULT_RPC_URL
    assert settings.deposit_usdc == "50"
    assert settings.destination_domain == 9
    assert settings.compute_unit_limit == 73_737
    assert settings.compute_unit_price == 100_000
    assert settings.max_send_attempts == 3
    assert settings.keypair.pubkey() == kp.pubkey()


def test_reads_dotenv_file(tmp_path):
    kp = Keypair()
    (tmp_path / ".env").write_text(
        f"SOLANA_PRIVATE_KEY={kp}\n"
        f"APTOS_RECIPIENT_ADDRESS={RECIPIENT}\n"
        "DEPOSIT_USDC=12.5\n"
    )
    settings = load_settings()
    assert settings.deposit_usdc == "12.5"
    assert settings.aptos_recipient_address == RECIPIENT


def test_missing_private_key(monkeypatch):
    monkeypatch.setenv("APTOS_RECIPIENT_ADDRESS", RECIPIENT)
    with pytest.raises(ConfigurationError) as exc_info:
        load_settings()
    assert "SOLANA_PRIVATE_KEY" in str(exc_info.value)


def test_missing_recipient(monkeypatch):
    monkeypatch.setenv("SOLANA_PRIVATE_KEY", str(Keypair()))
    monkeypatch.setenv("APTOS_RECIPIENT_ADDRESS", "")
    with pytest.raises(ConfigurationError):
        load_settings()


def test_overrides(monkeypatch):
    monkeypatch.setenv("SOLANA_PRIVATE_KEY", str(Keypair()))
    settings = load_settings(aptos_recipient_address=RECIPIENT, deposit_usdc="3")
    assert settings.deposit_usdc == "3"


def test_parse_keypair_base58():
    kp = Keypair()
    assert parse_keypair(base58.b58encode(bytes(kp)).decode()) == kp


def test_parse_keypair_json_array():
    kp = Keypair()
    assert parse_keypair(json.dumps(list(bytes(kp)))) == kp


@pytest.mark.parametrize(
    "secret",
    ["not-base58-0OIl", "[1, 2, 3]", "[1, 2", "[300]", base58.b58encode(bytes(32)).decode()],
)
def test_parse_keypair_rejects(secret):
    with pytest.raises(ConfigurationError):
        parse_keypair(secret)

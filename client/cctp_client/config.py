import json

import base58
from pydantic import ValidationError
from pydantic_settings import BaseSettings, SettingsConfigDict
from solders.keypair import Keypair

from cctp_client.compute_budget.instructions import (
    DEFAULT_COMPUTE_UNIT_LIMIT,
    DEFAULT_COMPUTE_UNIT_PRICE,
)
from cctp_client.errors import ConfigurationError
from cctp_client.token_messenger_minter.actions import DEFAULT_MAX_SEND_ATTEMPTS
from cctp_client.token_messenger_minter.protocol import APTOS_DOMAIN

DEFAULT_RPC_URL = "https://api.mainnet-beta.solana.com"
SECRET_KEY_LEN = 64


class Settings(BaseSettings):
    solana_rpc_url: str = DEFAULT_RPC_URL
    solana_private_key: str
    aptos_recipient_address: str
    # kept as text; the amount normalizer reports non-numeric values
    deposit_usdc: str = "50"
    destination_domain: int = APTOS_DOMAIN
    compute_unit_limit: int = DEFAULT_COMPUTE_UNIT_LIMIT
    compute_unit_price: int = DEFAULT_COMPUTE_UNIT_PRICE
    max_send_attempts: int = DEFAULT_MAX_SEND_ATTEMPTS
    log_level: str = "INFO"

    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    @property
    def keypair(self) -> Keypair:
        return parse_keypair(self.solana_private_key)


def load_settings(**overrides) -> Settings:
    try:
        settings = Settings(**overrides)
    except ValidationError as e:
        fields = ", ".join(
            ".".join(str(p) for p in err["loc"]).upper() for err in e.errors()
        )
        raise ConfigurationError(f"Invalid or missing configuration: {fields}") from e

    if not settings.solana_private_key.strip():
        raise ConfigurationError("Set SOLANA_PRIVATE_KEY (base58 secret key or JSON array)")
    if not settings.aptos_recipient_address.strip():
        raise ConfigurationError(
            "Set APTOS_RECIPIENT_ADDRESS (destination address hex, 0x..., 32 bytes)"
        )
    if settings.max_send_attempts < 1:
        raise ConfigurationError("MAX_SEND_ATTEMPTS must be at least 1")
    return settings


def parse_keypair(secret: str) -> Keypair:
    """Accept a base58 secret key or a JSON array such as a solana-keygen file."""
    secret = secret.strip()
    try:
        if secret.startswith("["):
            raw = bytes(json.loads(secret))
        else:
            raw = base58.b58decode(secret)
    except (ValueError, TypeError) as e:
        raise ConfigurationError("Invalid SOLANA_PRIVATE_KEY (use base58 or JSON array)") from e

    if len(raw) != SECRET_KEY_LEN:
        raise ConfigurationError(
            f"Invalid SOLANA_PRIVATE_KEY: expected {SECRET_KEY_LEN} bytes, got {len(raw)}"
        )
    try:
        return Keypair.from_bytes(raw)
    except ValueError as e:
        raise ConfigurationError(f"Invalid SOLANA_PRIVATE_KEY: {e}") from e

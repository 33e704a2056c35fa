"""Version-scoped constants for the Token Messenger Minter `deposit_for_burn` call.

Everything the receiving program recomputes or indexes by position lives in one
frozen ``ProtocolVersion`` value. A protocol upgrade (new program ids, seeds,
discriminator name or account order) is a new instance, not an edit scattered
across modules.
"""
from dataclasses import dataclass, field
from typing import Dict

from solders.pubkey import Pubkey

from cctp_client import program_ids as pids
from cctp_client.errors import InvalidInputError
from cctp_client.utils.amounts import USDC_DECIMALS

APTOS_DOMAIN = 9


@dataclass(frozen=True)
class ProtocolVersion:
    name: str
    token_messenger_minter_program: Pubkey
    message_transmitter_program: Pubkey
    usdc_mint: Pubkey
    message_transmitter: Pubkey
    token_messenger: Pubkey
    local_token: Pubkey
    sender_authority: Pubkey
    # destination domain -> remote token messenger account
    remote_token_messengers: Dict[int, Pubkey] = field(default_factory=dict)
    domain_names: Dict[int, str] = field(default_factory=dict)
    token_minter_seed: bytes = b"token_minter"
    event_authority_seed: bytes = b"__event_authority"
    instruction_name: str = "deposit_for_burn"
    decimals: int = USDC_DECIMALS
    account_count: int = 17

    def remote_token_messenger(self, domain: int) -> Pubkey:
        try:
            return self.remote_token_messengers[domain]
        except KeyError:
            raise InvalidInputError(
                f"Unsupported destination domain {domain} for {self.name}. "
                f"Known domains: {sorted(self.remote_token_messengers)}"
            )

    def domain_name(self, domain: int) -> str:
        return self.domain_names.get(domain, f"domain {domain}")


CCTP_V1 = ProtocolVersion(
    name="cctp-v1",
    token_messenger_minter_program=pids.TOKEN_MESSENGER_MINTER_PROGRAM_ID,
    message_transmitter_program=pids.MESSAGE_TRANSMITTER_PROGRAM_ID,
    usdc_mint=Pubkey.from_string("EPjFWdd5AufqSSqeM2qN1xzybapC8G4wEGGkZwyTDt1v"),
    message_transmitter=Pubkey.from_string("BWrwSWjbikT3H7qHAkUEbLmwDQoB4ZDJ4wcSEhSPTZCu"),
    token_messenger=Pubkey.from_string("Afgq3BHEfCE7d78D2XE9Bfyu2ieDqvE24xX8KDwreBms"),
    local_token=Pubkey.from_string("72bvEFk2Usi2uYc1SnaTNhBcQPc6tiJWXr9oKk7rkd4C"),
    sender_authority=Pubkey.from_string("X5rMYSBWMqeWULSdDKXXATBjqk9AJF8odHpYJYeYA9H"),
    remote_token_messengers={
        APTOS_DOMAIN: Pubkey.from_string("3CTbq3SF9gekPHiJwLsyivfVbuaRFAQwQ6eQgtNy8nP1"),
    },
    domain_names={
        APTOS_DOMAIN: "Aptos",
    },
)

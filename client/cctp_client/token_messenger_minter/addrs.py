from typing import Tuple

from solders.pubkey import Pubkey
from spl.token.instructions import get_associated_token_address

from cctp_client.token_messenger_minter.protocol import CCTP_V1, ProtocolVersion


def find_program_address(seed: bytes, program_id: Pubkey) -> Tuple[Pubkey, int]:
    if not isinstance(seed, bytes) or not 0 < len(seed) <= 32:
        raise ValueError(f"Seed must be 1-32 bytes, got {seed!r}")
    return Pubkey.find_program_address([seed], program_id)


def get_token_minter_addr(protocol: ProtocolVersion = CCTP_V1) -> Pubkey:
    return find_program_address(
        protocol.token_minter_seed, protocol.token_messenger_minter_program
    )[0]


def get_event_authority_addr(protocol: ProtocolVersion = CCTP_V1) -> Pubkey:
    return find_program_address(
        protocol.event_authority_seed, protocol.token_messenger_minter_program
    )[0]


def get_burn_token_account(
        owner: Pubkey,
        protocol: ProtocolVersion = CCTP_V1,
) -> Pubkey:
    return get_associated_token_address(owner, protocol.usdc_mint)

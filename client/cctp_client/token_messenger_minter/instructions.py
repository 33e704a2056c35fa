from dataclasses import dataclass
from functools import lru_cache
from io import BytesIO
from typing import List, Optional

from podite import BYTES_CATALOG, FixedLenArray, U8, U32, U64, pod
from solders.instruction import AccountMeta, Instruction
from solders.pubkey import Pubkey

from cctp_client import program_ids as pids
from cctp_client.errors import InvalidInputError
from cctp_client.token_messenger_minter import addrs
from cctp_client.token_messenger_minter.protocol import CCTP_V1, ProtocolVersion
from cctp_client.utils.solana import sighash


@lru_cache(maxsize=None)
def instruction_discriminator(ix_name: str) -> bytes:
    return sighash(ix_name)


DEPOSIT_FOR_BURN_DISCRIMINATOR = instruction_discriminator(CCTP_V1.instruction_name)
DEPOSIT_FOR_BURN_DATA_LEN = 8 + 8 + 4 + 32


@pod
class DepositForBurnParams:
    amount: U64
    destination_domain: U32
    mint_recipient: FixedLenArray[U8, 32]

    @classmethod
    def to_bytes(cls, obj, **kwargs):
        return cls.pack(obj, converter="bytes", **kwargs)

    @classmethod
    def from_bytes(cls, raw, **kwargs):
        return cls.unpack(raw, converter="bytes", **kwargs)


def encode_deposit_for_burn_data(
        amount: int,
        destination_domain: int,
        mint_recipient: bytes,
        protocol: ProtocolVersion = CCTP_V1,
) -> bytes:
    if len(mint_recipient) != 32:
        raise ValueError(f"mint_recipient must be 32 bytes, got {len(mint_recipient)}")
    if not 0 <= amount < 2 ** 64:
        raise InvalidInputError(f"amount does not fit in u64: {amount}")
    if not 0 <= destination_domain < 2 ** 32:
        raise InvalidInputError(f"destination_domain does not fit in u32: {destination_domain}")

    buffer = BytesIO()
    buffer.write(instruction_discriminator(protocol.instruction_name))
    buffer.write(BYTES_CATALOG.pack(DepositForBurnParams, DepositForBurnParams(
        amount=amount,
        destination_domain=destination_domain,
        mint_recipient=list(mint_recipient),
    )))
    return buffer.getvalue()


@dataclass
class DepositForBurnIx:
    program_id: Pubkey

    # account metas, in the order the program decodes them
    owner: AccountMeta
    event_rent_payer: AccountMeta
    sender_authority_pda: AccountMeta
    burn_token_account: AccountMeta
    message_transmitter: AccountMeta
    token_messenger: AccountMeta
    remote_token_messenger: AccountMeta
    token_minter: AccountMeta
    local_token: AccountMeta
    burn_token_mint: AccountMeta
    message_sent_event_data: AccountMeta
    message_transmitter_program: AccountMeta
    token_messenger_minter_program: AccountMeta
    token_program: AccountMeta
    system_program: AccountMeta
    event_authority: AccountMeta
    program: AccountMeta

    # data
    data: bytes

    def account_metas(self) -> List[AccountMeta]:
        return [
            self.owner,
            self.event_rent_payer,
            self.sender_authority_pda,
            self.burn_token_account,
            self.message_transmitter,
            self.token_messenger,
            self.remote_token_messenger,
            self.token_minter,
            self.local_token,
            self.burn_token_mint,
            self.message_sent_event_data,
            self.message_transmitter_program,
            self.token_messenger_minter_program,
            self.token_program,
            self.system_program,
            self.event_authority,
            self.program,
        ]

    def to_instruction(self) -> Instruction:
        return Instruction(
            program_id=self.program_id,
            data=self.data,
            accounts=self.account_metas(),
        )


def deposit_for_burn_ix(
        owner: Pubkey,
        burn_token_account: Pubkey,
        message_sent_event_data: Pubkey,
        amount: int,
        destination_domain: int,
        mint_recipient: bytes,
        event_rent_payer: Optional[Pubkey] = None,
        protocol: ProtocolVersion = CCTP_V1,
) -> Instruction:
    if event_rent_payer is None:
        event_rent_payer = owner
    program_id = protocol.token_messenger_minter_program

    ix = DepositForBurnIx(
        program_id=program_id,
        owner=AccountMeta(owner, is_signer=True, is_writable=False),
        event_rent_payer=AccountMeta(event_rent_payer, is_signer=True, is_writable=True),
        sender_authority_pda=AccountMeta(protocol.sender_authority, is_signer=False, is_writable=False),
        burn_token_account=AccountMeta(burn_token_account, is_signer=False, is_writable=True),
        message_transmitter=AccountMeta(protocol.message_transmitter, is_signer=False, is_writable=True),
        token_messenger=AccountMeta(protocol.token_messenger, is_signer=False, is_writable=False),
        remote_token_messenger=AccountMeta(
            protocol.remote_token_messenger(destination_domain), is_signer=False, is_writable=False
        ),
        token_minter=AccountMeta(addrs.get_token_minter_addr(protocol), is_signer=False, is_writable=False),
        local_token=AccountMeta(protocol.local_token, is_signer=False, is_writable=True),
        burn_token_mint=AccountMeta(protocol.usdc_mint, is_signer=False, is_writable=True),
        message_sent_event_data=AccountMeta(message_sent_event_data, is_signer=True, is_writable=True),
        message_transmitter_program=AccountMeta(
            protocol.message_transmitter_program, is_signer=False, is_writable=False
        ),
        token_messenger_minter_program=AccountMeta(program_id, is_signer=False, is_writable=False),
        token_program=AccountMeta(pids.SPL_TOKEN_PROGRAM_ID, is_signer=False, is_writable=False),
        system_program=AccountMeta(pids.SYSTEM_PROGRAM_ID, is_signer=False, is_writable=False),
        event_authority=AccountMeta(addrs.get_event_authority_addr(protocol), is_signer=False, is_writable=False),
        program=AccountMeta(program_id, is_signer=False, is_writable=False),
        data=encode_deposit_for_burn_data(amount, destination_domain, mint_recipient, protocol),
    )
    assert len(ix.account_metas()) == protocol.account_count
    return ix.to_instruction()

import hashlib

import pytest
from solders.keypair import Keypair

from cctp_client import program_ids as pids
from cctp_client.errors import InvalidInputError
from cctp_client.token_messenger_minter import APTOS_DOMAIN, CCTP_V1
from cctp_client.token_messenger_minter.addrs import (
    get_burn_token_account,
    get_event_authority_addr,
    get_token_minter_addr,
)
from cctp_client.token_messenger_minter.instructions import (
    DEPOSIT_FOR_BURN_DATA_LEN,
    DEPOSIT_FOR_BURN_DISCRIMINATOR,
    DepositForBurnParams,
    deposit_for_burn_ix,
    encode_deposit_for_burn_data,
)
from cctp_client.token_messenger_minter.recipient import encode_mint_recipient


def test_discriminator():
    assert DEPOSIT_FOR_BURN_DISCRIMINATOR == hashlib.sha256(b"global:deposit_for_burn").digest()[:8]


@pytest.mark.parametrize(
    ("amount", "domain", "recipient"),
    [
        (50_000_000, 9, bytes(32)),
        (1, 0, b"\xff" * 32),
        (2 ** 64 - 1, 2 ** 32 - 1, bytes(range(32))),
        (0, 5, b"\x01" * 32),
    ],
)
def test_encode_deposit_for_burn_data_layout(amount, domain, recipient):
    data = encode_deposit_for_burn_data(amount, domain, recipient)
    assert len(data) == DEPOSIT_FOR_BURN_DATA_LEN == 52
    assert data[0:8] == DEPOSIT_FOR_BURN_DISCRIMINATOR
    assert int.from_bytes(data[8:16], "little") == amount
    assert int.from_bytes(data[16:20], "little") == domain
    assert data[20:52] == recipient
    assert encode_deposit_for_burn_data(amount, domain, recipient) == data


def test_params_unpack():
    data = encode_deposit_for_burn_data(50_000_000, APTOS_DOMAIN, b"\x07" * 32)
    params = DepositForBurnParams.from_bytes(data[8:])
    assert params.amount == 50_000_000
    assert params.destination_domain == APTOS_DOMAIN
    assert bytes(params.mint_recipient) == b"\x07" * 32


@pytest.mark.parametrize(
    ("amount", "domain", "recipient", "error"),
    [
        (2 ** 64, 9, bytes(32), InvalidInputError),
        (-1, 9, bytes(32), InvalidInputError),
        (1, 2 ** 32, bytes(32), InvalidInputError),
        (1, 9, bytes(31), ValueError),
    ],
)
def test_encode_deposit_for_burn_data_rejects(amount, domain, recipient, error):
    with pytest.raises(error):
        encode_deposit_for_burn_data(amount, domain, recipient)


def test_fifty_usdc_to_aptos_scenario(owner):
    recipient = encode_mint_recipient("0x" + "0" * 64)
    assert recipient == bytes(32)
    event = Keypair()
    ix = deposit_for_burn_ix(
        owner=owner.pubkey(),
        burn_token_account=get_burn_token_account(owner.pubkey()),
        message_sent_event_data=event.pubkey(),
        amount=50_000_000,
        destination_domain=9,
        mint_recipient=recipient,
    )
    data = bytes(ix.data)
    assert len(data) == 52
    assert int.from_bytes(data[8:16], "little") == 50_000_000
    assert ix.program_id == pids.TOKEN_MESSENGER_MINTER_PROGRAM_ID


def test_account_list(owner):
    event = Keypair()
    burn_token_account = get_burn_token_account(owner.pubkey())
    ix = deposit_for_burn_ix(
        owner=owner.pubkey(),
        burn_token_account=burn_token_account,
        message_sent_event_data=event.pubkey(),
        amount=1,
        destination_domain=APTOS_DOMAIN,
        mint_recipient=bytes(32),
    )
    expected = [
        (owner.pubkey(), True, False),
        (owner.pubkey(), True, True),
        (CCTP_V1.sender_authority, False, False),
        (burn_token_account, False, True),
        (CCTP_V1.message_transmitter, False, True),
        (CCTP_V1.token_messenger, False, False),
        (CCTP_V1.remote_token_messenger(APTOS_DOMAIN), False, False),
        (get_token_minter_addr(), False, False),
        (CCTP_V1.local_token, False, True),
        (CCTP_V1.usdc_mint, False, True),
        (event.pubkey(), True, True),
        (pids.MESSAGE_TRANSMITTER_PROGRAM_ID, False, False),
        (pids.TOKEN_MESSENGER_MINTER_PROGRAM_ID, False, False),
        (pids.SPL_TOKEN_PROGRAM_ID, False, False),
        (pids.SYSTEM_PROGRAM_ID, False, False),
        (get_event_authority_addr(), False, False),
        (pids.TOKEN_MESSENGER_MINTER_PROGRAM_ID, False, False),
    ]
    actual = [(m.pubkey, m.is_signer, m.is_writable) for m in ix.accounts]
    assert len(actual) == CCTP_V1.account_count == 17
    assert actual == expected

    signers = {m.pubkey for m in ix.accounts if m.is_signer}
    assert signers == {owner.pubkey(), event.pubkey()}
    writable = {m.pubkey for m in ix.accounts if m.is_writable}
    assert writable == {
        owner.pubkey(),
        burn_token_account,
        CCTP_V1.message_transmitter,
        CCTP_V1.local_token,
        CCTP_V1.usdc_mint,
        event.pubkey(),
    }


def test_unknown_domain_is_rejected(owner):
    with pytest.raises(InvalidInputError):
        deposit_for_burn_ix(
            owner=owner.pubkey(),
            burn_token_account=get_burn_token_account(owner.pubkey()),
            message_sent_event_data=Keypair().pubkey(),
            amount=1,
            destination_domain=42,
            mint_recipient=bytes(32),
        )

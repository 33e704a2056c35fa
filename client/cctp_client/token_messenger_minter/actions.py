from dataclasses import dataclass
from enum import Enum
from typing import List, Optional

import structlog
from solana.rpc.api import Client
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from cctp_client.compute_budget import set_compute_unit_limit_ix, set_compute_unit_price_ix
from cctp_client.compute_budget.instructions import (
    DEFAULT_COMPUTE_UNIT_LIMIT,
    DEFAULT_COMPUTE_UNIT_PRICE,
)
from cctp_client.errors import (
    InvalidInputError,
    ProtocolMismatchError,
    SubmissionTimeoutError,
    TransientNetworkError,
)
from cctp_client.token_messenger_minter.instructions import deposit_for_burn_ix
from cctp_client.token_messenger_minter.preflight import check_burn_token_account
from cctp_client.token_messenger_minter.protocol import APTOS_DOMAIN, CCTP_V1, ProtocolVersion
from cctp_client.token_messenger_minter.recipient import encode_mint_recipient
from cctp_client.utils.amounts import AmountLike, to_base_units
from cctp_client.utils.solana import (
    TRANSIENT_ERRORS,
    confirm_signature,
    latest_blockhash,
    send_signed_transaction,
    sign_transaction,
    signature_landed,
)

logger = structlog.get_logger(__name__)

DEFAULT_MAX_SEND_ATTEMPTS = 3


@dataclass(frozen=True)
class BurnRequest:
    owner: Pubkey
    burn_token_account: Pubkey
    amount: int  # base units
    destination_domain: int
    mint_recipient: bytes


class MessageSentEventAccount:
    """Single-use keypair for the account that stores the MessageSent event.

    The program creates this account inside the burn, so a keypair can back
    exactly one transaction. `claim()` hands the keypair out once.
    """

    def __init__(self, keypair: Keypair):
        self._keypair = keypair
        self._claimed = False

    @classmethod
    def generate(cls) -> "MessageSentEventAccount":
        return cls(Keypair())

    @property
    def pubkey(self) -> Pubkey:
        return self._keypair.pubkey()

    @property
    def claimed(self) -> bool:
        return self._claimed

    def claim(self) -> Keypair:
        if self._claimed:
            raise RuntimeError(f"Event account {self.pubkey} was already used by a transaction")
        self._claimed = True
        return self._keypair


class TxStatus(Enum):
    BUILT = "built"
    SIGNED = "signed"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class BurnTransaction:
    def __init__(self, instructions: List[Instruction], owner: Keypair, event_keypair: Keypair):
        self.instructions = instructions
        self.owner = owner
        self.event_keypair = event_keypair
        self.status = TxStatus.BUILT

    @property
    def signers(self) -> List[Keypair]:
        return [self.owner, self.event_keypair]

    @staticmethod
    def assemble(
            request: BurnRequest,
            owner: Keypair,
            event_account: MessageSentEventAccount,
            compute_unit_limit: int = DEFAULT_COMPUTE_UNIT_LIMIT,
            compute_unit_price: int = DEFAULT_COMPUTE_UNIT_PRICE,
            protocol: ProtocolVersion = CCTP_V1,
    ) -> "BurnTransaction":
        if owner.pubkey() != request.owner:
            raise ValueError(f"Keypair {owner.pubkey()} does not own request for {request.owner}")
        event_keypair = event_account.claim()
        burn_ix = deposit_for_burn_ix(
            owner=request.owner,
            burn_token_account=request.burn_token_account,
            message_sent_event_data=event_keypair.pubkey(),
            amount=request.amount,
            destination_domain=request.destination_domain,
            mint_recipient=request.mint_recipient,
            protocol=protocol,
        )
        logger.debug(
            "deposit_for_burn instruction built",
            event_account=str(event_keypair.pubkey()),
            data=bytes(burn_ix.data).hex(),
        )
        return BurnTransaction(
            [
                set_compute_unit_limit_ix(compute_unit_limit),
                set_compute_unit_price_ix(compute_unit_price),
                burn_ix,
            ],
            owner,
            event_keypair,
        )

    def sign(self, recent_blockhash) -> Transaction:
        tx = sign_transaction(self.instructions, self.owner.pubkey(), self.signers, recent_blockhash)
        self.status = TxStatus.SIGNED
        return tx

    def submit(
            self,
            client: Client,
            max_attempts: int = DEFAULT_MAX_SEND_ATTEMPTS,
            sleep_seconds: float = 0.5,
    ) -> Signature:
        """Send and confirm, resending with a fresh blockhash on transient failure.

        Every attempt is signed by the same event account, so at most one of the
        sent signatures can ever execute.
        """
        sent: List[Signature] = []
        last_error: Optional[Exception] = None
        for attempt in range(1, max_attempts + 1):
            try:
                landed = self._find_landed(client, sent)
                if landed is not None:
                    return self._confirmed(confirm_signature(client, landed, sleep_seconds=sleep_seconds))

                blockhash, last_valid_block_height = latest_blockhash(client)
                tx = self.sign(blockhash)
                sig = send_signed_transaction(client, tx)
                sent.append(sig)
                self.status = TxStatus.SUBMITTED
                logger.info("transaction submitted", signature=str(sig), attempt=attempt)

                return self._confirmed(confirm_signature(
                    client, sig,
                    last_valid_block_height=last_valid_block_height,
                    sleep_seconds=sleep_seconds,
                ))
            except TRANSIENT_ERRORS as e:
                last_error = e
                logger.warning(
                    "transient submission failure",
                    attempt=attempt,
                    max_attempts=max_attempts,
                    error=repr(e),
                )
            except ProtocolMismatchError:
                # a resend is rejected once an earlier signature used the event account
                self.status = TxStatus.FAILED
                landed = self._find_landed(client, sent)
                if landed is not None:
                    return self._confirmed(confirm_signature(client, landed, sleep_seconds=sleep_seconds))
                raise
            except Exception:
                self.status = TxStatus.FAILED
                raise

        self.status = TxStatus.FAILED
        if sent:
            raise SubmissionTimeoutError(
                f"Transaction not confirmed after {max_attempts} attempts "
                f"(signatures: {', '.join(str(s) for s in sent)})"
            ) from last_error
        raise TransientNetworkError(
            f"Transaction could not be sent after {max_attempts} attempts: {last_error!r}"
        ) from last_error

    @staticmethod
    def _find_landed(client: Client, sent: List[Signature]) -> Optional[Signature]:
        for sig in sent:
            if signature_landed(client, sig):
                return sig
        return None

    def _confirmed(self, sig: Signature) -> Signature:
        self.status = TxStatus.CONFIRMED
        logger.info("transaction confirmed", signature=str(sig))
        return sig


def build_burn_request(
        client: Client,
        owner: Pubkey,
        recipient: str,
        amount: AmountLike,
        destination_domain: int = APTOS_DOMAIN,
        protocol: ProtocolVersion = CCTP_V1,
) -> BurnRequest:
    # local validation first: nothing below touches the network until preflight
    amount_raw = to_base_units(amount, protocol.decimals)
    if amount_raw == 0:
        raise InvalidInputError(f"Amount {amount!r} rounds to zero base units")
    mint_recipient = encode_mint_recipient(recipient)
    protocol.remote_token_messenger(destination_domain)

    burn_token_account = check_burn_token_account(client, owner, amount_raw, protocol)
    return BurnRequest(
        owner=owner,
        burn_token_account=burn_token_account,
        amount=amount_raw,
        destination_domain=destination_domain,
        mint_recipient=mint_recipient,
    )


def deposit_for_burn(
        client: Client,
        owner: Keypair,
        recipient: str,
        amount: AmountLike,
        destination_domain: int = APTOS_DOMAIN,
        compute_unit_limit: int = DEFAULT_COMPUTE_UNIT_LIMIT,
        compute_unit_price: int = DEFAULT_COMPUTE_UNIT_PRICE,
        max_attempts: int = DEFAULT_MAX_SEND_ATTEMPTS,
        protocol: ProtocolVersion = CCTP_V1,
) -> Signature:
    """Burn `amount` USDC from the owner's token account and emit a CCTP message
    minting it to `recipient` on `destination_domain`.

    Returns the confirmed transaction signature. Any failure raises a
    `CctpClientError` subclass; nothing is submitted unless every local check
    and the balance preflight pass.
    """
    request = build_burn_request(
        client, owner.pubkey(), recipient, amount, destination_domain, protocol
    )
    tx = BurnTransaction.assemble(
        request,
        owner,
        MessageSentEventAccount.generate(),
        compute_unit_limit=compute_unit_limit,
        compute_unit_price=compute_unit_price,
        protocol=protocol,
    )
    return tx.submit(client, max_attempts=max_attempts)

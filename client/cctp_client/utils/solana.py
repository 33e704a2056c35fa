from hashlib import sha256
from typing import List, Optional, Sequence, Tuple

import httpx
import structlog
from solana.exceptions import SolanaRpcException
from solana.rpc.api import Client
from solana.rpc.commitment import Confirmed
from solana.rpc.core import (
    RPCException,
    TransactionExpiredBlockheightExceededError,
    UnconfirmedTxError,
)
from solana.rpc.types import TxOpts
from solders.hash import Hash
from solders.instruction import Instruction
from solders.keypair import Keypair
from solders.message import Message
from solders.pubkey import Pubkey
from solders.signature import Signature
from solders.transaction import Transaction

from cctp_client.errors import ExternalServiceError, ProtocolMismatchError

logger = structlog.get_logger(__name__)

TRANSIENT_ERRORS = (
    httpx.HTTPError,
    SolanaRpcException,
    UnconfirmedTxError,
    TransactionExpiredBlockheightExceededError,
)


def sighash(ix_name: str) -> bytes:
    """Not technically sighash, since we don't include the arguments.
    (Because Rust doesn't allow function overloading.)
    Args:
        ix_name: The instruction name.
    Returns:
        The sighash bytes.
    """
    formatted_str = f"global:{ix_name}"
    return sha256(formatted_str.encode()).digest()[:8]


def sighash_int(ix_name: str) -> int:
    return int.from_bytes(sighash(ix_name), byteorder="little")


def rpc_error_logs(err: RPCException) -> List[str]:
    # preflight failures carry the simulated program logs
    payload = err.args[0] if err.args else None
    data = getattr(payload, "data", None)
    return list(getattr(data, "logs", None) or [])


def rpc_error_message(err: RPCException) -> str:
    payload = err.args[0] if err.args else None
    return getattr(payload, "message", None) or str(err)


def fetch_account_info(client: Client, addr: Pubkey):
    try:
        resp = client.get_account_info(addr, commitment=Confirmed)
    except (RPCException, SolanaRpcException, httpx.HTTPError) as e:
        raise ExternalServiceError(f"getAccountInfo({addr}) failed: {e}") from e
    return resp.value


def fetch_token_balance(client: Client, addr: Pubkey) -> int:
    try:
        resp = client.get_token_account_balance(addr, commitment=Confirmed)
    except (RPCException, SolanaRpcException, httpx.HTTPError) as e:
        raise ExternalServiceError(
            f"getTokenAccountBalance({addr}) failed: {e}"
        ) from e
    return int(resp.value.amount)


def latest_blockhash(client: Client) -> Tuple[Hash, int]:
    try:
        resp = client.get_latest_blockhash(commitment=Confirmed)
    except RPCException as e:
        raise ExternalServiceError(f"getLatestBlockhash failed: {e}") from e
    return resp.value.blockhash, resp.value.last_valid_block_height


def sign_transaction(
        instructions: Sequence[Instruction],
        payer: Pubkey,
        signers: Sequence[Keypair],
        recent_blockhash: Hash,
) -> Transaction:
    message = Message.new_with_blockhash(list(instructions), payer, recent_blockhash)
    return Transaction(list(signers), message, recent_blockhash)


def send_signed_transaction(
        client: Client,
        tx: Transaction,
        opts: TxOpts = TxOpts(
            skip_preflight=False,
            skip_confirmation=True,
            preflight_commitment=Confirmed,
        ),
) -> Signature:
    """Send without waiting; node-side rejections become ProtocolMismatchError."""
    try:
        return client.send_transaction(tx, opts=opts).value
    except RPCException as e:
        raise ProtocolMismatchError(
            f"Transaction rejected: {rpc_error_message(e)}", rpc_error_logs(e)
        ) from e


def confirm_signature(
        client: Client,
        sig: Signature,
        last_valid_block_height: Optional[int] = None,
        sleep_seconds: float = 0.5,
) -> Signature:
    resp = client.confirm_transaction(
        sig,
        Confirmed,
        sleep_seconds=sleep_seconds,
        last_valid_block_height=last_valid_block_height,
    )
    status = resp.value[0] if resp.value else None
    if status is not None and status.err is not None:
        raise ProtocolMismatchError(f"Transaction {sig} failed on-chain: {status.err}")
    return sig


def signature_landed(client: Client, sig: Signature) -> bool:
    try:
        resp = client.get_signature_statuses([sig])
    except TRANSIENT_ERRORS:
        return False
    status = resp.value[0] if resp.value else None
    if status is None:
        return False
    if status.err is not None:
        raise ProtocolMismatchError(f"Transaction {sig} failed on-chain: {status.err}")
    return True

import structlog
from solana.rpc.api import Client
from solders.pubkey import Pubkey

from cctp_client.errors import AccountNotProvisionedError, InsufficientFundsError
from cctp_client.token_messenger_minter.addrs import get_burn_token_account
from cctp_client.token_messenger_minter.protocol import CCTP_V1, ProtocolVersion
from cctp_client.utils.solana import fetch_account_info, fetch_token_balance

logger = structlog.get_logger(__name__)


def check_burn_token_account(
        client: Client,
        owner: Pubkey,
        amount: int,
        protocol: ProtocolVersion = CCTP_V1,
) -> Pubkey:
    """Return the owner's USDC token account once it is known to cover `amount`.

    Raises:
        AccountNotProvisionedError: the associated token account does not exist.
        InsufficientFundsError: its balance (base units) is below `amount`.
        ExternalServiceError: the node did not answer a read.
    """
    token_account = get_burn_token_account(owner, protocol)
    if fetch_account_info(client, token_account) is None:
        raise AccountNotProvisionedError(token_account)

    balance = fetch_token_balance(client, token_account)
    logger.info(
        "burn token account balance",
        token_account=str(token_account),
        balance=balance,
        requested=amount,
    )
    if balance < amount:
        raise InsufficientFundsError(available=balance, requested=amount)
    return token_account

import argparse
import sys

import structlog
from solana.rpc.api import Client

from cctp_client.config import load_settings
from cctp_client.errors import ConfigurationError, CctpClientError
from cctp_client.log import configure_logging
from cctp_client.token_messenger_minter import CCTP_V1, deposit_for_burn

logger = structlog.get_logger(__name__)


def parse_args(argv=None):
    ap = argparse.ArgumentParser(
        description="Burn USDC on Solana via CCTP depositForBurn and mint it on the destination domain.",
    )
    ap.add_argument("--rpc-url", help="overrides SOLANA_RPC_URL")
    ap.add_argument("--recipient", help="overrides APTOS_RECIPIENT_ADDRESS")
    ap.add_argument("--amount", help="USDC amount, overrides DEPOSIT_USDC")
    ap.add_argument("--domain", type=int, help="destination domain, overrides DESTINATION_DOMAIN")
    return ap.parse_args(argv)


def main(argv=None):
    args = parse_args(argv)
    overrides = {
        "solana_rpc_url": args.rpc_url,
        "aptos_recipient_address": args.recipient,
        "deposit_usdc": args.amount,
        "destination_domain": args.domain,
    }
    try:
        settings = load_settings(**{k: v for k, v in overrides.items() if v is not None})
        owner = settings.keypair
    except ConfigurationError as e:
        print(f"Configuration error: {e}", file=sys.stderr)
        return 2

    configure_logging(settings.log_level)
    logger.info("depositing for burn", owner=str(owner.pubkey()), rpc=settings.solana_rpc_url)

    try:
        sig = deposit_for_burn(
            Client(settings.solana_rpc_url),
            owner,
            recipient=settings.aptos_recipient_address,
            amount=settings.deposit_usdc,
            destination_domain=settings.destination_domain,
            compute_unit_limit=settings.compute_unit_limit,
            compute_unit_price=settings.compute_unit_price,
            max_attempts=settings.max_send_attempts,
        )
    except CctpClientError as e:
        print(f"Error: {e}", file=sys.stderr)
        return 1

    domain = settings.destination_domain
    print(f"CCTP depositForBurn ok. Tx: {sig}")
    print(
        f"  {settings.deposit_usdc} USDC Solana -> {CCTP_V1.domain_name(domain)} (domain {domain}), "
        f"recipient: {settings.aptos_recipient_address[:18]}..."
    )
    return 0


if __name__ == "__main__":
    sys.exit(main())

from .actions import (
    BurnRequest,
    BurnTransaction,
    MessageSentEventAccount,
    build_burn_request,
    deposit_for_burn,
)
from .protocol import APTOS_DOMAIN, CCTP_V1, ProtocolVersion

__all__ = [
    "APTOS_DOMAIN",
    "BurnRequest",
    "BurnTransaction",
    "CCTP_V1",
    "MessageSentEventAccount",
    "ProtocolVersion",
    "build_burn_request",
    "deposit_for_burn",
]

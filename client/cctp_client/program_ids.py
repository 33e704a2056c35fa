from solders.pubkey import Pubkey
from solders.system_program import ID as SYS_PROGRAM_ID
from spl.token.constants import ASSOCIATED_TOKEN_PROGRAM_ID, TOKEN_PROGRAM_ID

SYSTEM_PROGRAM_ID = SYS_PROGRAM_ID
SPL_TOKEN_PROGRAM_ID = TOKEN_PROGRAM_ID
SPL_ASSOCIATED_TOKEN_PROGRAM_ID = ASSOCIATED_TOKEN_PROGRAM_ID
COMPUTE_BUDGET_PROGRAM_ID = Pubkey.from_string(
    "ComputeBudget111111111111111111111111111111"
)

# CCTP V1 (legacy) mainnet deployments
TOKEN_MESSENGER_MINTER_PROGRAM_ID = Pubkey.from_string(
    "CCTPiPYPc6AsJuwueEnWgSgucamXDZwBd53dQ11YiKX3"
)
MESSAGE_TRANSMITTER_PROGRAM_ID = Pubkey.from_string(
    "CCTPmbSD7gX1bxKPAmg77w8oFzNFpaQiQUWD43TKaecd"
)

class CctpClientError(Exception):
    """Base class for every failure surfaced by the deposit-for-burn pipeline."""


class ConfigurationError(CctpClientError):
    pass


class InvalidInputError(CctpClientError, ValueError):
    pass


class PreconditionError(CctpClientError):
    pass


class AccountNotProvisionedError(PreconditionError):
    def __init__(self, token_account):
        self.token_account = token_account
        super().__init__(
            f"Token account {token_account} does not exist. "
            f"Create it first or hold some USDC on Solana."
        )


class InsufficientFundsError(PreconditionError):
    def __init__(self, available: int, requested: int):
        self.available = available
        self.requested = requested
        super().__init__(
            f"Not enough USDC. Have {available} base units, need {requested}"
        )


class ExternalServiceError(CctpClientError):
    pass


class TransientNetworkError(ExternalServiceError):
    pass


class SubmissionTimeoutError(TransientNetworkError):
    pass


class ProtocolMismatchError(CctpClientError):
    def __init__(self, message: str, logs=None):
        self.logs = list(logs or [])
        if self.logs:
            message = message + "\nLog messages:\n" + "\n".join(self.logs)
        super().__init__(message)

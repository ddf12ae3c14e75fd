"""Exception hierarchy for the ERC-20 demo.

Every error is fatal to a demo run; callers catch ``Erc20DemoError`` at the
top level and report the cause.
"""


class Erc20DemoError(Exception):
    """Base class for all errors raised by this package."""


class ConfigurationError(Erc20DemoError):
    """A required setting is missing or cannot be parsed."""


class ChainConnectionError(Erc20DemoError, ConnectionError):
    """The RPC endpoint cannot be reached."""


class InvalidPrivateKey(Erc20DemoError, ValueError):
    """The private key is not valid hex or not a valid secp256k1 scalar."""


class InvalidNumberFormat(Erc20DemoError, ValueError):
    """Numeric input to an amount conversion could not be parsed."""


class ContractCallError(Erc20DemoError):
    """A contract read or write was rejected by the node."""

    def __init__(self, method: str, cause: BaseException):
        super().__init__(f"{method} failed: {cause}")
        self.method = method
        self.cause = cause


class SubscriptionError(Erc20DemoError):
    """The new-header subscription could not be opened or broke mid-wait."""


class TransactionFailedError(Erc20DemoError):
    """A transaction was mined with receipt status 0."""

    def __init__(self, tx_hash: str):
        super().__init__(f"transaction {tx_hash} reverted")
        self.tx_hash = tx_hash


class ConfirmationTimeout(Erc20DemoError, TimeoutError):
    """No receipt resolved before the confirmation deadline."""

    def __init__(self, tx_hash: str, timeout: float):
        super().__init__(f"transaction {tx_hash} not confirmed within {timeout}s")
        self.tx_hash = tx_hash
        self.timeout = timeout

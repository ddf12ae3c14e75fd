"""
erc20demo - ERC-20 walkthrough on web3.py

Token amount conversion, account derivation, a typed ERC-20 client and
block-driven transaction confirmation, tied together by a scripted
transfer / approve / transferFrom demo.
"""

from .account import Account, TransactOpts, account_from_node, derive_account
from .amounts import format_amount, to_decimal, to_wei
from .client import connect
from .config import Settings
from .exceptions import (
    ChainConnectionError,
    ConfigurationError,
    ConfirmationTimeout,
    ContractCallError,
    Erc20DemoError,
    InvalidNumberFormat,
    InvalidPrivateKey,
    SubscriptionError,
    TransactionFailedError,
)
from .models import (
    ApprovalEvent,
    Confirmation,
    ConfirmationStatus,
    ReceiptStatus,
    TokenMetadata,
    TransactionHandle,
    TransferEvent,
)
from .subscription import BlockFilterSubscription, SubscriptionEvent
from .token import ERC20Token
from .types import as_address, as_bytes, as_checksum_address, as_hash32, hash_to_hex
from .waiter import ConfirmationWaiter

__version__ = "0.1.0"

__all__ = [
    "Account",
    "ApprovalEvent",
    "BlockFilterSubscription",
    "ChainConnectionError",
    "ConfigurationError",
    "Confirmation",
    "ConfirmationStatus",
    "ConfirmationTimeout",
    "ConfirmationWaiter",
    "ContractCallError",
    "ERC20Token",
    "Erc20DemoError",
    "InvalidNumberFormat",
    "InvalidPrivateKey",
    "ReceiptStatus",
    "Settings",
    "SubscriptionError",
    "SubscriptionEvent",
    "TokenMetadata",
    "TransactOpts",
    "TransactionFailedError",
    "TransactionHandle",
    "TransferEvent",
    "account_from_node",
    "as_address",
    "as_bytes",
    "as_checksum_address",
    "as_hash32",
    "connect",
    "derive_account",
    "format_amount",
    "hash_to_hex",
    "to_decimal",
    "to_wei",
]

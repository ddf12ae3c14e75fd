"""Strongly-typed records exchanged between the token client, the waiter and the demo."""

import enum
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from .exceptions import ConfirmationTimeout, SubscriptionError, TransactionFailedError


class ReceiptStatus(enum.Enum):
    """Receipt state of a submitted transaction."""

    PENDING = "pending"  # no receipt yet
    FAILED = "failed"  # status 0
    SUCCEEDED = "succeeded"  # status 1

    @classmethod
    def from_receipt(cls, receipt: Optional[Mapping[str, Any]]) -> "ReceiptStatus":
        if receipt is None:
            return cls.PENDING
        status = receipt.get("status")
        if status == 1:
            return cls.SUCCEEDED
        if status == 0:
            return cls.FAILED
        return cls.PENDING


class ConfirmationStatus(enum.Enum):
    """Terminal outcome of waiting for a transaction."""

    SUCCEEDED = "succeeded"
    FAILED = "failed"
    SUBSCRIPTION_ERROR = "subscription_error"
    TIMED_OUT = "timed_out"


@dataclass(frozen=True)
class TransactionHandle:
    """A submitted transaction, identified by its hash."""

    tx_hash: str
    sender: str
    method: str

    def __str__(self) -> str:
        return self.tx_hash


@dataclass(frozen=True)
class Confirmation:
    """Result of ``ConfirmationWaiter.wait_for_confirmation``."""

    tx_hash: str
    status: ConfirmationStatus
    polls: int = 0
    receipt: Optional[Mapping[str, Any]] = None
    error: Optional[BaseException] = None
    timeout: Optional[float] = None

    @property
    def succeeded(self) -> bool:
        return self.status is ConfirmationStatus.SUCCEEDED

    def raise_for_status(self) -> "Confirmation":
        """Raise the matching error unless the transaction succeeded.

        Returns:
            self, so the call can be chained

        Raises:
            TransactionFailedError: receipt status was 0
            SubscriptionError: the header subscription broke
            ConfirmationTimeout: the deadline expired
        """
        if self.status is ConfirmationStatus.FAILED:
            raise TransactionFailedError(self.tx_hash)
        if self.status is ConfirmationStatus.SUBSCRIPTION_ERROR:
            raise SubscriptionError(
                f"subscription broke while waiting for {self.tx_hash}: {self.error}"
            ) from self.error
        if self.status is ConfirmationStatus.TIMED_OUT:
            raise ConfirmationTimeout(self.tx_hash, self.timeout or 0.0)
        return self


@dataclass(frozen=True)
class TokenMetadata:
    """Static properties of an ERC-20 token."""

    name: str
    symbol: str
    decimals: int
    total_supply: int


@dataclass(frozen=True)
class TransferEvent:
    """Decoded ``Transfer(address indexed from, address indexed to, uint256 value)`` log."""

    sender: str
    recipient: str
    value: int
    block_number: int
    tx_hash: str


@dataclass(frozen=True)
class ApprovalEvent:
    """Decoded ``Approval(address indexed owner, address indexed spender, uint256 value)`` log."""

    owner: str
    spender: str
    value: int
    block_number: int
    tx_hash: str

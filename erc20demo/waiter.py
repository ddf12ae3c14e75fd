"""Block-driven confirmation of submitted transactions."""

import logging
import queue
import threading
import time
from functools import partial
from typing import Callable, Optional

from web3.exceptions import TransactionNotFound, Web3Exception

from .models import Confirmation, ConfirmationStatus, ReceiptStatus
from .subscription import DEFAULT_POLL_INTERVAL, BlockFilterSubscription
from .types import BytesLike, hash_to_hex

logger = logging.getLogger(__name__)

_RPC_ERRORS = (Web3Exception, ValueError, OSError)


class ConfirmationWaiter:
    """
    Wait for a transaction's receipt, checking once per new block header.

    The waiter never polls on its own: each receipt lookup is triggered by a
    header event from the subscription. A subscription error ends the wait
    with ``SUBSCRIPTION_ERROR``, distinct from a reverted transaction.

    Args:
        w3: Web3 instance used for receipt lookups
        subscribe: Zero-argument factory returning a subscription with an
            ``events`` queue and ``unsubscribe()``. Defaults to a
            ``BlockFilterSubscription`` on ``w3`` that shares the waiter's
            request lock.
        poll_interval: Block filter poll interval for the default subscription
    """

    def __init__(
        self,
        w3,
        subscribe: Optional[Callable[[], object]] = None,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
    ):
        self._w3 = w3
        self._rpc_lock = threading.Lock()
        self._subscribe = subscribe or partial(
            BlockFilterSubscription,
            w3,
            poll_interval=poll_interval,
            rpc_lock=self._rpc_lock,
        )

    def check_receipt(self, tx_hash: BytesLike) -> ReceiptStatus:
        """Look up the receipt once. Missing receipts and lookup errors are PENDING."""
        return ReceiptStatus.from_receipt(self._fetch_receipt(hash_to_hex(tx_hash)))

    def _fetch_receipt(self, tx_hash: str):
        try:
            with self._rpc_lock:
                return self._w3.eth.get_transaction_receipt(tx_hash)
        except TransactionNotFound:
            return None
        except _RPC_ERRORS as exc:
            logger.debug("receipt lookup for %s failed: %s", tx_hash, exc)
            return None

    def wait_for_confirmation(
        self, tx_hash: BytesLike, timeout: Optional[float] = None
    ) -> Confirmation:
        """Block until ``tx_hash`` is mined, the subscription breaks, or ``timeout`` expires.

        Args:
            tx_hash: Transaction hash as hex string or bytes
            timeout: Seconds to wait; ``None`` waits indefinitely

        Returns:
            Confirmation with status SUCCEEDED, FAILED, SUBSCRIPTION_ERROR or TIMED_OUT

        Raises:
            SubscriptionError: If the subscription cannot be opened
        """
        tx_hash = hash_to_hex(tx_hash)
        deadline = None if timeout is None else time.monotonic() + timeout
        subscription = self._subscribe()
        polls = 0

        try:
            while True:
                remaining = None
                if deadline is not None:
                    remaining = deadline - time.monotonic()
                    if remaining <= 0:
                        logger.warning("gave up on %s after %ss", tx_hash, timeout)
                        return Confirmation(
                            tx_hash, ConfirmationStatus.TIMED_OUT, polls, timeout=timeout
                        )

                try:
                    event = subscription.events.get(timeout=remaining)
                except queue.Empty:
                    continue

                if event.is_error:
                    return Confirmation(
                        tx_hash,
                        ConfirmationStatus.SUBSCRIPTION_ERROR,
                        polls,
                        error=event.error,
                    )

                polls += 1
                logger.debug("new block %s, checking %s", _block_label(event.header), tx_hash)
                receipt = self._fetch_receipt(tx_hash)
                status = ReceiptStatus.from_receipt(receipt)
                if status is ReceiptStatus.SUCCEEDED:
                    return Confirmation(
                        tx_hash, ConfirmationStatus.SUCCEEDED, polls, receipt=receipt
                    )
                if status is ReceiptStatus.FAILED:
                    return Confirmation(
                        tx_hash, ConfirmationStatus.FAILED, polls, receipt=receipt
                    )
        finally:
            subscription.unsubscribe()


def _block_label(header) -> str:
    if not header:
        return "?"
    number = header.get("number")
    if number is not None:
        return str(number)
    block_hash = header.get("hash")
    if not block_hash:
        return "?"
    return block_hash if isinstance(block_hash, str) else "0x" + bytes(block_hash).hex()

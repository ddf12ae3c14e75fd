"""New block header subscription.

Header notifications and subscription failures are delivered on a single
``queue.Queue`` so a consumer can block on both with one ``get``.

``BlockFilterSubscription`` needs no push transport: it installs a node-side
``latest`` block filter (``eth_newBlockFilter``) and a daemon thread drains
the filter's new block hashes into the queue. The thread shares the
consumer's web3 connection, so each filter call holds ``rpc_lock``; a consumer
that passes the same lock never has two requests in flight on one socket.
``unsubscribe()`` joins the thread before uninstalling the filter.
"""

import logging
import queue
import threading
from dataclasses import dataclass
from typing import Any, Mapping, Optional

from web3.exceptions import Web3Exception

from .exceptions import SubscriptionError

logger = logging.getLogger(__name__)

DEFAULT_POLL_INTERVAL = 2.0
JOIN_GRACE = 1.0

_RPC_ERRORS = (Web3Exception, ValueError, OSError)


@dataclass(frozen=True)
class SubscriptionEvent:
    """Either a new header or the error that ended the subscription."""

    header: Optional[Mapping[str, Any]] = None
    error: Optional[BaseException] = None

    @property
    def is_error(self) -> bool:
        return self.error is not None


class BlockFilterSubscription:
    """
    Deliver new block headers from a node-side block filter.

    Public API
    ----------
    - events: queue.Queue[SubscriptionEvent]
    - unsubscribe()
    """

    def __init__(
        self,
        w3,
        poll_interval: float = DEFAULT_POLL_INTERVAL,
        rpc_lock: Optional[threading.Lock] = None,
    ):
        if poll_interval <= 0:
            raise ValueError("poll_interval must be > 0")
        self._w3 = w3
        self._poll_interval = poll_interval
        self.events: "queue.Queue[SubscriptionEvent]" = queue.Queue()
        self._stopped = threading.Event()
        self._rpc_lock = rpc_lock or threading.Lock()

        try:
            self._filter = w3.eth.filter("latest")
        except _RPC_ERRORS as exc:
            raise SubscriptionError(f"cannot install block filter: {exc}") from exc

        self._thread = threading.Thread(
            target=self._run, name="block-filter-subscription", daemon=True
        )
        self._thread.start()
        logger.debug("block filter %s installed", self._filter.filter_id)

    def _run(self) -> None:
        while not self._stopped.wait(self._poll_interval):
            try:
                with self._rpc_lock:
                    block_hashes = self._filter.get_new_entries()
            except _RPC_ERRORS as exc:
                if self._stopped.is_set():
                    return
                logger.warning("block filter %s failed: %s", self._filter.filter_id, exc)
                self.events.put(SubscriptionEvent(error=exc))
                return
            # hashes only; a lagging node may not serve a just-announced block yet
            for block_hash in block_hashes:
                self.events.put(SubscriptionEvent(header={"hash": block_hash}))

    def unsubscribe(self) -> None:
        """Stop delivering events and uninstall the filter. Safe to call twice."""
        if self._stopped.is_set():
            return
        self._stopped.set()
        if threading.current_thread() is not self._thread:
            self._thread.join(timeout=self._poll_interval + JOIN_GRACE)
        try:
            self._w3.eth.uninstall_filter(self._filter.filter_id)
        except _RPC_ERRORS as exc:
            # the filter expires on the node anyway
            logger.debug("uninstall of filter %s failed: %s", self._filter.filter_id, exc)

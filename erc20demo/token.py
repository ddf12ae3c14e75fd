"""Typed client for an ERC-20 token contract.

Reads are plain ``eth_call``s. Writes are built from the signing account's
``TransactOpts``, signed locally and submitted as raw transactions; they
return a ``TransactionHandle`` immediately and do not wait for a receipt.
"""

import logging
from typing import Optional, Union

from web3.exceptions import Web3Exception

from .abi import ERC20_ABI
from .account import Account
from .amounts import MAX_UINT256
from .exceptions import ContractCallError
from .models import ApprovalEvent, TokenMetadata, TransactionHandle, TransferEvent
from .types import BytesLike, as_checksum_address, hash_to_hex

logger = logging.getLogger(__name__)

# Errors a node (or the transport under it) raises for a rejected call
RPC_ERRORS = (Web3Exception, ValueError, OSError)

BlockIdentifier = Union[int, str]


def _check_amount(amount: int) -> None:
    if isinstance(amount, bool) or not isinstance(amount, int):
        raise TypeError(f"amount must be int, got {type(amount).__name__}")
    if not 0 <= amount <= MAX_UINT256:
        raise ValueError("amount must fit in uint256")


class ERC20Token:
    """
    ERC-20 token bound to a web3 connection.

    Example:
        token = ERC20Token(w3, "0x8e374AbDFecEf1203BFC142FCA2E93819C98f2fC")
        decimals = token.decimals()
        handle = token.transfer(deployer, user.address, to_wei("100", decimals))
    """

    def __init__(self, w3, address: BytesLike):
        self._w3 = w3
        self.address = as_checksum_address(address)
        self._contract = w3.eth.contract(address=self.address, abi=ERC20_ABI)

    def __repr__(self) -> str:
        return f"ERC20Token({self.address!r})"

    # ------------------------------------------------------------------
    # Reads
    # ------------------------------------------------------------------

    def _call(self, method: str, *args):
        try:
            return getattr(self._contract.functions, method)(*args).call()
        except RPC_ERRORS as exc:
            raise ContractCallError(method, exc) from exc

    def name(self) -> str:
        return self._call("name")

    def symbol(self) -> str:
        return self._call("symbol")

    def decimals(self) -> int:
        return self._call("decimals")

    def total_supply(self) -> int:
        return self._call("totalSupply")

    def balance_of(self, owner: BytesLike) -> int:
        return self._call("balanceOf", as_checksum_address(owner))

    def allowance(self, owner: BytesLike, spender: BytesLike) -> int:
        return self._call(
            "allowance", as_checksum_address(owner), as_checksum_address(spender)
        )

    def metadata(self) -> TokenMetadata:
        """Read name, symbol, decimals and total supply."""
        return TokenMetadata(
            name=self.name(),
            symbol=self.symbol(),
            decimals=self.decimals(),
            total_supply=self.total_supply(),
        )

    # ------------------------------------------------------------------
    # Writes
    # ------------------------------------------------------------------

    def _send(self, account: Account, method: str, *args) -> TransactionHandle:
        function = getattr(self._contract.functions, method)(*args)
        try:
            params = account.auth.to_tx_params(self._w3, account.address)
            tx = function.build_transaction(params)
            signed = account.sign_transaction(tx)
            tx_hash = self._w3.eth.send_raw_transaction(signed.raw_transaction)
        except RPC_ERRORS as exc:
            raise ContractCallError(method, exc) from exc

        handle = TransactionHandle(
            tx_hash=hash_to_hex(tx_hash), sender=account.address, method=method
        )
        logger.info("%s submitted by %s: %s", method, account.address, handle.tx_hash)
        return handle

    def transfer(self, account: Account, to: BytesLike, amount: int) -> TransactionHandle:
        """Move ``amount`` smallest units from ``account`` to ``to``."""
        _check_amount(amount)
        return self._send(account, "transfer", as_checksum_address(to), amount)

    def approve(
        self, account: Account, spender: BytesLike, amount: int
    ) -> TransactionHandle:
        """Allow ``spender`` to pull up to ``amount`` from ``account``."""
        _check_amount(amount)
        return self._send(account, "approve", as_checksum_address(spender), amount)

    def transfer_from(
        self,
        account: Account,
        sender: BytesLike,
        recipient: BytesLike,
        amount: int,
    ) -> TransactionHandle:
        """Spend ``account``'s allowance to move ``amount`` from ``sender`` to ``recipient``."""
        _check_amount(amount)
        return self._send(
            account,
            "transferFrom",
            as_checksum_address(sender),
            as_checksum_address(recipient),
            amount,
        )

    # ------------------------------------------------------------------
    # Events
    # ------------------------------------------------------------------

    def _get_logs(self, event: str, from_block, to_block, filters: dict) -> list:
        try:
            return getattr(self._contract.events, event)().get_logs(
                from_block=from_block,
                to_block=to_block,
                argument_filters=filters or None,
            )
        except RPC_ERRORS as exc:
            raise ContractCallError(f"{event} logs", exc) from exc

    def transfer_events(
        self,
        from_block: BlockIdentifier,
        to_block: BlockIdentifier = "latest",
        sender: Optional[BytesLike] = None,
        recipient: Optional[BytesLike] = None,
    ) -> list[TransferEvent]:
        """Transfer logs in a block range, optionally filtered on the indexed parties."""
        filters = {}
        if sender is not None:
            filters["from"] = as_checksum_address(sender)
        if recipient is not None:
            filters["to"] = as_checksum_address(recipient)

        return [
            TransferEvent(
                sender=log["args"]["from"],
                recipient=log["args"]["to"],
                value=log["args"]["value"],
                block_number=log["blockNumber"],
                tx_hash=hash_to_hex(log["transactionHash"]),
            )
            for log in self._get_logs("Transfer", from_block, to_block, filters)
        ]

    def approval_events(
        self,
        from_block: BlockIdentifier,
        to_block: BlockIdentifier = "latest",
        owner: Optional[BytesLike] = None,
        spender: Optional[BytesLike] = None,
    ) -> list[ApprovalEvent]:
        """Approval logs in a block range, optionally filtered on the indexed parties."""
        filters = {}
        if owner is not None:
            filters["owner"] = as_checksum_address(owner)
        if spender is not None:
            filters["spender"] = as_checksum_address(spender)

        return [
            ApprovalEvent(
                owner=log["args"]["owner"],
                spender=log["args"]["spender"],
                value=log["args"]["value"],
                block_number=log["blockNumber"],
                tx_hash=hash_to_hex(log["transactionHash"]),
            )
            for log in self._get_logs("Approval", from_block, to_block, filters)
        ]

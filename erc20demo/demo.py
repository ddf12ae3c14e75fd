"""
Scripted ERC-20 walkthrough.

Reads balances, transfers 100 tokens from the deployer to the user, lets the
user approve the deployer for 100 tokens, then has the deployer pull 10 of
them back with ``transferFrom``. Each write blocks until its confirmation
resolves; any error aborts the run.

Usage:
    DEPLOYER_PRIVATE_KEY=0x... USER_PRIVATE_KEY=0x... BSCTESTNET_URL=https://... \\
        python -m erc20demo
"""

import logging
import sys
from dataclasses import dataclass
from typing import Optional

from .account import Account, account_from_node
from .amounts import format_amount, to_wei
from .client import connect
from .config import Settings
from .exceptions import Erc20DemoError
from .models import TransactionHandle
from .token import ERC20Token
from .waiter import ConfirmationWaiter

logger = logging.getLogger(__name__)

TRANSFER_AMOUNT = "100"
ALLOWANCE_AMOUNT = "100"
PULL_AMOUNT = "10"


@dataclass(frozen=True)
class BalanceSnapshot:
    """Raw balances of both demo accounts at one point of the run."""

    label: str
    deployer: int
    user: int


def show_balances(
    token: ERC20Token, deployer: Account, user: Account, decimals: int, label: str
) -> BalanceSnapshot:
    snapshot = BalanceSnapshot(
        label=label,
        deployer=token.balance_of(deployer.address),
        user=token.balance_of(user.address),
    )
    print(f"Deployer balance: {format_amount(snapshot.deployer, decimals)}")
    print(f"User balance: {format_amount(snapshot.user, decimals)}")
    return snapshot


def confirm(
    waiter: ConfirmationWaiter, handle: TransactionHandle, timeout: Optional[float]
) -> None:
    print(f"tx sent: {handle.tx_hash}")
    confirmation = waiter.wait_for_confirmation(handle.tx_hash, timeout=timeout)
    confirmation.raise_for_status()
    print(f"{handle.method} confirmed after {confirmation.polls} block(s)")


def run_demo(
    token: ERC20Token,
    waiter: ConfirmationWaiter,
    deployer: Account,
    user: Account,
    timeout: Optional[float] = None,
) -> list[BalanceSnapshot]:
    """Run the transfer / approve / transferFrom sequence.

    Returns:
        Balance snapshots taken before the first write and after each
        confirmed transfer

    Raises:
        Erc20DemoError: On the first failed read, write or confirmation
    """
    print(f"Deployer address: {deployer.address}")
    print(f"User address: {user.address}")

    decimals = token.decimals()
    print(f"decimals: {decimals}")

    snapshots = [show_balances(token, deployer, user, decimals, "initial")]

    amount = to_wei(TRANSFER_AMOUNT, decimals)
    handle = token.transfer(deployer, user.address, amount)
    confirm(waiter, handle, timeout)
    snapshots.append(show_balances(token, deployer, user, decimals, "after transfer"))

    allowance = to_wei(ALLOWANCE_AMOUNT, decimals)
    handle = token.approve(user, deployer.address, allowance)
    confirm(waiter, handle, timeout)

    amount = to_wei(PULL_AMOUNT, decimals)
    handle = token.transfer_from(deployer, user.address, deployer.address, amount)
    confirm(waiter, handle, timeout)
    snapshots.append(
        show_balances(token, deployer, user, decimals, "after transferFrom")
    )
    return snapshots


def run(settings: Settings) -> list[BalanceSnapshot]:
    """Connect, derive both accounts and run the sequence against a live node."""
    w3 = connect(settings.rpc_url)
    print("we have a connection")

    deployer = account_from_node(
        w3, settings.deployer_private_key, gas_limit=settings.gas_limit
    )
    user = account_from_node(w3, settings.user_private_key, gas_limit=settings.gas_limit)

    token = ERC20Token(w3, settings.token_address)
    print(f"Token: {token.name()} ({token.symbol()}) at {token.address}")

    waiter = ConfirmationWaiter(w3, poll_interval=settings.poll_interval)
    return run_demo(
        token, waiter, deployer, user, timeout=settings.confirmation_timeout
    )


def main() -> int:
    try:
        settings = Settings.from_env()
    except Erc20DemoError as exc:
        logging.basicConfig(level=logging.INFO)
        logger.error("%s", exc)
        return 1

    logging.basicConfig(
        level=getattr(logging, settings.log_level, logging.INFO),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    try:
        run(settings)
    except Erc20DemoError as exc:
        logger.error("demo aborted: %s", exc)
        return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())

"""
Example: Token Activity

Read-only look at the demo token: metadata, balances of the two demo
accounts, and the Transfer logs of the last few thousand blocks.

Usage:
    BSCTESTNET_URL=https://... DEPLOYER_PRIVATE_KEY=0x... USER_PRIVATE_KEY=0x... \
        python examples/token_activity.py
"""

from erc20demo import ERC20Token, Settings, account_from_node, connect, format_amount

LOOKBACK_BLOCKS = 4_000

settings = Settings.from_env()
w3 = connect(settings.rpc_url)

token = ERC20Token(w3, settings.token_address)
meta = token.metadata()
print(f"{meta.name} ({meta.symbol}), {meta.decimals} decimals")
print(f"Total supply: {format_amount(meta.total_supply, meta.decimals)}")

for label, key in (
    ("Deployer", settings.deployer_private_key),
    ("User", settings.user_private_key),
):
    account = account_from_node(w3, key)
    balance = token.balance_of(account.address)
    print(f"{label} {account.address}: {format_amount(balance, meta.decimals)}")

latest = w3.eth.block_number
for event in token.transfer_events(max(latest - LOOKBACK_BLOCKS, 0), latest):
    print(
        f"block {event.block_number}: {event.sender} -> {event.recipient} "
        f"{format_amount(event.value, meta.decimals)} ({event.tx_hash})"
    )

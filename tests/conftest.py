"""Shared fixtures for erc20demo tests."""

import pytest

from erc20demo import derive_account

# Well-known development keys (Hardhat / Anvil accounts #0 and #1)
DEPLOYER_KEY = "0xac0974bec39a17e36ba4a6b4d238ff944bacb478cbed5efcae784d7bf4f2ff80"
DEPLOYER_ADDRESS = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
USER_KEY = "0x59c6995e998f97a5a0044966f0945389dc9e86dae88c7a8412f4603b6b78690d"
USER_ADDRESS = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

TOKEN_ADDRESS = "0x8e374AbDFecEf1203BFC142FCA2E93819C98f2fC"
BSC_TESTNET_CHAIN_ID = 97
GAS_PRICE = 10_000_000_000


@pytest.fixture
def deployer():
    return derive_account(DEPLOYER_KEY, BSC_TESTNET_CHAIN_ID, GAS_PRICE)


@pytest.fixture
def user():
    return derive_account(USER_KEY, BSC_TESTNET_CHAIN_ID, GAS_PRICE)

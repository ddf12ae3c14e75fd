"""Tests for account derivation and transaction authorization."""

from unittest.mock import MagicMock, PropertyMock

import pytest
from eth_account import Account as EthAccount
from web3.exceptions import Web3RPCError

from erc20demo import (
    ChainConnectionError,
    InvalidPrivateKey,
    TransactOpts,
    account_from_node,
    derive_account,
)
from erc20demo.account import DEFAULT_GAS_LIMIT, parse_private_key

from conftest import (
    BSC_TESTNET_CHAIN_ID,
    DEPLOYER_ADDRESS,
    DEPLOYER_KEY,
    GAS_PRICE,
    USER_ADDRESS,
    USER_KEY,
)


class TestDeriveAccount:
    """Tests for derive_account."""

    def test_address(self):
        account = derive_account(DEPLOYER_KEY, BSC_TESTNET_CHAIN_ID, GAS_PRICE)
        assert account.address == DEPLOYER_ADDRESS

    def test_second_account(self):
        account = derive_account(USER_KEY, BSC_TESTNET_CHAIN_ID, GAS_PRICE)
        assert account.address == USER_ADDRESS

    def test_key_without_prefix(self):
        account = derive_account(DEPLOYER_KEY[2:], BSC_TESTNET_CHAIN_ID, GAS_PRICE)
        assert account.address == DEPLOYER_ADDRESS

    def test_public_key_matches_address(self):
        account = derive_account(DEPLOYER_KEY, BSC_TESTNET_CHAIN_ID, GAS_PRICE)
        assert account.public_key.to_checksum_address() == account.address
        assert len(account.public_key.to_bytes()) == 64

    def test_auth_defaults(self):
        account = derive_account(DEPLOYER_KEY, BSC_TESTNET_CHAIN_ID, GAS_PRICE)
        assert account.auth == TransactOpts(
            chain_id=BSC_TESTNET_CHAIN_ID,
            gas_price=GAS_PRICE,
            gas_limit=300_000,
            value=0,
            nonce=None,
        )
        assert DEFAULT_GAS_LIMIT == 300_000

    def test_custom_gas_limit(self):
        account = derive_account(
            DEPLOYER_KEY, BSC_TESTNET_CHAIN_ID, GAS_PRICE, gas_limit=80_000
        )
        assert account.auth.gas_limit == 80_000

    def test_account_is_immutable(self):
        account = derive_account(DEPLOYER_KEY, BSC_TESTNET_CHAIN_ID, GAS_PRICE)
        with pytest.raises(AttributeError):
            account.address = USER_ADDRESS

    def test_repr_hides_key(self):
        account = derive_account(DEPLOYER_KEY, BSC_TESTNET_CHAIN_ID, GAS_PRICE)
        assert DEPLOYER_KEY[2:] not in repr(account)

    def test_rejects_invalid_chain_id(self):
        with pytest.raises(ValueError, match="chain_id must be > 0"):
            derive_account(DEPLOYER_KEY, 0, GAS_PRICE)


class TestInvalidPrivateKey:
    """Malformed keys raise InvalidPrivateKey."""

    def test_not_hex(self):
        with pytest.raises(InvalidPrivateKey, match="not valid hex"):
            parse_private_key("0x" + "zz" * 32)

    def test_odd_length(self):
        with pytest.raises(InvalidPrivateKey):
            parse_private_key("0x" + "a" * 63)

    def test_too_short(self):
        with pytest.raises(InvalidPrivateKey, match="32 bytes"):
            parse_private_key("0x1234")

    def test_zero_scalar(self):
        with pytest.raises(InvalidPrivateKey, match="secp256k1"):
            parse_private_key("0x" + "00" * 32)

    def test_scalar_above_curve_order(self):
        with pytest.raises(InvalidPrivateKey, match="secp256k1"):
            parse_private_key("0x" + "ff" * 32)

    def test_not_a_string(self):
        with pytest.raises(InvalidPrivateKey):
            parse_private_key(1234)

    def test_is_value_error(self):
        with pytest.raises(ValueError):
            derive_account("nope", BSC_TESTNET_CHAIN_ID, GAS_PRICE)


class TestTransactOpts:
    """Tests for transaction parameter building."""

    def test_resolves_nonce_from_node(self):
        mock_w3 = MagicMock()
        mock_w3.eth.get_transaction_count.return_value = 7
        opts = TransactOpts(chain_id=97, gas_price=GAS_PRICE)

        params = opts.to_tx_params(mock_w3, DEPLOYER_ADDRESS)

        mock_w3.eth.get_transaction_count.assert_called_once_with(
            DEPLOYER_ADDRESS, "pending"
        )
        assert params == {
            "from": DEPLOYER_ADDRESS,
            "chainId": 97,
            "gas": 300_000,
            "gasPrice": GAS_PRICE,
            "value": 0,
            "nonce": 7,
        }

    def test_explicit_nonce_skips_node(self):
        mock_w3 = MagicMock()
        opts = TransactOpts(chain_id=97, gas_price=GAS_PRICE, nonce=3)

        params = opts.to_tx_params(mock_w3, DEPLOYER_ADDRESS)

        assert params["nonce"] == 3
        mock_w3.eth.get_transaction_count.assert_not_called()

    def test_validate_negative_value(self):
        with pytest.raises(ValueError, match="value must be >= 0"):
            TransactOpts(chain_id=97, gas_price=1, value=-1).validate()

    def test_validate_zero_gas_limit(self):
        with pytest.raises(ValueError, match="gas_limit must be > 0"):
            TransactOpts(chain_id=97, gas_price=1, gas_limit=0).validate()


class TestSigning:
    """Tests for Account.sign_transaction."""

    def test_signature_recovers_sender(self, deployer):
        tx = {
            "from": deployer.address,
            "to": USER_ADDRESS,
            "chainId": BSC_TESTNET_CHAIN_ID,
            "gas": 21_000,
            "gasPrice": GAS_PRICE,
            "value": 0,
            "nonce": 0,
            "data": b"",
        }

        signed = deployer.sign_transaction(tx)

        assert EthAccount.recover_transaction(signed.raw_transaction) == deployer.address


class TestAccountFromNode:
    """Tests for node-backed derivation."""

    def test_reads_chain_id_and_gas_price(self):
        mock_w3 = MagicMock()
        mock_w3.eth.chain_id = 97
        mock_w3.eth.gas_price = 5_000_000_000

        account = account_from_node(mock_w3, DEPLOYER_KEY)

        assert account.address == DEPLOYER_ADDRESS
        assert account.auth.chain_id == 97
        assert account.auth.gas_price == 5_000_000_000

    @pytest.mark.parametrize(
        "error", [Web3RPCError("rate limited"), ConnectionError("connection refused")]
    )
    def test_node_failure_is_connection_error(self, error):
        mock_w3 = MagicMock()
        type(mock_w3.eth).chain_id = PropertyMock(side_effect=error)

        with pytest.raises(ChainConnectionError, match="chain id"):
            account_from_node(mock_w3, DEPLOYER_KEY)

    def test_gas_price_failure_is_connection_error(self):
        mock_w3 = MagicMock()
        mock_w3.eth.chain_id = 97
        type(mock_w3.eth).gas_price = PropertyMock(side_effect=ValueError("bad response"))

        with pytest.raises(ChainConnectionError, match="bad response"):
            account_from_node(mock_w3, DEPLOYER_KEY)

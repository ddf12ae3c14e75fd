"""Account derivation and transaction authorization.

An ``Account`` bundles a secp256k1 key pair with the ``TransactOpts`` used to
authorize its transactions: the chain id it is bound to and a static gas
policy. The nonce is left unset and resolved from the node when a transaction
is built.
"""

import binascii
import logging
from dataclasses import dataclass
from typing import Any, Optional

from eth_account import Account as EthAccount
from eth_keys import keys
from eth_keys.constants import SECPK1_N
from eth_utils import remove_0x_prefix
from web3.exceptions import Web3Exception

from .exceptions import ChainConnectionError, InvalidPrivateKey

logger = logging.getLogger(__name__)

DEFAULT_GAS_LIMIT = 300_000


@dataclass(frozen=True)
class TransactOpts:
    """Authorization context shared by every transaction an account sends."""

    chain_id: int
    gas_price: int
    gas_limit: int = DEFAULT_GAS_LIMIT
    value: int = 0
    nonce: Optional[int] = None

    def validate(self) -> None:
        if self.chain_id <= 0:
            raise ValueError("chain_id must be > 0")
        if self.gas_limit <= 0:
            raise ValueError("gas_limit must be > 0")
        if self.gas_price < 0:
            raise ValueError("gas_price must be >= 0")
        if self.value < 0:
            raise ValueError("value must be >= 0")
        if self.nonce is not None and self.nonce < 0:
            raise ValueError("nonce must be >= 0")

    def to_tx_params(self, w3, sender: str) -> dict:
        """Build the web3 transaction parameters for ``sender``.

        A ``None`` nonce is resolved from the node's pending transaction count.
        """
        nonce = self.nonce
        if nonce is None:
            nonce = w3.eth.get_transaction_count(sender, "pending")
        return {
            "from": sender,
            "chainId": self.chain_id,
            "gas": self.gas_limit,
            "gasPrice": self.gas_price,
            "value": self.value,
            "nonce": nonce,
        }


@dataclass(frozen=True)
class Account:
    """A key pair with its checksummed address and transaction authorization."""

    private_key: keys.PrivateKey
    public_key: keys.PublicKey
    address: str
    auth: TransactOpts

    def __repr__(self) -> str:
        return f"Account(address={self.address!r}, chain_id={self.auth.chain_id})"

    def sign_transaction(self, tx: dict) -> Any:
        """Sign a transaction dict; returns eth-account's ``SignedTransaction``."""
        return EthAccount.sign_transaction(tx, self.private_key.to_bytes())


def parse_private_key(private_key_hex: str) -> keys.PrivateKey:
    """Parse a hex private key, with or without the ``0x`` prefix.

    Raises:
        InvalidPrivateKey: If the key is not 32 bytes of hex or not in 1..n-1
    """
    if not isinstance(private_key_hex, str):
        raise InvalidPrivateKey("private key must be a hex string")
    try:
        raw = binascii.unhexlify(remove_0x_prefix(private_key_hex.strip()))
    except (binascii.Error, ValueError) as exc:
        raise InvalidPrivateKey(f"private key is not valid hex: {exc}") from None
    if len(raw) != 32:
        raise InvalidPrivateKey(f"private key must be 32 bytes, got {len(raw)}")
    scalar = int.from_bytes(raw, "big")
    if not 0 < scalar < SECPK1_N:
        raise InvalidPrivateKey("private key is not a valid secp256k1 scalar")
    return keys.PrivateKey(raw)


def derive_account(
    private_key_hex: str,
    chain_id: int,
    gas_price: int,
    gas_limit: int = DEFAULT_GAS_LIMIT,
    value: int = 0,
) -> Account:
    """Derive an account bound to ``chain_id`` and a static gas policy.

    Args:
        private_key_hex: secp256k1 private key as hex
        chain_id: Chain the authorization is bound to
        gas_price: Gas price in wei, usually the node's suggestion
        gas_limit: Gas limit for every transaction
        value: Native currency attached to every transaction, in wei

    Returns:
        Immutable Account with an unset nonce

    Raises:
        InvalidPrivateKey: If the key cannot be parsed
    """
    private_key = parse_private_key(private_key_hex)
    public_key = private_key.public_key
    auth = TransactOpts(
        chain_id=chain_id,
        gas_price=gas_price,
        gas_limit=gas_limit,
        value=value,
    )
    auth.validate()
    return Account(
        private_key=private_key,
        public_key=public_key,
        address=public_key.to_checksum_address(),
        auth=auth,
    )


def account_from_node(w3, private_key_hex: str, gas_limit: int = DEFAULT_GAS_LIMIT) -> Account:
    """Derive an account using the node's chain id and suggested gas price.

    Raises:
        ChainConnectionError: If the node does not answer either query
        InvalidPrivateKey: If the key cannot be parsed
    """
    try:
        chain_id = w3.eth.chain_id
        gas_price = w3.eth.gas_price
    except (Web3Exception, ValueError, OSError) as exc:
        raise ChainConnectionError(f"cannot read chain id and gas price: {exc}") from exc
    logger.debug("chain id %s, suggested gas price %s wei", chain_id, gas_price)
    return derive_account(private_key_hex, chain_id, gas_price, gas_limit=gas_limit)

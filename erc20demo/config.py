"""Settings loaded from the process environment and a local ``.env`` file."""

import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

from .account import DEFAULT_GAS_LIMIT
from .exceptions import ConfigurationError
from .subscription import DEFAULT_POLL_INTERVAL
from .types import as_checksum_address

DEFAULT_TOKEN_ADDRESS = "0x8e374AbDFecEf1203BFC142FCA2E93819C98f2fC"


def _required(env: Mapping[str, str], name: str) -> str:
    value = env.get(name, "").strip()
    if not value:
        raise ConfigurationError(f"{name} not set in environment or .env")
    return value


def _token_address(env: Mapping[str, str]) -> str:
    raw = env.get("TOKEN_ADDRESS", "").strip() or DEFAULT_TOKEN_ADDRESS
    try:
        return as_checksum_address(raw)
    except ValueError as exc:
        raise ConfigurationError(f"TOKEN_ADDRESS is not an address: {exc}") from None


def _number(env: Mapping[str, str], name: str, cast, default):
    raw = env.get(name, "").strip()
    if not raw:
        return default
    try:
        value = cast(raw)
    except ValueError:
        raise ConfigurationError(f"{name} must be a number, got {raw!r}") from None
    if value <= 0:
        raise ConfigurationError(f"{name} must be > 0, got {raw!r}")
    return value


@dataclass(frozen=True)
class Settings:
    deployer_private_key: str
    user_private_key: str
    rpc_url: str
    token_address: str = DEFAULT_TOKEN_ADDRESS
    confirmation_timeout: Optional[float] = None
    poll_interval: float = DEFAULT_POLL_INTERVAL
    gas_limit: int = DEFAULT_GAS_LIMIT
    log_level: str = "INFO"

    def __repr__(self) -> str:
        # keep private keys out of logs and tracebacks
        return (
            f"Settings(rpc_url={self.rpc_url!r}, token_address={self.token_address!r}, "
            f"confirmation_timeout={self.confirmation_timeout!r}, "
            f"poll_interval={self.poll_interval!r}, gas_limit={self.gas_limit!r})"
        )

    @classmethod
    def from_env(
        cls,
        env: Optional[Mapping[str, str]] = None,
        env_file: Optional[str] = ".env",
    ) -> "Settings":
        """Build settings from ``env`` (default: ``os.environ`` after loading ``env_file``).

        Raises:
            ConfigurationError: If a required variable is missing or a number is invalid
        """
        if env is None:
            if env_file:
                load_dotenv(env_file)
            env = os.environ

        return cls(
            deployer_private_key=_required(env, "DEPLOYER_PRIVATE_KEY"),
            user_private_key=_required(env, "USER_PRIVATE_KEY"),
            rpc_url=_required(env, "BSCTESTNET_URL"),
            token_address=_token_address(env),
            confirmation_timeout=_number(env, "CONFIRMATION_TIMEOUT", float, None),
            poll_interval=_number(env, "BLOCK_POLL_INTERVAL", float, DEFAULT_POLL_INTERVAL),
            gas_limit=_number(env, "GAS_LIMIT", int, DEFAULT_GAS_LIMIT),
            log_level=env.get("LOG_LEVEL", "").strip().upper() or "INFO",
        )

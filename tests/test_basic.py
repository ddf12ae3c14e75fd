"""Basic tests for erc20demo."""

from erc20demo import (
    ConfirmationWaiter,
    ERC20Token,
    derive_account,
    to_decimal,
    to_wei,
)


def test_import():
    """Test that imports work."""
    assert ERC20Token is not None
    assert ConfirmationWaiter is not None
    assert derive_account is not None


def test_scaling():
    """One whole token is 10**18 smallest units at 18 decimals."""
    assert to_wei("1", 18) == 1_000_000_000_000_000_000
    assert to_decimal(1_000_000_000_000_000_000, 18) == 1


def test_package_runs_as_module():
    """``python -m erc20demo`` resolves to the demo entry point."""
    import importlib.util

    assert importlib.util.find_spec("erc20demo.__main__") is not None

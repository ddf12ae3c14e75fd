"""ABI schema for IERC20Metadata.

web3.py builds the typed call table (``contract.functions`` and
``contract.events``) from this schema at runtime.
"""


def _fn(name, inputs, outputs, mutability):
    return {
        "type": "function",
        "name": name,
        "inputs": [{"name": n, "type": t} for n, t in inputs],
        "outputs": [{"name": n, "type": t} for n, t in outputs],
        "stateMutability": mutability,
    }


def _event(name, inputs):
    return {
        "type": "event",
        "name": name,
        "anonymous": False,
        "inputs": [
            {"name": n, "type": t, "indexed": indexed} for n, t, indexed in inputs
        ],
    }


ERC20_ABI = [
    _fn("name", [], [("", "string")], "view"),
    _fn("symbol", [], [("", "string")], "view"),
    _fn("decimals", [], [("", "uint8")], "view"),
    _fn("totalSupply", [], [("", "uint256")], "view"),
    _fn("balanceOf", [("account", "address")], [("", "uint256")], "view"),
    _fn(
        "allowance",
        [("owner", "address"), ("spender", "address")],
        [("", "uint256")],
        "view",
    ),
    _fn(
        "transfer",
        [("to", "address"), ("amount", "uint256")],
        [("", "bool")],
        "nonpayable",
    ),
    _fn(
        "approve",
        [("spender", "address"), ("amount", "uint256")],
        [("", "bool")],
        "nonpayable",
    ),
    _fn(
        "transferFrom",
        [("from", "address"), ("to", "address"), ("amount", "uint256")],
        [("", "bool")],
        "nonpayable",
    ),
    _event(
        "Transfer",
        [("from", "address", True), ("to", "address", True), ("value", "uint256", False)],
    ),
    _event(
        "Approval",
        [
            ("owner", "address", True),
            ("spender", "address", True),
            ("value", "uint256", False),
        ],
    ),
]

"""Connection to the chain's JSON-RPC endpoint."""

import logging
from urllib.parse import urlparse

from web3 import LegacyWebSocketProvider, Web3
from web3.middleware import ExtraDataToPOAMiddleware

from .exceptions import ChainConnectionError

logger = logging.getLogger(__name__)


def make_provider(rpc_url: str, request_timeout: float = 30.0):
    """Pick the web3 provider for the URL scheme: HTTP(S) or websocket.

    Raises:
        ChainConnectionError: If the URL is empty or its scheme is unsupported
    """
    if not rpc_url:
        raise ChainConnectionError("RPC URL is empty")

    scheme = urlparse(rpc_url).scheme.lower()
    if scheme in ("http", "https"):
        return Web3.HTTPProvider(rpc_url, request_kwargs={"timeout": request_timeout})
    if scheme in ("ws", "wss"):
        return LegacyWebSocketProvider(rpc_url, websocket_timeout=request_timeout)
    raise ChainConnectionError(f"unsupported RPC URL scheme: {scheme or rpc_url!r}")


def connect(rpc_url: str, request_timeout: float = 30.0) -> Web3:
    """Connect to ``rpc_url`` over HTTP(S) or a websocket.

    The proof-of-authority middleware is injected so that BSC and other
    clique-style chains, whose headers carry oversized ``extraData``, decode.

    Raises:
        ChainConnectionError: If the URL is unusable or the endpoint does not answer
    """
    w3 = Web3(make_provider(rpc_url, request_timeout))
    w3.middleware_onion.inject(ExtraDataToPOAMiddleware, layer=0)

    if not w3.is_connected():
        raise ChainConnectionError("Web3 not connected, check the RPC URL")

    logger.info("connected to RPC endpoint")
    return w3

from typing import Callable, Dict

from web3.gas_strategies.rpc import rpc_gas_price_strategy
from web3.gas_strategies.time_based import fast_gas_price_strategy, medium_gas_price_strategy

#: The namespace plugins use as a prefix when creating a :class:`pluggy.HookimplMarker`.
HOST_NAMESPACE = "token_service"

#: Name of the contract artifact shipped in :mod:`token_service.contracts`.
CONTRACT_ERC20_TEST = "ERC20Test"

#: URL prefix of the token API blueprint.
API_PREFIX = "/api/erc20test"

#: Seconds to wait for a transaction receipt before giving up.
DEFAULT_RECEIPT_TIMEOUT = 120
RECEIPT_POLL_LATENCY = 0.5

DEFAULT_HOST = "127.0.0.1"
DEFAULT_PORT = 5100

#: Largest value a `uint256` contract argument can hold.
MAX_UINT256 = 2**256 - 1

#: Available gas price strategies selectable by passing their key to the
#: `gas_price` option of the service configuration.
GAS_STRATEGIES: Dict[str, Callable] = {
    "FAST": fast_gas_price_strategy,
    "MEDIUM": medium_gas_price_strategy,
    "RPC": rpc_gas_price_strategy,
}

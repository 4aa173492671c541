import threading
from collections.abc import Mapping
from typing import Optional, Tuple

import structlog
from eth_typing import ChecksumAddress
from eth_utils import is_address, to_checksum_address

from token_service.exceptions import ContractNotReady
from token_service.token.client import TokenClient, TokenContract, TransactionReceipt

log = structlog.get_logger(__name__)


class TokenRegistry(Mapping):
    """Custom mapping of contract addresses to :class:`TokenContract` sessions.

    Looking up an address which was not loaded before binds it to the
    registry's client on the fly. Assigning sessions directly is not allowed;
    use :meth:`.deploy` or :meth:`.load`, which also make the contract the
    registry's current one.

    The registry is shared by all request threads, hence access to its state is
    guarded by a lock.
    """

    def __init__(self, client: TokenClient):
        self.client = client
        self.dict = {}
        self.current_address: Optional[ChecksumAddress] = None
        self._lock = threading.RLock()

    def __getitem__(self, item: str) -> TokenContract:
        if not isinstance(item, str) or not is_address(item):
            raise KeyError(item)

        address = to_checksum_address(item)
        with self._lock:
            if address not in self.dict:
                log.debug("Creating new token session", contract_address=address)
                self.dict[address] = self.client.load(address)
            return self.dict[address]

    def __len__(self):
        return len(self.dict)

    def __iter__(self):
        return iter(self.dict)

    @property
    def current(self) -> TokenContract:
        """Return the most recently deployed or loaded contract.

        :raises ContractNotReady: if no contract was deployed or loaded yet.
        """
        with self._lock:
            if self.current_address is None:
                raise ContractNotReady()
            return self.dict[self.current_address]

    def resolve(self, address: Optional[str] = None) -> TokenContract:
        """Return the session for `address`, or the current one if `address` is falsy."""
        if not address:
            return self.current
        return self[address]

    def deploy(self) -> Tuple[TokenContract, TransactionReceipt]:
        """Deploy a new contract and make it the current one."""
        token, receipt = self.client.deploy()
        with self._lock:
            self.dict[token.address] = token
            self.current_address = token.address
        return token, receipt

    def load(self, address: str) -> TokenContract:
        """Load the contract at `address` and make it the current one."""
        with self._lock:
            token = self[address]
            self.current_address = token.address
        return token

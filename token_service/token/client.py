"""Thin web3 binding of the ``ERC20Test`` token contract.

:class:`TokenClient` owns the :class:`web3.Web3` handle and the operator account
used to sign transactions. :class:`TokenContract` binds a single deployed
contract address to a client and exposes the token's views and transactions.

Transactions are always submitted synchronously: every transacting method blocks
until the receipt is available (or the client's `receipt_timeout` elapsed).
"""
import threading
from contextlib import contextmanager
from dataclasses import dataclass
from typing import Callable, Optional, Tuple

import requests
import structlog
from eth_account import Account
from eth_typing import ChecksumAddress
from eth_utils import encode_hex, is_address, to_checksum_address
from web3 import HTTPProvider, Web3
from web3.exceptions import (
    BadFunctionCallOutput,
    ContractLogicError,
    TimeExhausted,
    Web3RPCError,
)

from token_service.constants import DEFAULT_RECEIPT_TIMEOUT, RECEIPT_POLL_LATENCY
from token_service.contracts import get_contract_abi, get_contract_bytecode
from token_service.exceptions import (
    ContractNotReady,
    OnChainExecutionFailed,
    ReceiptTimeout,
    TransportFailure,
)

log = structlog.get_logger(__name__)

#: Exceptions raised by the transport layer when a node cannot be reached or answers with an error.
TRANSPORT_ERRORS = (
    requests.exceptions.RequestException,
    ConnectionError,
    TimeoutError,
    Web3RPCError,
)


@contextmanager
def translate_rpc_errors(contract_address: Optional[str] = None):
    """Re-raise web3 and transport exceptions as :exc:`TokenServiceError` subclasses.

    A call returning no data from an address without contract code is reported
    as :exc:`ContractNotReady`.
    """
    try:
        yield
    except BadFunctionCallOutput as e:
        raise ContractNotReady(f"No contract code at {contract_address}") from e
    except ContractLogicError as e:
        raise OnChainExecutionFailed(reason=str(e)) from e
    except TRANSPORT_ERRORS as e:
        raise TransportFailure(f"RPC request failed: {e}") from e


@dataclass(frozen=True)
class TransactionReceipt:
    """The outcome of a mined transaction."""

    tx_hash: str
    block_number: int
    gas_used: int
    status: int
    contract_address: Optional[ChecksumAddress] = None

    @property
    def successful(self) -> bool:
        return self.status == 1

    @classmethod
    def from_web3(cls, receipt) -> "TransactionReceipt":
        contract_address = receipt.get("contractAddress")
        return cls(
            tx_hash=encode_hex(receipt["transactionHash"]),
            block_number=int(receipt["blockNumber"]),
            gas_used=int(receipt["gasUsed"]),
            status=int(receipt["status"]),
            contract_address=to_checksum_address(contract_address) if contract_address else None,
        )


class TokenClient:
    """Sign, submit and await transactions for a single operator account.

    Nonce assignment and submission are serialized with a lock, since the client
    is shared across request threads. The lock is released before waiting for
    the receipt.
    """

    def __init__(
        self,
        web3: Web3,
        privkey: bytes,
        gas_price_strategy: Optional[Callable] = None,
        receipt_timeout: float = DEFAULT_RECEIPT_TIMEOUT,
    ):
        self.web3 = web3
        self.account = Account.from_key(privkey)
        self.address: ChecksumAddress = to_checksum_address(self.account.address)
        self.receipt_timeout = receipt_timeout
        self._send_lock = threading.Lock()

        if gas_price_strategy is not None:
            self.web3.eth.set_gas_price_strategy(gas_price_strategy)

    @classmethod
    def from_config(cls, config) -> "TokenClient":
        """Create a client from a :class:`token_service.utils.configuration.ServiceConfig`."""
        web3 = Web3(HTTPProvider(config.chain_url))
        log.debug("Creating token client", chain_url=config.chain_url)
        return cls(
            web3,
            config.privkey,
            gas_price_strategy=config.gas_price_strategy,
            receipt_timeout=config.receipt_timeout,
        )

    def call(self, contract_function):
        """Execute a view function against the latest block and return its result.

        :raises ContractNotReady: if there is no contract code at the function's address.
        :raises TransportFailure: if the node could not be reached.
        """
        with translate_rpc_errors(contract_function.address):
            return contract_function.call()

    def transact(self, contract_function) -> TransactionReceipt:
        """Build, sign and send a transaction, then block until it is mined.

        :raises OnChainExecutionFailed: if the node refuses the transaction since it would revert.
        :raises TransportFailure: if the node could not be reached.
        :raises ReceiptTimeout: if no receipt became available in time.
        """
        with self._send_lock, translate_rpc_errors():
            params = {
                "from": self.address,
                "nonce": self.web3.eth.get_transaction_count(self.address, "pending"),
                "chainId": self.web3.eth.chain_id,
            }
            gas_price = self.web3.eth.generate_gas_price()
            if gas_price is not None:
                params["gasPrice"] = gas_price

            transaction = contract_function.build_transaction(params)
            signed = self.account.sign_transaction(transaction)
            tx_hash = self.web3.eth.send_raw_transaction(signed.raw_transaction)

        log.debug("Transaction sent", tx_hash=encode_hex(tx_hash), nonce=params["nonce"])
        return self.wait_for_receipt(tx_hash)

    def wait_for_receipt(self, tx_hash: bytes) -> TransactionReceipt:
        try:
            with translate_rpc_errors():
                receipt = self.web3.eth.wait_for_transaction_receipt(
                    tx_hash, timeout=self.receipt_timeout, poll_latency=RECEIPT_POLL_LATENCY
                )
        except TimeExhausted as e:
            raise ReceiptTimeout(encode_hex(tx_hash), self.receipt_timeout) from e

        result = TransactionReceipt.from_web3(receipt)
        log.debug("Received receipt", receipt=result)
        return result

    def deploy(self) -> Tuple["TokenContract", TransactionReceipt]:
        """Deploy a new token contract owned by this client's account."""
        log.info("Deploying ERC20Test contract...", deployer=self.address)
        factory = self.web3.eth.contract(abi=get_contract_abi(), bytecode=get_contract_bytecode())
        receipt = self.transact(factory.constructor())

        if not receipt.successful or receipt.contract_address is None:
            raise OnChainExecutionFailed(receipt.status, receipt.tx_hash)

        log.info("ERC20Test contract deployed", contract_address=receipt.contract_address)
        return self.load(receipt.contract_address), receipt

    def load(self, address: str) -> "TokenContract":
        """Bind the contract at `address` to this client.

        No request is made to the node; an address without contract code will
        only fail once it is used.
        """
        if not is_address(address):
            raise ValueError(f"Not a valid contract address: {address!r}")
        log.info("Loading ERC20Test contract", contract_address=address)
        return TokenContract(self, address)


class TokenContract:
    """A deployed token contract, bound to the client transacting with it."""

    def __init__(self, client: TokenClient, address: str):
        self.client = client
        self.address: ChecksumAddress = to_checksum_address(address)
        self.contract = client.web3.eth.contract(address=self.address, abi=get_contract_abi())

    def __repr__(self):
        return f"{self.__class__.__qualname__}({self.address})"

    @property
    def functions(self):
        return self.contract.functions

    # Views

    def balance_of(self, account: ChecksumAddress) -> int:
        log.info("Getting balance", account=account, contract_address=self.address)
        return self.client.call(self.functions.balanceOf(account))

    def allowance(self, owner: ChecksumAddress, spender: ChecksumAddress) -> int:
        log.info("Getting allowance", owner=owner, spender=spender, contract_address=self.address)
        return self.client.call(self.functions.allowance(owner, spender))

    def total_supply(self) -> int:
        log.info("Getting total supply", contract_address=self.address)
        return self.client.call(self.functions.totalSupply())

    def info(self) -> dict:
        """Return the token's metadata: name, symbol, decimals and owner."""
        return {
            "name": self.client.call(self.functions.name()),
            "symbol": self.client.call(self.functions.symbol()),
            "decimals": self.client.call(self.functions.decimals()),
            "owner": self.client.call(self.functions.owner()),
        }

    # Transactions

    def mint(self, to: ChecksumAddress, amount: int) -> TransactionReceipt:
        log.info("Minting tokens", amount=amount, to=to, contract_address=self.address)
        return self.client.transact(self.functions.mint(to, amount))

    def burn(self, amount: int) -> TransactionReceipt:
        log.info("Burning tokens", amount=amount, contract_address=self.address)
        return self.client.transact(self.functions.burn(amount))

    def transfer(self, to: ChecksumAddress, amount: int) -> TransactionReceipt:
        log.info("Transferring tokens", amount=amount, to=to, contract_address=self.address)
        return self.client.transact(self.functions.transfer(to, amount))

    def approve(self, spender: ChecksumAddress, amount: int) -> TransactionReceipt:
        log.info("Approving tokens", amount=amount, spender=spender, contract_address=self.address)
        return self.client.transact(self.functions.approve(spender, amount))

    def transfer_from(
        self, sender: ChecksumAddress, receiver: ChecksumAddress, amount: int
    ) -> TransactionReceipt:
        log.info(
            "Submitting transferFrom",
            amount=amount,
            sender=sender,
            receiver=receiver,
            contract_address=self.address,
        )
        return self.client.transact(self.functions.transferFrom(sender, receiver, amount))

from unittest import mock

import pytest
import requests
from web3 import Web3
from web3.exceptions import (
    BadFunctionCallOutput,
    ContractLogicError,
    TimeExhausted,
    Web3RPCError,
)

from doubles import (
    ACCOUNT_0,
    ACCOUNT_1,
    OPERATOR_ADDRESS,
    OPERATOR_PRIVKEY,
    TOKEN_ADDRESS,
    TX_HASH,
    make_receipt,
)
from token_service.constants import RECEIPT_POLL_LATENCY
from token_service.contracts import get_contract_abi, get_contract_bytecode
from token_service.exceptions import (
    ContractNotReady,
    OnChainExecutionFailed,
    ReceiptTimeout,
    TransportFailure,
)
from token_service.token import TokenClient, TokenContract, TransactionReceipt


@pytest.fixture
def web3_receipt():
    return {
        "transactionHash": bytes.fromhex("ab" * 32),
        "blockNumber": 12,
        "gasUsed": 51234,
        "status": 1,
        "contractAddress": None,
    }


@pytest.fixture
def web3(web3_receipt):
    web3 = mock.MagicMock()
    web3.eth.get_transaction_count.return_value = 7
    web3.eth.chain_id = 31337
    web3.eth.generate_gas_price.return_value = None
    web3.eth.send_raw_transaction.return_value = bytes.fromhex("ab" * 32)
    web3.eth.wait_for_transaction_receipt.return_value = web3_receipt
    return web3


@pytest.fixture
def client(web3):
    client = TokenClient(web3, OPERATOR_PRIVKEY, receipt_timeout=5)
    client.account = mock.Mock(
        **{"sign_transaction.return_value": mock.Mock(raw_transaction=b"signed")}
    )
    return client


@pytest.fixture
def contract_function():
    function = mock.Mock()
    function.build_transaction.return_value = {"to": TOKEN_ADDRESS, "data": "0x"}
    return function


class TestTransactionReceipt:
    def test_from_web3_parses_receipt(self, web3_receipt):
        web3_receipt["contractAddress"] = TOKEN_ADDRESS.lower()
        receipt = TransactionReceipt.from_web3(web3_receipt)

        assert receipt == TransactionReceipt(
            tx_hash=TX_HASH,
            block_number=12,
            gas_used=51234,
            status=1,
            contract_address=TOKEN_ADDRESS,
        )

    def test_from_web3_tolerates_missing_contract_address(self, web3_receipt):
        del web3_receipt["contractAddress"]
        assert TransactionReceipt.from_web3(web3_receipt).contract_address is None

    @pytest.mark.parametrize("status, expected", [(1, True), (0, False)])
    def test_successful_reflects_status(self, status, expected):
        assert make_receipt(status=status).successful is expected


class TestTokenClient:
    def test_derives_address_from_private_key(self, web3):
        assert TokenClient(web3, OPERATOR_PRIVKEY).address == OPERATOR_ADDRESS

    def test_installs_gas_price_strategy(self, web3):
        strategy = mock.Mock()
        TokenClient(web3, OPERATOR_PRIVKEY, gas_price_strategy=strategy)
        web3.eth.set_gas_price_strategy.assert_called_once_with(strategy)

    def test_without_strategy_leaves_web3_untouched(self, web3):
        TokenClient(web3, OPERATOR_PRIVKEY)
        web3.eth.set_gas_price_strategy.assert_not_called()

    def test_from_config(self):
        config = mock.Mock(
            chain_url="http://127.0.0.1:8545",
            privkey=OPERATOR_PRIVKEY,
            gas_price_strategy=None,
            receipt_timeout=30,
        )
        client = TokenClient.from_config(config)

        assert isinstance(client.web3, Web3)
        assert client.address == OPERATOR_ADDRESS
        assert client.receipt_timeout == 30

    def test_transact_signs_sends_and_waits_for_receipt(self, client, web3, contract_function):
        receipt = client.transact(contract_function)

        web3.eth.get_transaction_count.assert_called_once_with(OPERATOR_ADDRESS, "pending")
        contract_function.build_transaction.assert_called_once_with(
            {"from": OPERATOR_ADDRESS, "nonce": 7, "chainId": 31337}
        )
        client.account.sign_transaction.assert_called_once_with(
            contract_function.build_transaction.return_value
        )
        web3.eth.send_raw_transaction.assert_called_once_with(b"signed")
        web3.eth.wait_for_transaction_receipt.assert_called_once_with(
            bytes.fromhex("ab" * 32), timeout=5, poll_latency=RECEIPT_POLL_LATENCY
        )
        assert receipt == make_receipt()

    def test_transact_passes_generated_gas_price(self, client, web3, contract_function):
        web3.eth.generate_gas_price.return_value = 10 ** 9
        client.transact(contract_function)

        params = contract_function.build_transaction.call_args[0][0]
        assert params["gasPrice"] == 10 ** 9

    def test_transact_returns_failed_receipts(self, client, web3, web3_receipt, contract_function):
        web3_receipt["status"] = 0
        assert client.transact(contract_function).successful is False

    def test_revert_during_submission_raises_on_chain_execution_failed(
        self, client, web3, contract_function
    ):
        contract_function.build_transaction.side_effect = ContractLogicError(
            "execution reverted: Ownable: caller is not the owner"
        )

        with pytest.raises(OnChainExecutionFailed) as exc_info:
            client.transact(contract_function)

        assert exc_info.value.tx_hash is None
        assert isinstance(exc_info.value.__cause__, ContractLogicError)
        web3.eth.send_raw_transaction.assert_not_called()

    @pytest.mark.parametrize(
        "error",
        [
            requests.exceptions.ConnectionError("connection refused"),
            Web3RPCError("nonce too low"),
            TimeoutError("timed out"),
        ],
        ids=["requests", "rpc", "timeout"],
    )
    def test_transport_errors_raise_transport_failure(
        self, client, web3, contract_function, error
    ):
        web3.eth.send_raw_transaction.side_effect = error

        with pytest.raises(TransportFailure) as exc_info:
            client.transact(contract_function)

        assert exc_info.value.__cause__ is error
        web3.eth.wait_for_transaction_receipt.assert_not_called()

    def test_exhausted_receipt_wait_raises_receipt_timeout(self, client, web3, contract_function):
        web3.eth.wait_for_transaction_receipt.side_effect = TimeExhausted()

        with pytest.raises(ReceiptTimeout) as exc_info:
            client.transact(contract_function)

        assert isinstance(exc_info.value, TransportFailure)
        assert exc_info.value.tx_hash == TX_HASH
        assert exc_info.value.timeout == 5

    def test_send_lock_is_released_after_failures(self, client, web3, contract_function):
        web3.eth.send_raw_transaction.side_effect = requests.exceptions.ConnectionError()
        with pytest.raises(TransportFailure):
            client.transact(contract_function)

        assert not client._send_lock.locked()

    def test_call_returns_result(self, client):
        function = mock.Mock(**{"call.return_value": 42})
        assert client.call(function) == 42

    def test_call_translates_transport_errors(self, client):
        function = mock.Mock(**{"call.side_effect": requests.exceptions.Timeout()})
        with pytest.raises(TransportFailure):
            client.call(function)

    def test_call_without_contract_code_raises_contract_not_ready(self, client):
        function = mock.Mock(
            address=ACCOUNT_0,
            **{"call.side_effect": BadFunctionCallOutput("Could not transact with/call contract")},
        )
        with pytest.raises(ContractNotReady, match=f"No contract code at {ACCOUNT_0}"):
            client.call(function)

    def test_deploy_returns_contract_bound_to_receipt_address(self, client, web3):
        receipt = make_receipt(contract_address=TOKEN_ADDRESS)
        with mock.patch.object(client, "transact", return_value=receipt) as transact:
            token, deploy_receipt = client.deploy()

        web3.eth.contract.assert_any_call(abi=get_contract_abi(), bytecode=get_contract_bytecode())
        transact.assert_called_once_with(web3.eth.contract.return_value.constructor.return_value)
        assert isinstance(token, TokenContract)
        assert token.address == TOKEN_ADDRESS
        assert deploy_receipt is receipt

    @pytest.mark.parametrize(
        "receipt",
        [make_receipt(status=0, contract_address=TOKEN_ADDRESS), make_receipt(status=1)],
        ids=["failed status", "no contract address"],
    )
    def test_failed_deployment_raises_on_chain_execution_failed(self, client, receipt):
        with mock.patch.object(client, "transact", return_value=receipt):
            with pytest.raises(OnChainExecutionFailed) as exc_info:
                client.deploy()

        assert exc_info.value.tx_hash == receipt.tx_hash

    def test_load_binds_checksummed_address(self, client):
        token = client.load(TOKEN_ADDRESS.lower())
        assert token.address == TOKEN_ADDRESS
        assert token.client is client

    def test_load_rejects_invalid_addresses(self, client):
        with pytest.raises(ValueError):
            client.load("0x1234")


class TestTokenContract:
    @pytest.fixture
    def token(self, client):
        return TokenContract(client, TOKEN_ADDRESS)

    @pytest.mark.parametrize(
        "method, args, contract_function",
        [
            ("mint", (ACCOUNT_0, 5), "mint"),
            ("burn", (5,), "burn"),
            ("transfer", (ACCOUNT_0, 5), "transfer"),
            ("approve", (ACCOUNT_0, 5), "approve"),
            ("transfer_from", (ACCOUNT_0, ACCOUNT_1, 5), "transferFrom"),
        ],
    )
    def test_transactions_are_sent_through_client(
        self, token, client, method, args, contract_function
    ):
        function = getattr(token.functions, contract_function)
        with mock.patch.object(client, "transact", return_value=make_receipt()) as transact:
            receipt = getattr(token, method)(*args)

        function.assert_called_once_with(*args)
        transact.assert_called_once_with(function.return_value)
        assert receipt == make_receipt()

    def test_balance_of(self, token):
        token.functions.balanceOf.return_value.call.return_value = 2 ** 100
        assert token.balance_of(ACCOUNT_0) == 2 ** 100
        token.functions.balanceOf.assert_called_once_with(ACCOUNT_0)

    def test_allowance(self, token):
        token.functions.allowance.return_value.call.return_value = 17
        assert token.allowance(ACCOUNT_0, ACCOUNT_1) == 17
        token.functions.allowance.assert_called_once_with(ACCOUNT_0, ACCOUNT_1)

    def test_total_supply(self, token):
        token.functions.totalSupply.return_value.call.return_value = 1000
        assert token.total_supply() == 1000

    def test_info(self, token):
        token.functions.name.return_value.call.return_value = "ERC20Test"
        token.functions.symbol.return_value.call.return_value = "E20T"
        token.functions.decimals.return_value.call.return_value = 18
        token.functions.owner.return_value.call.return_value = OPERATOR_ADDRESS

        assert token.info() == {
            "name": "ERC20Test",
            "symbol": "E20T",
            "decimals": 18,
            "owner": OPERATOR_ADDRESS,
        }

from unittest import mock

import pytest
from web3.exceptions import BadFunctionCallOutput

from doubles import ACCOUNT_0, ACCOUNT_1, OPERATOR_PRIVKEY, OTHER_TOKEN_ADDRESS, TOKEN_ADDRESS
from token_service.exceptions import TransportFailure
from token_service.services.utils.factories import construct_flask_app
from token_service.token import TokenClient, TokenRegistry


class TestBalance:
    def test_returns_balance_as_decimal_string(self, token_service_client, current_token):
        current_token.balance_of.return_value = 2 ** 128

        response = token_service_client.get(
            "/api/erc20test/balance", query_string={"account": ACCOUNT_0.lower()}
        )

        assert response.status_code == 200
        assert response.get_json() == {
            "balance": str(2 ** 128),
            "account": ACCOUNT_0,
            "contractAddress": TOKEN_ADDRESS,
        }
        current_token.balance_of.assert_called_once_with(ACCOUNT_0)

    def test_queries_given_contract(self, token_service_client, token_registry, current_token):
        response = token_service_client.get(
            "/api/erc20test/balance",
            query_string={"account": ACCOUNT_0, "contract_address": OTHER_TOKEN_ADDRESS},
        )

        other_token = token_registry[OTHER_TOKEN_ADDRESS]
        other_token.balance_of.assert_called_once_with(ACCOUNT_0)
        current_token.balance_of.assert_not_called()
        assert response.get_json()["contractAddress"] == OTHER_TOKEN_ADDRESS

    @pytest.mark.parametrize("params", [{}, {"account": "0x12"}], ids=["missing", "invalid"])
    def test_invalid_account_is_rejected(self, token_service_client, current_token, params):
        response = token_service_client.get("/api/erc20test/balance", query_string=params)

        assert response.status_code == 400
        current_token.balance_of.assert_not_called()

    def test_without_contract_returns_409(self, empty_token_service_client):
        response = empty_token_service_client.get(
            "/api/erc20test/balance", query_string={"account": ACCOUNT_0}
        )
        assert response.status_code == 409

    def test_transport_failure_returns_503(self, token_service_client, current_token):
        current_token.balance_of.side_effect = TransportFailure("RPC request failed: refused")

        response = token_service_client.get(
            "/api/erc20test/balance", query_string={"account": ACCOUNT_0}
        )

        assert response.status_code == 503
        assert response.get_json() == {
            "error": "TransportFailure",
            "message": "RPC request failed: refused",
        }


def test_total_supply(token_service_client, current_token):
    current_token.total_supply.return_value = 10 ** 24

    response = token_service_client.get("/api/erc20test/totalSupply")

    assert response.status_code == 200
    assert response.get_json() == {"totalSupply": str(10 ** 24), "contractAddress": TOKEN_ADDRESS}


def test_allowance(token_service_client, current_token):
    current_token.allowance.return_value = 300

    response = token_service_client.get(
        "/api/erc20test/allowance", query_string={"owner": ACCOUNT_0, "spender": ACCOUNT_1}
    )

    assert response.status_code == 200
    assert response.get_json() == {
        "allowance": "300",
        "owner": ACCOUNT_0,
        "spender": ACCOUNT_1,
        "contractAddress": TOKEN_ADDRESS,
    }
    current_token.allowance.assert_called_once_with(ACCOUNT_0, ACCOUNT_1)


def test_allowance_requires_spender(token_service_client, current_token):
    response = token_service_client.get(
        "/api/erc20test/allowance", query_string={"owner": ACCOUNT_0}
    )

    assert response.status_code == 400
    current_token.allowance.assert_not_called()


class TestAddressWithoutContractCode:
    """An address without contract code can be loaded, but fails once it is used."""

    @pytest.fixture
    def web3(self):
        web3 = mock.MagicMock()
        functions = web3.eth.contract.return_value.functions
        functions.balanceOf.return_value.address = ACCOUNT_1
        functions.balanceOf.return_value.call.side_effect = BadFunctionCallOutput(
            "Could not transact with/call contract function"
        )
        return web3

    @pytest.fixture
    def client(self, web3):
        app = construct_flask_app(test_config={"TESTING": True})
        app.config["token-registry"] = TokenRegistry(TokenClient(web3, OPERATOR_PRIVKEY))
        client = app.test_client()
        assert client.post("/api/erc20test/load", data={"address": ACCOUNT_1}).status_code == 200
        return client

    def test_balance_returns_409(self, client):
        response = client.get("/api/erc20test/balance", query_string={"account": ACCOUNT_0})

        assert response.status_code == 409
        assert response.get_json() == {
            "error": "ContractNotReady",
            "message": f"No contract code at {ACCOUNT_1}",
        }

    def test_transfer_from_returns_409_without_submitting(self, client, web3):
        response = client.post(
            "/api/erc20test/transferFrom", data={"from": ACCOUNT_0, "to": ACCOUNT_1, "amount": "1"}
        )

        assert response.status_code == 409
        assert response.get_json()["error"] == "ContractNotReady"
        web3.eth.send_raw_transaction.assert_not_called()

"""Read the state of an ERC20Test contract.

The following endpoints are supplied by this blueprint:

    * [GET] /api/erc20test/balance?account=<address>
        Return the token balance of `account`.

    * [GET] /api/erc20test/totalSupply
        Return the total amount of tokens in existence.

    * [GET] /api/erc20test/allowance?owner=<address>&spender=<address>
        Return the amount `spender` may still transfer on behalf of `owner`.

Amounts are returned as decimal strings.
"""
from flask import Blueprint

from token_service.constants import API_PREFIX
from token_service.services.common.metrics import REDMetricsTracker
from token_service.services.common.schemas import request_parameters
from token_service.services.token.schemas import (
    AllowanceRequest,
    BalanceRequest,
    TotalSupplyRequest,
)

queries_blueprint = Blueprint("queries_view", __name__, url_prefix=API_PREFIX)

balance_schema = BalanceRequest()
total_supply_schema = TotalSupplyRequest()
allowance_schema = AllowanceRequest()


@queries_blueprint.route("/balance", methods=["GET"])
def balance_view():
    with REDMetricsTracker():
        data = balance_schema.validate_and_deserialize(request_parameters())
        token, account = data["token"], data["account"]
        return balance_schema.jsonify(
            {
                "balance": token.balance_of(account),
                "account": account,
                "token_address": token.address,
            }
        )


@queries_blueprint.route("/totalSupply", methods=["GET"])
def total_supply_view():
    with REDMetricsTracker():
        data = total_supply_schema.validate_and_deserialize(request_parameters())
        token = data["token"]
        return total_supply_schema.jsonify(
            {"total_supply": token.total_supply(), "token_address": token.address}
        )


@queries_blueprint.route("/allowance", methods=["GET"])
def allowance_view():
    with REDMetricsTracker():
        data = allowance_schema.validate_and_deserialize(request_parameters())
        token, owner, spender = data["token"], data["owner"], data["spender"]
        return allowance_schema.jsonify(
            {
                "allowance": token.allowance(owner, spender),
                "owner": owner,
                "spender": spender,
                "token_address": token.address,
            }
        )

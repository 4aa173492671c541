"""Deploy, load and inspect ERC20Test contracts.

The following endpoints are supplied by this blueprint:

    * [POST] /api/erc20test/deploy
        Deploy a new contract and make it the current one. Blocks until the
        deployment is mined.

    * [POST] /api/erc20test/load?address=<address>
        Make the contract at `address` the current one. No request is sent to
        the node.

    * [GET] /api/erc20test/address
        Return the address of the current contract, if any.

    * [GET] /api/erc20test/info
        Return the name, symbol, decimals and owner of a contract.

"""
import structlog
from flask import Blueprint, current_app

from token_service.constants import API_PREFIX
from token_service.services.common.metrics import REDMetricsTracker
from token_service.services.common.schemas import request_parameters
from token_service.services.token.schemas import (
    AddressRequest,
    DeployRequest,
    InfoRequest,
    LoadRequest,
)

log = structlog.get_logger(__name__)

contract_blueprint = Blueprint("contract_view", __name__, url_prefix=API_PREFIX)

deploy_schema = DeployRequest()
load_schema = LoadRequest()
address_schema = AddressRequest()
info_schema = InfoRequest()


@contract_blueprint.route("/deploy", methods=["POST"])
def deploy_view():
    """Deploy a new ERC20Test contract owned by the service's operator account."""
    with REDMetricsTracker():
        log.info("Processing contract deployment request")
        token, receipt = current_app.config["token-registry"].deploy()
        return deploy_schema.jsonify(
            {
                "token_address": token.address,
                "tx_hash": receipt.tx_hash,
                "block_number": receipt.block_number,
            }
        )


@contract_blueprint.route("/load", methods=["POST"])
def load_view():
    with REDMetricsTracker():
        data = load_schema.validate_and_deserialize(request_parameters())
        token = current_app.config["token-registry"].load(data["address"])
        return load_schema.jsonify(
            {"message": "Contract loaded successfully", "token_address": token.address}
        )


@contract_blueprint.route("/address", methods=["GET"])
def address_view():
    """Return the current contract's address.

    If no contract was deployed or loaded yet, a message saying so is returned instead.
    """
    with REDMetricsTracker():
        address = current_app.config["token-registry"].current_address
        if address is None:
            return address_schema.jsonify({"message": "No contract loaded"})
        return address_schema.jsonify({"token_address": address})


@contract_blueprint.route("/info", methods=["GET"])
def info_view():
    with REDMetricsTracker():
        data = info_schema.validate_and_deserialize(request_parameters())
        token = data["token"]
        return info_schema.jsonify({"token_address": token.address, **token.info()})

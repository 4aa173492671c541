"""Submit transactions to an ERC20Test contract.

Every endpoint blocks until the transaction is mined and returns its receipt:
`transactionHash`, `blockNumber`, `gasUsed`, `status` and the `contractAddress`
of the contract transacted with.

The following endpoints are supplied by this blueprint:

    * [POST] /api/erc20test/mint?to=<address>&amount=<int>
        Mint `amount` new tokens to `to`. Only the contract's owner may do so.

    * [POST] /api/erc20test/burn?amount=<int>
        Burn `amount` tokens of the operator account.

    * [POST] /api/erc20test/transfer?to=<address>&amount=<int>
        Transfer `amount` tokens from the operator account to `to`.

    * [POST] /api/erc20test/approve?spender=<address>&amount=<int>
        Allow `spender` to transfer up to `amount` of the operator's tokens.

    * [POST] /api/erc20test/transferFrom?from=<address>&to=<address>&amount=<int>
        Transfer `amount` tokens from `from` to `to`, spending the allowance
        `from` granted to the operator account. The sender's balance and the
        allowance are checked before the transaction is submitted.

"""
import dataclasses

from flask import Blueprint, current_app
from structlog import get_logger

from token_service.constants import API_PREFIX
from token_service.services.common.metrics import REDMetricsTracker
from token_service.services.common.schemas import request_parameters
from token_service.services.token.schemas import (
    ApproveRequest,
    BurnRequest,
    MintRequest,
    TransactionSchema,
    TransferFromRequest,
    TransferRequest,
)
from token_service.token import TokenContract, TransactionReceipt, guarded_transfer_from

log = get_logger(__name__)

transactions_blueprint = Blueprint("transactions_view", __name__, url_prefix=API_PREFIX)

mint_schema = MintRequest()
burn_schema = BurnRequest()
transfer_schema = TransferRequest()
approve_schema = ApproveRequest()
transfer_from_schema = TransferFromRequest()


def jsonify_receipt(schema: TransactionSchema, token: TokenContract, receipt: TransactionReceipt):
    dumped = dataclasses.asdict(receipt)
    dumped["token_address"] = receipt.contract_address or token.address
    return schema.jsonify(dumped)


@transactions_blueprint.route("/mint", methods=["POST"])
def mint_view():
    with REDMetricsTracker():
        data = mint_schema.validate_and_deserialize(request_parameters())
        token = data["token"]
        receipt = token.mint(data["to"], data["amount"])
        return jsonify_receipt(mint_schema, token, receipt)


@transactions_blueprint.route("/burn", methods=["POST"])
def burn_view():
    with REDMetricsTracker():
        data = burn_schema.validate_and_deserialize(request_parameters())
        token = data["token"]
        receipt = token.burn(data["amount"])
        return jsonify_receipt(burn_schema, token, receipt)


@transactions_blueprint.route("/transfer", methods=["POST"])
def transfer_view():
    with REDMetricsTracker():
        data = transfer_schema.validate_and_deserialize(request_parameters())
        token = data["token"]
        receipt = token.transfer(data["to"], data["amount"])
        return jsonify_receipt(transfer_schema, token, receipt)


@transactions_blueprint.route("/approve", methods=["POST"])
def approve_view():
    with REDMetricsTracker():
        data = approve_schema.validate_and_deserialize(request_parameters())
        token = data["token"]
        receipt = token.approve(data["spender"], data["amount"])
        return jsonify_receipt(approve_schema, token, receipt)


@transactions_blueprint.route("/transferFrom", methods=["POST"])
def transfer_from_view():
    """Transfer tokens on behalf of `from`, using the operator account as spender.

    Fails without submitting anything if `from` holds less than `amount`
    tokens, or granted the operator account an allowance lower than `amount`.
    """
    with REDMetricsTracker():
        data = transfer_from_schema.validate_and_deserialize(request_parameters())
        token = data["token"]
        spender = current_app.config["token-registry"].client.address

        log.debug("Performing transferFrom", sender=data["sender"], spender=spender)
        receipt = guarded_transfer_from(
            token, data["sender"], data["receiver"], data["amount"], spender
        )
        return jsonify_receipt(transfer_from_schema, token, receipt)

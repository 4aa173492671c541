from marshmallow.fields import Integer, String

from token_service.services.common.schemas import (
    ChecksumAddressField,
    HexQuantityField,
    TokenAmountField,
)
from token_service.services.token.schemas.base import TokenResourceSchema


class TransactionSchema(TokenResourceSchema):
    """Base Schema for requests submitting a transaction to a token contract.

    Dumps the fields of a :class:`token_service.token.TransactionReceipt`.
    Numbers are rendered as decimal strings, except for the `status`, which is
    rendered as hex quantity (`0x1` on success).
    """

    # Deserialization fields.
    tx_hash = String(dump_only=True, data_key="transactionHash")
    block_number = Integer(as_string=True, dump_only=True, data_key="blockNumber")
    gas_used = Integer(as_string=True, dump_only=True, data_key="gasUsed")
    status = HexQuantityField(dump_only=True)


class MintRequest(TransactionSchema):
    """Validator for POST /mint requests."""

    to = ChecksumAddressField(required=True, load_only=True)
    amount = TokenAmountField(required=True, load_only=True)


class BurnRequest(TransactionSchema):
    """Validator for POST /burn requests."""

    amount = TokenAmountField(required=True, load_only=True)


class TransferRequest(TransactionSchema):
    """Validator for POST /transfer requests."""

    to = ChecksumAddressField(required=True, load_only=True)
    amount = TokenAmountField(required=True, load_only=True)


class ApproveRequest(TransactionSchema):
    """Validator for POST /approve requests."""

    spender = ChecksumAddressField(required=True, load_only=True)
    amount = TokenAmountField(required=True, load_only=True)


class TransferFromRequest(TransactionSchema):
    """Validator for POST /transferFrom requests.

    The `from` and `to` parameters are loaded as `sender` and `receiver`.
    """

    sender = ChecksumAddressField(required=True, load_only=True, data_key="from")
    receiver = ChecksumAddressField(required=True, load_only=True, data_key="to")
    amount = TokenAmountField(required=True, load_only=True)

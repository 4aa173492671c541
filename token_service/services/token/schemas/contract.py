from marshmallow.fields import Integer, String

from token_service.services.common.schemas import ChecksumAddressField
from token_service.services.token.schemas.base import ContractAddressSchema, TokenResourceSchema


class DeployRequest(ContractAddressSchema):
    """Validator for POST /deploy requests."""

    # Deserialization fields.
    tx_hash = String(dump_only=True, data_key="transactionHash")
    block_number = Integer(as_string=True, dump_only=True, data_key="blockNumber")


class LoadRequest(ContractAddressSchema):
    """Validator for POST /load requests."""

    # Serialization fields.
    address = ChecksumAddressField(required=True, load_only=True)

    # Deserialization fields.
    message = String(dump_only=True)


class AddressRequest(ContractAddressSchema):
    """Validator for GET /address requests."""

    message = String(dump_only=True)


class InfoRequest(TokenResourceSchema):
    """Validator for GET /info requests."""

    name = String(dump_only=True)
    symbol = String(dump_only=True)
    decimals = Integer(dump_only=True)
    owner = ChecksumAddressField(dump_only=True)

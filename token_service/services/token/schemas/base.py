from flask import current_app

from token_service.services.common.schemas import ChecksumAddressField, SPSchema


class ContractAddressSchema(SPSchema):
    """Schema dumping the address of the contract a response refers to.

    The address is read from the `token_address` key of the dumped object and
    rendered as `contractAddress`.
    """

    token_address = ChecksumAddressField(dump_only=True, data_key="contractAddress")


class TokenResourceSchema(ContractAddressSchema):
    """Default Schema for requests operating on a token contract.

    Accepts an optional `contract_address`. When calling
    :meth:`.validate_and_deserialize`, the matching
    :class:`token_service.token.TokenContract` is looked up in the app's
    :class:`token_service.token.TokenRegistry` and added to the returned data
    under the `token` key. Without an address, the registry's current contract
    is used.

    parameters:

        - contract_address (:class:`.ChecksumAddressField`)

    :raises token_service.exceptions.ContractNotReady:
        if no address was given and no contract was deployed or loaded yet.
    """

    contract_address = ChecksumAddressField(load_only=True)

    def validate_and_deserialize(self, data_obj) -> dict:
        deserialized = super(TokenResourceSchema, self).validate_and_deserialize(data_obj)
        registry = current_app.config["token-registry"]
        deserialized["token"] = registry.resolve(deserialized.pop("contract_address", None))
        return deserialized

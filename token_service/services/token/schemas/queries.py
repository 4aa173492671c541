from token_service.services.common.schemas import ChecksumAddressField, TokenAmountField
from token_service.services.token.schemas.base import TokenResourceSchema


class BalanceRequest(TokenResourceSchema):
    """Validator for GET /balance requests."""

    account = ChecksumAddressField(required=True)

    balance = TokenAmountField(dump_only=True)


class TotalSupplyRequest(TokenResourceSchema):
    """Validator for GET /totalSupply requests."""

    total_supply = TokenAmountField(dump_only=True, data_key="totalSupply")


class AllowanceRequest(TokenResourceSchema):
    """Validator for GET /allowance requests."""

    owner = ChecksumAddressField(required=True)
    spender = ChecksumAddressField(required=True)

    allowance = TokenAmountField(dump_only=True)

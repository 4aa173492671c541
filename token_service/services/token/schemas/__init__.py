from token_service.services.token.schemas.base import (
    ContractAddressSchema,
    TokenResourceSchema,
)
from token_service.services.token.schemas.contract import (
    AddressRequest,
    DeployRequest,
    InfoRequest,
    LoadRequest,
)
from token_service.services.token.schemas.queries import (
    AllowanceRequest,
    BalanceRequest,
    TotalSupplyRequest,
)
from token_service.services.token.schemas.transactions import (
    ApproveRequest,
    BurnRequest,
    MintRequest,
    TransactionSchema,
    TransferFromRequest,
    TransferRequest,
)

__all__ = [
    "AddressRequest",
    "AllowanceRequest",
    "ApproveRequest",
    "BalanceRequest",
    "BurnRequest",
    "ContractAddressSchema",
    "DeployRequest",
    "InfoRequest",
    "LoadRequest",
    "MintRequest",
    "TokenResourceSchema",
    "TotalSupplyRequest",
    "TransactionSchema",
    "TransferFromRequest",
    "TransferRequest",
]

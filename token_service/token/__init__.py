from token_service.token.client import TokenClient, TokenContract, TransactionReceipt
from token_service.token.registry import TokenRegistry
from token_service.token.transfer import guarded_transfer_from

__all__ = [
    "TokenClient",
    "TokenContract",
    "TokenRegistry",
    "TransactionReceipt",
    "guarded_transfer_from",
]

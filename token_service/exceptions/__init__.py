from token_service.exceptions.config import (
    ConfigurationError,
    KeystoreError,
    ServiceConfigurationError,
)
from token_service.exceptions.token import (
    ContractNotReady,
    InsufficientAllowance,
    InsufficientBalance,
    OnChainExecutionFailed,
    PreconditionFailed,
    ReceiptTimeout,
    TokenServiceError,
    TransportFailure,
)

__all__ = [
    "ConfigurationError",
    "ContractNotReady",
    "InsufficientAllowance",
    "InsufficientBalance",
    "KeystoreError",
    "OnChainExecutionFailed",
    "PreconditionFailed",
    "ReceiptTimeout",
    "ServiceConfigurationError",
    "TokenServiceError",
    "TransportFailure",
]

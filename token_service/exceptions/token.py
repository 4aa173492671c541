from typing import Optional


class TokenServiceError(Exception):
    """Base class for errors raised while operating on the token contract.

    Each subclass names the HTTP status it is reported with by the token API.
    """

    http_status = 500

    def details(self) -> dict:
        """Return the diagnostic values attached to this error, keyed for the error payload."""
        return {}


class ContractNotReady(TokenServiceError):
    """No contract has been deployed or loaded yet."""

    http_status = 409

    def __init__(self, reason: Optional[str] = None):
        super(ContractNotReady, self).__init__(reason or "Contract not deployed or loaded")


class PreconditionFailed(TokenServiceError):
    """A local pre-flight check failed before anything was submitted on chain.

    Carries the value observed on chain and the amount the operation required.
    """

    http_status = 422
    subject = "value"

    def __init__(self, observed: int, required: int):
        self.observed, self.required = observed, required
        super(PreconditionFailed, self).__init__(
            f"Insufficient {self.subject}. Current: {observed}, required: {required}"
        )

    def details(self) -> dict:
        return {"observed": str(self.observed), "required": str(self.required)}


class InsufficientBalance(PreconditionFailed):
    """The token balance of the sending account is lower than the requested amount."""

    subject = "balance"


class InsufficientAllowance(PreconditionFailed):
    """The allowance granted to the spender is lower than the requested amount."""

    subject = "allowance"


class OnChainExecutionFailed(TokenServiceError):
    """The transaction was reverted, or mined with a failing status.

    `status` and `tx_hash` are `None` if the node rejected the transaction
    before it was ever broadcast (i.e. the revert surfaced during gas estimation).
    """

    http_status = 502

    def __init__(
        self, status: Optional[int] = None, tx_hash: Optional[str] = None, reason: str = ""
    ):
        self.status, self.tx_hash, self.reason = status, tx_hash, reason
        if tx_hash is None:
            message = f"Transaction reverted: {reason or 'no reason given'}"
        else:
            message = f"Transaction {tx_hash} failed with status: {hex(status)}"
        super(OnChainExecutionFailed, self).__init__(message)

    def details(self) -> dict:
        return {
            "status": None if self.status is None else hex(self.status),
            "transactionHash": self.tx_hash,
        }


class TransportFailure(TokenServiceError):
    """A read or submit call could not be completed due to a network or RPC error."""

    http_status = 503


class ReceiptTimeout(TransportFailure):
    """The transaction was submitted, but no receipt became available in time.

    The transaction may still be mined later.
    """

    http_status = 504

    def __init__(self, tx_hash: str, timeout: float):
        self.tx_hash, self.timeout = tx_hash, timeout
        super(ReceiptTimeout, self).__init__(
            f"Transaction {tx_hash} was not mined within {timeout} seconds"
        )

    def details(self) -> dict:
        return {"transactionHash": self.tx_hash}

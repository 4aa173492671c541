"""Third-party token transfers with pre-flight checks.

:func:`guarded_transfer_from` only submits a `transferFrom` transaction after
verifying that the sender holds enough tokens and that the spender was granted
a sufficient allowance. Failing either check aborts before anything is sent,
yielding a precise diagnostic instead of an on-chain revert.

The checks are point-in-time reads and are not atomic with the submission:
concurrent transfers may pass against the same balance or allowance. The
contract remains the final arbiter; a transfer it reverts surfaces as
:exc:`OnChainExecutionFailed`.
"""
from typing import Optional

import structlog
from eth_typing import ChecksumAddress

from token_service.exceptions import (
    ContractNotReady,
    InsufficientAllowance,
    InsufficientBalance,
    OnChainExecutionFailed,
)
from token_service.token.client import TokenContract, TransactionReceipt

log = structlog.get_logger(__name__)


def guarded_transfer_from(
    token: Optional[TokenContract],
    sender: ChecksumAddress,
    receiver: ChecksumAddress,
    amount: int,
    spender: ChecksumAddress,
) -> TransactionReceipt:
    """Transfer `amount` tokens from `sender` to `receiver` on behalf of `spender`.

    `spender` is the account submitting the transaction, i.e. the account whose
    allowance granted by `sender` is checked.

    :raises ContractNotReady: if `token` is `None`.
    :raises InsufficientBalance: if `sender` holds less than `amount`.
    :raises InsufficientAllowance: if `spender` may spend less than `amount` of `sender`'s tokens.
    :raises OnChainExecutionFailed: if the transaction reverted or was mined with a failing status.
    :raises TransportFailure: if any of the calls to the node failed.
    """
    if token is None:
        raise ContractNotReady()

    log.info("Starting transferFrom", amount=amount, sender=sender, receiver=receiver)

    balance = token.balance_of(sender)
    log.info("Sender balance", sender=sender, balance=balance)
    if balance < amount:
        raise InsufficientBalance(observed=balance, required=amount)

    allowance = token.allowance(sender, spender)
    log.info("Current allowance", spender=spender, allowance=allowance)
    if allowance < amount:
        raise InsufficientAllowance(observed=allowance, required=amount)

    receipt = token.transfer_from(sender, receiver, amount)
    if not receipt.successful:
        log.error("TransferFrom failed", tx_hash=receipt.tx_hash, status=receipt.status)
        raise OnChainExecutionFailed(receipt.status, receipt.tx_hash)

    log.info("TransferFrom successful", tx_hash=receipt.tx_hash)
    return receipt

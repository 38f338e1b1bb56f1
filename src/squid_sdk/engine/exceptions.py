"""
Exception and Error Definitions Module

Defines the exception hierarchy raised by the SDK. Every failure is attributable
to a single step of route execution so callers can tell "can't afford this"
from "not yet approved" from "chain/token unknown" from "chain rejected the
transaction". Nothing is retried internally.

Exception Hierarchy:
    SquidError (root)
    ├── InitializationError
    ├── ConfigurationError
    ├── ValidationError
    ├── InsufficientFundsError
    ├── InsufficientAllowanceError
    └── TransactionFailure
"""

from typing import Optional


class SquidError(Exception):
    """
    Root exception class for all SDK exceptions.

    Catch this to handle every failure raised by the SDK in one place.
    """
    pass


class InitializationError(SquidError):
    """
    Raised when an operation is invoked before ``Squid.init()`` completed,
    or when fetching the SDK metadata failed.
    """
    pass


class ConfigurationError(SquidError):
    """
    Raised when configuration is missing or invalid.

    This includes scenarios such as:
    - Invalid configuration values
    - Unsupported oracle environment
    """
    pass


class ValidationError(SquidError):
    """
    Raised for bad references: unknown chain id, unknown token, malformed route.

    Attributes:
        key: The chain id / token address that could not be resolved
    """

    def __init__(self, message: str, key: Optional[object] = None):
        super().__init__(message)
        self.key = key


class InsufficientFundsError(SquidError):
    """
    Raised when the account balance is below the required amount.

    Attributes:
        account: Account whose balance was checked
        chain_id: Chain the balance was read on
        required: Amount required (base units)
        available: Balance found (base units)
    """

    def __init__(self, account: str, chain_id: int, required: int, available: int):
        super().__init__(
            f"Insufficient funds for account: {account} on chain {chain_id} "
            f"(required {required}, available {available})"
        )
        self.account = account
        self.chain_id = chain_id
        self.required = required
        self.available = available


class InsufficientAllowanceError(SquidError):
    """
    Raised when the allowance granted to a spender is below the required amount.

    Attributes:
        account: Token owner
        spender: Contract the allowance was checked for
        chain_id: Chain the allowance was read on
        required: Amount required (base units)
        available: Allowance found (base units)
    """

    def __init__(self, account: str, spender: str, chain_id: int, required: int, available: int):
        super().__init__(
            f"Insufficient allowance for spender: {spender} on chain {chain_id} "
            f"(owner {account}, required {required}, available {available})"
        )
        self.account = account
        self.spender = spender
        self.chain_id = chain_id
        self.required = required
        self.available = available


class TransactionFailure(SquidError):
    """
    Raised when an approval or execution transaction failed to broadcast,
    reverted on-chain, or was not confirmed in time.

    Attributes:
        stage: ``"approval"`` or ``"execution"``
        chain_id: Chain the transaction was sent to
        tx_hash: Transaction hash if the transaction was broadcast
        reason: Error reason
    """

    def __init__(self, stage: str, chain_id: int, reason: str, tx_hash: Optional[str] = None):
        message = f"{stage.capitalize()} transaction failed on chain {chain_id}: {reason}"
        if tx_hash:
            message += f" (tx {tx_hash})"
        super().__init__(message)
        self.stage = stage
        self.chain_id = chain_id
        self.tx_hash = tx_hash
        self.reason = reason

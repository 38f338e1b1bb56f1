"""
Base Schema Models for the Squid SDK

This module defines the fundamental base classes that all other schema models
inherit from. It provides the foundation for type safety, validation and
consistent (camelCase) wire serialization across the SDK.

Core Classes:
    - CanonicalModel: Pydantic base model accepting both field names and wire aliases
    - TransactionStatus: Lifecycle status of a submitted transaction
    - BaseTransactionResult: Abstract result of a transaction submitted by the SDK

Dependencies:
    - pydantic: For data validation and serialization
"""

from typing import Optional, Dict, Any
from abc import ABC
from datetime import datetime
from enum import Enum

from pydantic import BaseModel, ConfigDict, Field


class CanonicalModel(BaseModel):
    """
    Pydantic base model shared by every SDK schema.

    The Squid API speaks camelCase while the SDK exposes snake_case attributes.
    Models declare camelCase aliases and accept either spelling on input;
    :meth:`to_wire` produces the camelCase representation expected by the API.

    Example:
        class MyModel(CanonicalModel):
            chain_id: int = Field(..., alias="chainId")

        MyModel(chainId=1) == MyModel(chain_id=1)
        MyModel(chain_id=1).to_wire()  # {"chainId": 1}
    """

    model_config = ConfigDict(populate_by_name=True)

    def to_wire(self) -> Dict[str, Any]:
        """
        Convert model to its camelCase wire representation.

        ``None`` fields are dropped so optional query parameters are not sent.

        Returns:
            Dict[str, Any]: JSON-compatible dictionary keyed by wire aliases.
        """
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)


class TransactionStatus(str, Enum):
    """
    Enumeration of transaction statuses reported by the SDK.

    Attributes:
        SUCCESS: Transaction confirmed on-chain
        PENDING: Transaction broadcast, confirmation left to the caller
        SKIPPED: No transaction was needed (e.g. allowance already sufficient)
    """
    SUCCESS = "success"
    PENDING = "pending"
    SKIPPED = "skipped"


class BaseTransactionResult(CanonicalModel, ABC):
    """
    Abstract base class for transactions submitted by the SDK.

    Attributes:
        status: Transaction lifecycle status
        tx_hash: Transaction hash if a transaction was broadcast
        chain_id: Chain the transaction was submitted to
        message: Human-readable summary
        created_at: Timestamp when the result was recorded
    """

    status: TransactionStatus = Field(..., description="Transaction lifecycle status")
    tx_hash: Optional[str] = Field(None, description="Transaction hash (0x-prefixed hex string)")
    chain_id: int = Field(..., ge=1, description="Chain the transaction was submitted to")
    message: str = Field("", description="Human-readable summary")
    created_at: datetime = Field(default_factory=datetime.now, description="Result recording timestamp")

    def is_success(self) -> bool:
        """
        Check whether the operation needs no further action from the caller.

        Returns:
            bool: True for confirmed or skipped transactions, False while pending.
        """
        return self.status in (TransactionStatus.SUCCESS, TransactionStatus.SKIPPED)

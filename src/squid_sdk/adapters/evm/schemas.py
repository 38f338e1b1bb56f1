"""
EVM Adapter Schema Models

Pydantic models for validation, approval and execution of routes on EVM
chains. All classes inherit from the base schema hierarchy in
``schemas.bases``.

Asset classes (tagged by ``kind``):
    - NativeAsset: the chain's base currency; balance only, no allowance.
    - FungibleAsset: an ERC-20 token contract; balance and allowance.

Result classes:
    - SufficiencyReport: balances / allowance read during validation.
    - ApprovalResult: outcome of an approval step.
    - TransactionHandle: broadcast (unconfirmed) execution transaction.
    - RouteApprovalStatus: positive answer of ``is_route_approved``.

Transaction classes:
    - ExecutionIntent: the fully-formed transaction about to be signed.
"""

from enum import Enum
from typing import Optional, Dict, Any, Literal

from pydantic import ConfigDict, Field

from ...schemas.bases import CanonicalModel, BaseTransactionResult, TransactionStatus


class NativeAsset(CanonicalModel):
    """
    A chain's native currency (e.g. ETH, AVAX).

    Attributes:
        kind: Always ``"native"``
        chain_id: Chain the asset lives on
        symbol: Native currency symbol
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: Literal["native"] = Field(default="native", description="Asset kind discriminator")
    chain_id: int = Field(..., ge=1)
    symbol: str


class FungibleAsset(CanonicalModel):
    """
    An ERC-20 token contract.

    Attributes:
        kind: Always ``"fungible"``
        chain_id: Chain the token is deployed on
        address: Token contract address
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    kind: Literal["fungible"] = Field(default="fungible", description="Asset kind discriminator")
    chain_id: int = Field(..., ge=1)
    address: str


class SufficiencyReport(CanonicalModel):
    """On-chain state read by a successful sufficiency check."""

    account: str
    chain_id: int
    required: int = Field(..., ge=0)
    balance: int = Field(..., ge=0)
    allowance: Optional[int] = Field(None, ge=0, description="None for native assets or when not checked")


class ApprovalOutcome(str, Enum):
    """
    Outcome of an approval step.

    Attributes:
        ALREADY_SUFFICIENT: Allowance already covered the amount, or the asset is native
        APPROVED: An approval transaction was confirmed
        SUBMITTED: An approval transaction was broadcast without waiting
    """
    ALREADY_SUFFICIENT = "already_sufficient"
    APPROVED = "approved"
    SUBMITTED = "submitted"


class ApprovalResult(BaseTransactionResult):
    """
    Result of ``ensure_approved`` / ``approve_route`` / ``approve``.

    Attributes:
        outcome: See :class:`ApprovalOutcome`
        spender: Contract the allowance was granted to
        amount: Amount approved (None if no transaction was sent)
    """

    outcome: ApprovalOutcome
    spender: str
    amount: Optional[int] = Field(None, ge=0)


class TransactionHandle(BaseTransactionResult):
    """
    Handle of a broadcast execution transaction.

    Confirmation is the caller's responsibility, e.g.::

        handle = await squid.execute_route(route, signer)
        receipt = await w3.eth.wait_for_transaction_receipt(handle.tx_hash)
    """

    status: TransactionStatus = Field(default=TransactionStatus.PENDING)
    tx_hash: str
    intent: "ExecutionIntent"


class RouteApprovalStatus(CanonicalModel):
    """Positive result of a read-only route approval check."""

    is_approved: Literal[True] = Field(default=True, alias="isApproved")
    message: str


class ExecutionIntent(CanonicalModel):
    """
    The fully-formed execution transaction before signing.

    ``value`` is ``None`` when the transaction must not carry a value field at
    all (pure transfer routes); :meth:`to_transaction` then omits the key.

    Attributes:
        to: Recipient contract
        data: Call data, copied verbatim from the route
        gas_limit: Gas limit, copied verbatim from the route when present
        value: Native value in wei, or None
        chain_id: Source chain id
        gas_price / max_fee_per_gas / max_priority_fee_per_gas: Fee fields carried by the route
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    to: str
    data: str
    gas_limit: Optional[int] = Field(None, ge=0)
    value: Optional[int] = Field(None, ge=0)
    chain_id: int = Field(..., ge=1)
    gas_price: Optional[int] = Field(None, ge=0)
    max_fee_per_gas: Optional[int] = Field(None, ge=0)
    max_priority_fee_per_gas: Optional[int] = Field(None, ge=0)

    def to_transaction(self, sender: str) -> Dict[str, Any]:
        """
        Convert the intent into a web3 transaction dict.

        Args:
            sender: Address of the signing account

        Returns:
            Dict[str, Any]: Transaction params; unset optional fields are absent.
        """
        tx: Dict[str, Any] = {
            "from": sender,
            "to": self.to,
            "data": self.data,
            "chainId": self.chain_id,
        }
        if self.value is not None:
            tx["value"] = self.value
        if self.gas_limit is not None:
            tx["gas"] = self.gas_limit
        if self.max_fee_per_gas is not None:
            tx["maxFeePerGas"] = self.max_fee_per_gas
            if self.max_priority_fee_per_gas is not None:
                tx["maxPriorityFeePerGas"] = self.max_priority_fee_per_gas
        elif self.gas_price is not None:
            tx["gasPrice"] = self.gas_price
        return tx


TransactionHandle.model_rebuild()

"""
Chain, Token and Route Schema Models

Pydantic models for the metadata and route payloads served by the Squid API.
Field names are snake_case; camelCase aliases match the wire format so API
responses validate directly.

Metadata classes:
    - NativeCurrency / SquidContracts: nested chain descriptors
    - ChainData: chain metadata (RPC endpoint, native currency, execution contract)
    - TokenData: token metadata (address, chain id, decimals)

Route classes:
    - RouteRequest: query parameters for ``GET /api/route``
    - TransactionRequest: prepared transaction payload of a route
    - RouteParams: the original query parameters echoed back in a route
    - Route: complete route; read-only input to execution
"""

from typing import Optional, Dict, Any

from pydantic import ConfigDict, Field

from .bases import CanonicalModel


class NativeCurrency(CanonicalModel):
    """Native (gas) currency of a chain."""

    name: str = Field(..., description="Currency name (e.g. Ether)")
    symbol: str = Field(..., description="Currency symbol (e.g. ETH)")
    decimals: int = Field(18, ge=0, description="Currency decimals")


class SquidContracts(CanonicalModel):
    """Squid contract deployment on a chain."""

    squid_main: str = Field(..., alias="squidMain", description="Route execution contract")
    default_crosschain_token: Optional[str] = Field(None, alias="defaultCrosschainToken")


class ChainData(CanonicalModel):
    """
    Chain metadata, immutable once loaded.

    Attributes:
        chain_id: Numeric EVM chain id
        chain_name: Chain name as known to the Squid API and Axelar (e.g. "Ethereum")
        rpc: JSON-RPC endpoint
        native_currency: Native currency descriptor
        squid_contracts: Contract addresses; ``squid_main`` executes routes
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    chain_id: int = Field(..., alias="chainId", ge=1)
    chain_name: str = Field(..., alias="chainName")
    rpc: str = Field(..., description="JSON-RPC endpoint URL")
    native_currency: NativeCurrency = Field(..., alias="nativeCurrency")
    squid_contracts: SquidContracts = Field(..., alias="squidContracts")

    @property
    def execution_contract(self) -> str:
        return self.squid_contracts.squid_main


class TokenData(CanonicalModel):
    """Token metadata, immutable once loaded."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    chain_id: int = Field(..., alias="chainId", ge=1)
    address: str
    symbol: str
    decimals: int = Field(..., ge=0)
    name: Optional[str] = None


class RouteRequest(CanonicalModel):
    """
    Query parameters for a route quote.

    Serialized with :meth:`CanonicalModel.to_wire` before being sent to
    ``GET /api/route``.
    """

    source_chain_id: int = Field(..., alias="sourceChainId", ge=1)
    destination_chain_id: int = Field(..., alias="destinationChainId", ge=1)
    source_token_address: str = Field(..., alias="sourceTokenAddress")
    destination_token_address: str = Field(..., alias="destinationTokenAddress")
    source_amount: int = Field(..., alias="sourceAmount", ge=0)
    recipient_address: str = Field(..., alias="recipientAddress")
    slippage: float = Field(..., ge=0)
    enable_express: Optional[bool] = Field(None, alias="enableExpress")
    quote_only: Optional[bool] = Field(None, alias="quoteOnly")


class TransactionRequest(CanonicalModel):
    """
    Prepared transaction payload of a route.

    ``route_type`` distinguishes the pure transfer type (``"SEND"``) from
    contract-call routes; a pure transfer never attaches native value.
    """

    route_type: str = Field(..., alias="routeType")
    target_address: Optional[str] = Field(None, alias="targetAddress")
    data: str = Field("0x", description="ABI-encoded call data")
    value: int = Field(0, ge=0, description="Native value declared by the route (wei)")
    gas_limit: Optional[int] = Field(None, alias="gasLimit", ge=0)
    gas_price: Optional[int] = Field(None, alias="gasPrice", ge=0)
    max_fee_per_gas: Optional[int] = Field(None, alias="maxFeePerGas", ge=0)
    max_priority_fee_per_gas: Optional[int] = Field(None, alias="maxPriorityFeePerGas", ge=0)
    destination_chain_gas: int = Field(0, alias="destinationChainGas", ge=0)


class RouteParams(CanonicalModel):
    """Query parameters a route was quoted for."""

    source_chain_id: int = Field(..., alias="sourceChainId", ge=1)
    destination_chain_id: int = Field(..., alias="destinationChainId", ge=1)
    source_token_address: str = Field(..., alias="sourceTokenAddress")
    destination_token_address: str = Field(..., alias="destinationTokenAddress")
    source_amount: int = Field(..., alias="sourceAmount", ge=0)
    recipient_address: Optional[str] = Field(None, alias="recipientAddress")
    slippage: Optional[float] = None


class Route(CanonicalModel):
    """
    A previously quoted cross-chain route. Never mutated by the SDK.

    Attributes:
        estimate: Quote estimate as returned by the API (not interpreted)
        transaction_request: Prepared execution transaction payload
        params: Original query parameters
    """

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    estimate: Optional[Dict[str, Any]] = None
    transaction_request: TransactionRequest = Field(..., alias="transactionRequest")
    params: RouteParams

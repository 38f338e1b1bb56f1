"""
Squid SDK

Client-side orchestrator for executing Squid cross-chain routes: balance and
allowance validation, ERC-20 approval management, and execution transaction
construction on EVM chains.
"""

from .sdk import Squid
from .adapters import (
    EVMRouteExecutor,
    MetadataRegistry,
    NativeAsset,
    FungibleAsset,
    ApprovalOutcome,
    ApprovalResult,
    TransactionHandle,
    RouteApprovalStatus,
    ExecutionIntent,
    GasFeeEstimator,
    AxelarGasFeeEstimator,
    classify_asset,
)
from .clients import SquidApiClient
from .engine.exceptions import (
    SquidError,
    InitializationError,
    ConfigurationError,
    ValidationError,
    InsufficientFundsError,
    InsufficientAllowanceError,
    TransactionFailure,
)
from .schemas import (
    ChainData,
    TokenData,
    Route,
    RouteRequest,
    SquidConfig,
    ExecutionSettings,
    ExecutionStrategy,
)

__all__ = [
    "Squid",
    "EVMRouteExecutor",
    "MetadataRegistry",
    "NativeAsset",
    "FungibleAsset",
    "ApprovalOutcome",
    "ApprovalResult",
    "TransactionHandle",
    "RouteApprovalStatus",
    "ExecutionIntent",
    "GasFeeEstimator",
    "AxelarGasFeeEstimator",
    "classify_asset",
    "SquidApiClient",
    "SquidError",
    "InitializationError",
    "ConfigurationError",
    "ValidationError",
    "InsufficientFundsError",
    "InsufficientAllowanceError",
    "TransactionFailure",
    "ChainData",
    "TokenData",
    "Route",
    "RouteRequest",
    "SquidConfig",
    "ExecutionSettings",
    "ExecutionStrategy",
]

from .evm import (
    EVMRouteExecutor,
    NativeAsset,
    FungibleAsset,
    ApprovalOutcome,
    ApprovalResult,
    TransactionHandle,
    RouteApprovalStatus,
    ExecutionIntent,
    GasFeeEstimator,
    AxelarGasFeeEstimator,
)
from .registry import MetadataRegistry
from .unions import AssetTypes, classify_asset, is_native_token

__all__ = [
    "EVMRouteExecutor",
    "NativeAsset",
    "FungibleAsset",
    "ApprovalOutcome",
    "ApprovalResult",
    "TransactionHandle",
    "RouteApprovalStatus",
    "ExecutionIntent",
    "GasFeeEstimator",
    "AxelarGasFeeEstimator",
    "MetadataRegistry",
    "AssetTypes",
    "classify_asset",
    "is_native_token",
]

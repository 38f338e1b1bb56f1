from .bases import CanonicalModel, TransactionStatus, BaseTransactionResult
from .routes import (
    NativeCurrency,
    SquidContracts,
    ChainData,
    TokenData,
    RouteRequest,
    TransactionRequest,
    RouteParams,
    Route,
)
from .configs import ExecutionStrategy, ExecutionSettings, SquidConfig

__all__ = [
    "CanonicalModel",
    "TransactionStatus",
    "BaseTransactionResult",
    "NativeCurrency",
    "SquidContracts",
    "ChainData",
    "TokenData",
    "RouteRequest",
    "TransactionRequest",
    "RouteParams",
    "Route",
    "ExecutionStrategy",
    "ExecutionSettings",
    "SquidConfig",
]

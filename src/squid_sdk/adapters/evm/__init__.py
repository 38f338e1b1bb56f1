from .adapter import EVMRouteExecutor
from .schemas import (
    NativeAsset,
    FungibleAsset,
    SufficiencyReport,
    ApprovalOutcome,
    ApprovalResult,
    TransactionHandle,
    RouteApprovalStatus,
    ExecutionIntent,
)
from .approvals import resolve_approval_amount, ensure_approved
from .verifies import (
    query_native_balance,
    query_erc20_balance,
    query_erc20_allowance,
    check_sufficiency,
)
from .signatures import fill_transaction_fields, send_transaction, approve_erc20
from .fees import GasFeeEstimator, AxelarGasFeeEstimator, estimate_fee_or_fallback

__all__ = [
    "EVMRouteExecutor",
    "NativeAsset",
    "FungibleAsset",
    "SufficiencyReport",
    "ApprovalOutcome",
    "ApprovalResult",
    "TransactionHandle",
    "RouteApprovalStatus",
    "ExecutionIntent",
    "resolve_approval_amount",
    "ensure_approved",
    "query_native_balance",
    "query_erc20_balance",
    "query_erc20_allowance",
    "check_sufficiency",
    "fill_transaction_fields",
    "send_transaction",
    "approve_erc20",
    "GasFeeEstimator",
    "AxelarGasFeeEstimator",
    "estimate_fee_or_fallback",
]

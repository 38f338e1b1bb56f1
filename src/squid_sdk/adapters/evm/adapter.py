"""
EVM Route Executor

Validates, approves and executes previously quoted Squid routes on EVM chains.

Key Features:
    - Source asset classification (native currency vs ERC-20 token)
    - Balance and allowance validation before anything is sent
    - Approval lifecycle with the three-tier infinite-approval policy
    - Execution transaction construction under two named strategies
      (``route_value`` and ``fee_estimating``)

Dependencies:
    - web3.py: For blockchain RPC interaction
    - eth_account: Signing capability supplied by the caller
"""

from typing import Callable, Optional, Tuple, Union

from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3

from .approvals import ensure_approved
from .constants import SEND_ROUTE_TYPE
from .fees import GasFeeEstimator, estimate_fee_or_fallback
from .schemas import (
    ApprovalOutcome,
    ApprovalResult,
    ExecutionIntent,
    FungibleAsset,
    NativeAsset,
    RouteApprovalStatus,
    TransactionHandle,
)
from .signatures import fill_transaction_fields, send_transaction
from .verifies import check_sufficiency
from ..registry import MetadataRegistry
from ..unions import classify_asset
from ...schemas.bases import TransactionStatus
from ...schemas.configs import ExecutionSettings, ExecutionStrategy
from ...schemas.routes import ChainData, Route
from ...logger import get_logger

logger = get_logger(__name__)

Web3Factory = Callable[[ChainData], AsyncWeb3]


class EVMRouteExecutor:
    """
    Route validation, approval and execution on EVM chains.

    Each public method is one sequential pipeline of awaited steps; the only
    shared state is the read-only registry and the settings captured at
    construction.

    Attributes:
        registry: Loaded chain/token metadata
        strategy: Execution value strategy
        execution_settings: Instance-level execution settings

    Example:
        executor = EVMRouteExecutor(registry, web3_factory)
        status = await executor.is_route_approved(route, account.address)
        handle = await executor.execute(route, account)
    """

    def __init__(
        self,
        registry: MetadataRegistry,
        web3_factory: Web3Factory,
        fee_estimator: Optional[GasFeeEstimator] = None,
        strategy: ExecutionStrategy = ExecutionStrategy.ROUTE_VALUE,
        execution_settings: Optional[ExecutionSettings] = None,
        approval_timeout: float = 120,
    ):
        if strategy == ExecutionStrategy.FEE_ESTIMATING and fee_estimator is None:
            raise ValueError("fee_estimating strategy requires a fee_estimator")
        self.registry = registry
        self.strategy = ExecutionStrategy(strategy)
        self.execution_settings = execution_settings or ExecutionSettings()
        self._web3_factory = web3_factory
        self._fee_estimator = fee_estimator
        self._approval_timeout = approval_timeout

    def _get_web3_instance(self, chain: ChainData) -> AsyncWeb3:
        return self._web3_factory(chain)

    def _resolve_chains(self, route: Route) -> Tuple[ChainData, ChainData]:
        params = route.params
        source_chain = self.registry.require_chain(params.source_chain_id, role="sourceChain")
        destination_chain = self.registry.require_chain(params.destination_chain_id, role="destinationChain")
        return source_chain, destination_chain

    @staticmethod
    def _execution_target(route: Route, source_chain: ChainData) -> str:
        # The contract the execution transaction calls is also the one approved to spend
        return route.transaction_request.target_address or source_chain.execution_contract

    # =========================================================================
    # Execution
    # =========================================================================

    async def execute(
        self,
        route: Route,
        signer: LocalAccount,
        execution_settings: Optional[ExecutionSettings] = None,
    ) -> TransactionHandle:
        """
        Validate, approve if needed, then sign and broadcast the route.

        Steps:
            1. Resolve source and destination chains
            2. Classify the source asset
            3. Tokens: check the signer's balance covers ``sourceAmount``
            4. Tokens: approve the route's target contract, waiting for confirmation
            5. Build the execution intent for the configured strategy
            6. Sign and broadcast; confirmation is left to the caller

        Args:
            route: Route returned by ``get_route``
            signer: Signing capability of the source account
            execution_settings: Per-call settings (``infinite_approval`` override)

        Returns:
            TransactionHandle: Hash of the broadcast transaction.

        Raises:
            ValidationError: Unknown source or destination chain.
            InsufficientFundsError: Token balance below ``sourceAmount``.
            TransactionFailure: Approval or execution transaction failed.
        """
        source_chain, destination_chain = self._resolve_chains(route)
        asset = classify_asset(route.params.source_token_address, source_chain)
        w3 = self._get_web3_instance(source_chain)
        spender = self._execution_target(route, source_chain)

        if isinstance(asset, FungibleAsset):
            await check_sufficiency(
                w3, asset, signer.address, route.params.source_amount, check_allowance=False
            )
            per_call = execution_settings.infinite_approval if execution_settings else None
            await ensure_approved(
                w3,
                asset,
                signer,
                spender,
                route.params.source_amount,
                per_call=per_call,
                instance=self.execution_settings.infinite_approval,
                timeout=self._approval_timeout,
            )

        intent = await self.build_execution_intent(route, source_chain, destination_chain, asset)
        tx = intent.to_transaction(signer.address)
        await fill_transaction_fields(w3, signer.address, tx)
        tx_hash = await send_transaction(w3, signer, tx, stage="execution")
        logger.info(
            "Route execution transaction %s sent on chain %s (%s -> %s)",
            tx_hash, source_chain.chain_id, source_chain.chain_name, destination_chain.chain_name,
        )
        return TransactionHandle(
            status=TransactionStatus.PENDING,
            tx_hash=tx_hash,
            chain_id=source_chain.chain_id,
            intent=intent,
            message="Transaction broadcast, awaiting confirmation",
        )

    async def build_execution_intent(
        self,
        route: Route,
        source_chain: ChainData,
        destination_chain: ChainData,
        asset: Union[NativeAsset, FungibleAsset],
    ) -> ExecutionIntent:
        """
        Build the execution intent for the configured strategy.

        ``route_value``: value is the route's declared value, except for
        ``SEND`` routes where it is absent.

        ``fee_estimating``: value is the destination gas fee (oracle or
        fallback), plus ``sourceAmount`` when the source asset is native.
        """
        request = route.transaction_request

        if self.strategy == ExecutionStrategy.FEE_ESTIMATING:
            fee = await estimate_fee_or_fallback(
                self._fee_estimator, source_chain, destination_chain, request.destination_chain_gas
            )
            if isinstance(asset, NativeAsset):
                value = route.params.source_amount + fee
            else:
                value = fee
        elif request.route_type == SEND_ROUTE_TYPE:
            value = None
        else:
            value = request.value

        return ExecutionIntent(
            to=self._execution_target(route, source_chain),
            data=request.data,
            gas_limit=request.gas_limit,
            value=value,
            chain_id=source_chain.chain_id,
            gas_price=request.gas_price,
            max_fee_per_gas=request.max_fee_per_gas,
            max_priority_fee_per_gas=request.max_priority_fee_per_gas,
        )

    # =========================================================================
    # Approval
    # =========================================================================

    async def is_route_approved(self, route: Route, sender: str) -> RouteApprovalStatus:
        """
        Read-only check that ``sender`` can execute ``route`` right now.

        Never sends a transaction.

        Raises:
            ValidationError: Unknown chain.
            InsufficientFundsError: Balance below ``sourceAmount``.
            InsufficientAllowanceError: Token allowance below ``sourceAmount``.
        """
        source_chain, _ = self._resolve_chains(route)
        asset = classify_asset(route.params.source_token_address, source_chain)
        w3 = self._get_web3_instance(source_chain)

        await check_sufficiency(
            w3,
            asset,
            sender,
            route.params.source_amount,
            spender=self._execution_target(route, source_chain),
        )
        if isinstance(asset, NativeAsset):
            message = f"Balance of {asset.symbol} covers the route amount"
        else:
            message = "Balance and allowance cover the route amount"
        return RouteApprovalStatus(is_approved=True, message=message)

    async def approve_route(
        self,
        route: Route,
        signer: LocalAccount,
        execution_settings: Optional[ExecutionSettings] = None,
    ) -> ApprovalResult:
        """
        Approve the route's target contract (``squidMain`` when the route
        names none) for the route's source token.

        Native source assets need no approval and return immediately.
        """
        source_chain, _ = self._resolve_chains(route)
        asset = classify_asset(route.params.source_token_address, source_chain)
        spender = self._execution_target(route, source_chain)

        if isinstance(asset, NativeAsset):
            return ApprovalResult(
                status=TransactionStatus.SKIPPED,
                outcome=ApprovalOutcome.ALREADY_SUFFICIENT,
                chain_id=source_chain.chain_id,
                spender=spender,
                message="Native assets do not need approval",
            )

        per_call = execution_settings.infinite_approval if execution_settings else None
        return await ensure_approved(
            self._get_web3_instance(source_chain),
            asset,
            signer,
            spender,
            route.params.source_amount,
            per_call=per_call,
            instance=self.execution_settings.infinite_approval,
            timeout=self._approval_timeout,
        )

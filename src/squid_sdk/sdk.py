"""
Squid SDK Facade

Main entry point of the SDK. ``Squid`` owns the configuration, the chain/token
registry and the route executor, and exposes the public operations:

    init, set_config, get_route, execute_route,
    is_route_approved, approve_route, allowance, approve

Every operation except ``init`` and ``set_config`` raises
:class:`InitializationError` until ``init`` has completed.

Architecture:
    Squid (you are here)
        ├── SquidApiClient   (GET /api/sdk-info, GET /api/route)
        ├── MetadataRegistry (chains / tokens, loaded once by init)
        └── EVMRouteExecutor (validation, approval, execution)
"""

from typing import Any, Callable, Dict, Optional, Union

import httpx
from eth_account.signers.local import LocalAccount
from eth_utils import is_address
from pydantic import ValidationError as PydanticValidationError
from web3 import AsyncWeb3

from .adapters.evm.adapter import EVMRouteExecutor
from .adapters.evm.constants import MAX_UINT256
from .adapters.evm.fees import AxelarGasFeeEstimator, GasFeeEstimator
from .adapters.evm.schemas import (
    ApprovalOutcome,
    ApprovalResult,
    RouteApprovalStatus,
    TransactionHandle,
)
from .adapters.evm.signatures import approve_erc20
from .adapters.evm.verifies import query_erc20_allowance
from .adapters.registry import MetadataRegistry
from .adapters.unions import is_native_token
from .clients.http_client import SquidApiClient
from .engine.exceptions import ConfigurationError, InitializationError, ValidationError
from .schemas.bases import TransactionStatus
from .schemas.configs import ExecutionSettings, ExecutionStrategy, SquidConfig
from .schemas.routes import ChainData, Route, RouteRequest
from .logger import get_logger, init_logging

logger = get_logger(__name__)

RouteLike = Union[Route, Dict[str, Any]]
SettingsLike = Union[ExecutionSettings, Dict[str, Any], None]


class Squid:
    """
    Client-side orchestrator for executing Squid cross-chain routes.

    Usage:
        ```python
        squid = Squid({"baseUrl": "https://testnet.api.0xsquid.com"})
        await squid.init()
        route = await squid.get_route({...})
        handle = await squid.execute_route(route, Account.from_key(pk))
        ```

    Concurrent calls on one instance are independent; they share only the
    registry and the configuration, neither of which they mutate.
    """

    def __init__(
        self,
        config: Union[SquidConfig, Dict[str, Any], None] = None,
        web3_factory: Optional[Callable[[ChainData], AsyncWeb3]] = None,
        fee_estimator: Optional[GasFeeEstimator] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Args:
            config: SquidConfig or a dict accepted by it (camelCase or snake_case)
            web3_factory: Builds an AsyncWeb3 for a chain; defaults to an
                HTTP provider on the chain's RPC endpoint
            fee_estimator: Gas fee oracle for the fee_estimating strategy;
                defaults to Axelar for the configured environment
            transport: Optional httpx transport for the API client
        """
        self.registry = MetadataRegistry()
        self._web3_factory = web3_factory or self._default_web3_factory
        self._custom_fee_estimator = fee_estimator
        self._transport = transport
        self.set_config(config)

    # =========================================================================
    # Configuration and initialization
    # =========================================================================

    def set_config(self, config: Union[SquidConfig, Dict[str, Any], None]) -> None:
        """
        Replace the configuration.

        This is an administrative operation: do not call it while other
        operations on this instance are in flight.

        Raises:
            ConfigurationError: Invalid configuration values.
        """
        try:
            if config is None:
                config = SquidConfig()
            elif not isinstance(config, SquidConfig):
                config = SquidConfig.model_validate(config)
        except PydanticValidationError as e:
            raise ConfigurationError(f"Invalid Squid configuration: {e}") from e

        self.config = config
        if config.logging:
            init_logging(config.log_level)

        fee_estimator = self._custom_fee_estimator
        if fee_estimator is None and config.execution_strategy == ExecutionStrategy.FEE_ESTIMATING:
            fee_estimator = AxelarGasFeeEstimator(
                environment=config.environment,
                timeout=config.request_timeout,
            )

        self._executor = EVMRouteExecutor(
            registry=self.registry,
            web3_factory=self._web3_factory,
            fee_estimator=fee_estimator,
            strategy=config.execution_strategy,
            execution_settings=config.execution_settings,
            approval_timeout=config.approval_timeout,
        )

    @property
    def inited(self) -> bool:
        return self.registry.is_loaded

    @property
    def chains(self):
        return self.registry.chains

    @property
    def tokens(self):
        return self.registry.tokens

    async def init(self) -> None:
        """
        Load chain and token metadata from the Squid API.

        Raises:
            InitializationError: If the metadata cannot be fetched or parsed.
        """
        try:
            async with self._api_client() as client:
                info = await client.get_sdk_info()
            self.registry.load(chains=info["chains"], tokens=info["tokens"])
        except (httpx.HTTPError, KeyError, TypeError, ValueError) as e:
            raise InitializationError(f"Squid initialization failed: {e}") from e

        logger.info(
            "Squid initialized with %d chains and %d tokens from %s",
            len(self.registry.chains), len(self.registry.tokens), self.config.base_url,
        )

    def _validate_init(self) -> None:
        if not self.inited:
            raise InitializationError(
                "SquidSdk must be inited! Please call the Squid.init method"
            )

    def _api_client(self) -> SquidApiClient:
        return SquidApiClient(
            base_url=self.config.base_url,
            timeout=self.config.request_timeout,
            transport=self._transport,
        )

    def _default_web3_factory(self, chain: ChainData) -> AsyncWeb3:
        return AsyncWeb3(AsyncWeb3.AsyncHTTPProvider(
            chain.rpc,
            request_kwargs={"timeout": self.config.request_timeout},
        ))

    # =========================================================================
    # Routes
    # =========================================================================

    async def get_route(self, params: Union[RouteRequest, Dict[str, Any]]) -> Route:
        """
        Fetch a route quote from the Squid API.

        Raises:
            InitializationError: Before ``init``.
            ValidationError: Malformed query parameters.
            httpx.HTTPStatusError: The API rejected the request.
        """
        self._validate_init()
        if not isinstance(params, RouteRequest):
            try:
                params = RouteRequest.model_validate(params)
            except PydanticValidationError as e:
                raise ValidationError(f"Invalid route request: {e}") from e

        async with self._api_client() as client:
            route = await client.get_route(params)
        logger.info(
            "Route received for %s -> %s (amount %s)",
            params.source_chain_id, params.destination_chain_id, params.source_amount,
        )
        return route

    async def execute_route(
        self,
        route: RouteLike,
        signer: LocalAccount,
        execution_settings: SettingsLike = None,
    ) -> TransactionHandle:
        """
        Validate, approve if needed, and broadcast a route.

        See :meth:`EVMRouteExecutor.execute` for the step sequence and errors.
        """
        self._validate_init()
        return await self._executor.execute(
            self._coerce_route(route),
            signer,
            self._coerce_settings(execution_settings),
        )

    async def is_route_approved(self, route: RouteLike, sender: str) -> RouteApprovalStatus:
        """Read-only balance and allowance check for ``sender``."""
        self._validate_init()
        self._check_address(sender, "sender")
        return await self._executor.is_route_approved(self._coerce_route(route), sender)

    async def approve_route(
        self,
        route: RouteLike,
        signer: LocalAccount,
        execution_settings: SettingsLike = None,
    ) -> ApprovalResult:
        """Approve the route's source token for the execution contract."""
        self._validate_init()
        return await self._executor.approve_route(
            self._coerce_route(route),
            signer,
            self._coerce_settings(execution_settings),
        )

    # =========================================================================
    # Standalone allowance / approval
    # =========================================================================

    async def allowance(
        self,
        owner: str,
        spender: str,
        token_address: str,
        chain_id: Optional[int] = None,
    ) -> int:
        """
        Read the allowance ``owner`` granted ``spender`` for a known token.

        Raises:
            ValidationError: Unknown token or chain, invalid address, or the
                native currency (which has no allowance).
        """
        self._validate_init()
        self._check_address(owner, "owner")
        self._check_address(spender, "spender")
        token = self.registry.require_token(token_address, chain_id)
        chain = self.registry.require_chain(token.chain_id)
        if is_native_token(token.address):
            raise ValidationError(
                f"Native currency {chain.native_currency.symbol} has no allowance",
                key=token.address,
            )
        return await query_erc20_allowance(self._web3_factory(chain), token.address, owner, spender)

    async def approve(
        self,
        signer: LocalAccount,
        spender: str,
        token_address: str,
        amount: Optional[int] = None,
        chain_id: Optional[int] = None,
        wait: bool = False,
    ) -> ApprovalResult:
        """
        Approve ``spender`` for ``amount`` of a known token (default: unlimited).

        The native currency needs no approval: nothing is sent and a
        ``SKIPPED`` result is returned.

        Args:
            signer: Signing capability of the token owner
            spender: Contract to approve
            token_address: Token contract address
            amount: Base-unit amount; None approves ``2**256 - 1``
            chain_id: Disambiguates tokens deployed at the same address
            wait: Wait for one confirmation before returning

        Raises:
            ValidationError: Unknown token or chain, or invalid address.
            TransactionFailure: Broadcast failed, or (with ``wait``) the
                transaction reverted or timed out.
        """
        self._validate_init()
        self._check_address(spender, "spender")
        token = self.registry.require_token(token_address, chain_id)
        chain = self.registry.require_chain(token.chain_id)
        if is_native_token(token.address):
            return ApprovalResult(
                status=TransactionStatus.SKIPPED,
                outcome=ApprovalOutcome.ALREADY_SUFFICIENT,
                chain_id=chain.chain_id,
                spender=spender,
                message="Native assets do not need approval",
            )
        approve_amount = MAX_UINT256 if amount is None else int(amount)

        tx_hash, _ = await approve_erc20(
            w3=self._web3_factory(chain),
            token_addr=token.address,
            signer=signer,
            spender=spender,
            amount=approve_amount,
            wait=wait,
            timeout=self.config.approval_timeout,
        )
        return ApprovalResult(
            status=TransactionStatus.SUCCESS if wait else TransactionStatus.PENDING,
            outcome=ApprovalOutcome.APPROVED if wait else ApprovalOutcome.SUBMITTED,
            chain_id=chain.chain_id,
            tx_hash=tx_hash,
            spender=spender,
            amount=approve_amount,
            message="Approval transaction confirmed" if wait else "Approval transaction broadcast",
        )

    # =========================================================================
    # Utility Methods
    # =========================================================================

    @staticmethod
    def _check_address(address: str, role: str) -> None:
        if not isinstance(address, str) or not is_address(address):
            raise ValidationError(f"Invalid {role} address: {address!r}", key=address)

    @staticmethod
    def _coerce_route(route: RouteLike) -> Route:
        if not isinstance(route, Route):
            try:
                route = Route.model_validate(route)
            except PydanticValidationError as e:
                raise ValidationError(f"Malformed route: {e}") from e
        if not is_address(route.params.source_token_address):
            raise ValidationError(
                f"Malformed route: invalid source token address {route.params.source_token_address!r}",
                key=route.params.source_token_address,
            )
        return route

    @staticmethod
    def _coerce_settings(settings: SettingsLike) -> Optional[ExecutionSettings]:
        if settings is None or isinstance(settings, ExecutionSettings):
            return settings
        return ExecutionSettings.model_validate(settings)

"""
Cross-Chain Gas Fee Estimation

The fee-estimating execution strategy attaches the destination-chain gas fee
to the execution transaction. The fee comes from an external oracle (Axelar's
``estimateGasFee``) on a best-effort basis: :func:`estimate_fee_or_fallback`
never raises and substitutes :data:`FALLBACK_GAS_FEE` when the oracle fails.
"""

from abc import ABC, abstractmethod
from typing import Any, Optional

import httpx

from .constants import AXELAR_GAS_FEE_URLS, FALLBACK_GAS_FEE
from ...engine.exceptions import ConfigurationError
from ...schemas.routes import ChainData
from ...logger import get_logger

logger = get_logger(__name__)


class GasFeeEstimator(ABC):
    """Interface of a cross-chain gas fee oracle."""

    @abstractmethod
    async def estimate_gas_fee(
        self,
        source_chain: ChainData,
        destination_chain: ChainData,
        gas_limit: int,
    ) -> int:
        """
        Estimate the fee, in the source chain's native currency (wei), to pay
        ``gas_limit`` gas on the destination chain.
        """
        pass


class AxelarGasFeeEstimator(GasFeeEstimator):
    """
    Gas fee oracle backed by the Axelarscan GMP API.

    Example:
        estimator = AxelarGasFeeEstimator(environment="testnet")
        fee = await estimator.estimate_gas_fee(src, dst, 250000)
    """

    def __init__(
        self,
        environment: str = "mainnet",
        timeout: float = 20,
        url: Optional[str] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        if url is None:
            url = AXELAR_GAS_FEE_URLS.get(environment)
        if not url:
            raise ConfigurationError(f"No gas fee oracle for environment {environment!r}")
        self._url = url
        self._timeout = timeout
        self._transport = transport

    async def estimate_gas_fee(
        self,
        source_chain: ChainData,
        destination_chain: ChainData,
        gas_limit: int,
    ) -> int:
        payload = {
            "sourceChain": self._axelar_chain(source_chain),
            "destinationChain": self._axelar_chain(destination_chain),
            "gasLimit": int(gas_limit),
            "sourceTokenSymbol": source_chain.native_currency.symbol,
        }
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            response = await client.post(self._url, json=payload)
            response.raise_for_status()
            return self._parse_fee(response.json())

    @staticmethod
    def _axelar_chain(chain: ChainData) -> str:
        # Axelar chain ids are the lower-case chain names (e.g. "ethereum", "avalanche")
        return chain.chain_name.strip().lower()

    @staticmethod
    def _parse_fee(body: Any) -> int:
        # The endpoint answers with the bare fee, or wraps it as {"result": fee}
        if isinstance(body, dict):
            body = body.get("result")
        if isinstance(body, bool) or body is None:
            raise ValueError(f"Unexpected gas fee response: {body!r}")
        fee = int(str(body))
        if fee < 0:
            raise ValueError(f"Negative gas fee: {fee}")
        return fee


async def estimate_fee_or_fallback(
    estimator: GasFeeEstimator,
    source_chain: ChainData,
    destination_chain: ChainData,
    gas_limit: int,
) -> int:
    """
    Query the oracle, substituting the fixed fallback fee on any failure.

    Returns:
        int: Estimated fee in wei, or ``FALLBACK_GAS_FEE``.
    """
    try:
        return await estimator.estimate_gas_fee(source_chain, destination_chain, gas_limit)
    except Exception as e:
        logger.warning(
            "Gas fee estimation failed (%s -> %s): %s; using fallback fee %s",
            source_chain.chain_name, destination_chain.chain_name, e, FALLBACK_GAS_FEE,
        )
        return FALLBACK_GAS_FEE

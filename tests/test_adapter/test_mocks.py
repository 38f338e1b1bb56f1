"""
Route Executor Test Mocks Module

Provides mock data and utilities for testing route validation, approval and
execution without blockchain or network connectivity.

Key Components:
    - Mock addresses, private keys, chain and token metadata
    - Route factories for native and token source assets
    - Mock AsyncWeb3 instance with simulated RPC responses
    - Mock ERC20 contracts with mutable balance / allowance
    - Mock signer recording every transaction it signs

Usage:
    from test_mocks import (
        create_mock_route,
        create_mock_registry,
        MockWeb3Provider,
        MockSigner,
    )

    web3_mock = MockWeb3Provider(mock_token_balance=100, mock_allowance=0)
    route = create_mock_route(source_amount=100)
"""

from types import SimpleNamespace
from typing import Any, Dict, List, Optional, Tuple
from unittest.mock import AsyncMock, Mock

from eth_account import Account
from web3 import AsyncWeb3
from web3.exceptions import TimeExhausted

from squid_sdk.adapters.registry import MetadataRegistry
from squid_sdk.adapters.evm.constants import NATIVE_TOKEN_ADDRESS
from squid_sdk.schemas.routes import Route


# ========================================================================
# Mock Blockchain Constants
# ========================================================================

# Test private key (do not use in production!)
MOCK_OWNER_PRIVATE_KEY = "0x1234567890123456789012345678901234567890123456789012345678901234"
MOCK_OWNER_ADDRESS = AsyncWeb3.to_checksum_address(Account.from_key(MOCK_OWNER_PRIVATE_KEY).address)

MOCK_SQUID_MAIN = AsyncWeb3.to_checksum_address("0xce16f69375520ab01377ce7b88f5ba8c48f8d666")
MOCK_OTHER_SPENDER = AsyncWeb3.to_checksum_address("0x1234567890123456789012345678901234567890")
MOCK_ROUTE_TARGET = AsyncWeb3.to_checksum_address("0x4f4495243837681061c4743b74b3eedf548d56a5")

# Token contract addresses
MOCK_USDC_ETHEREUM = "0xA0b86991c6218b36c1d19D4a2e9Eb0cE3606eB48"
MOCK_USDC_AVALANCHE = "0xB97EF9Ef8734C71904D8002F8b6Bc66Dd9c48a6E"

# Chain IDs
MOCK_CHAIN_ID_ETHEREUM = 1
MOCK_CHAIN_ID_AVALANCHE = 43114
MOCK_CHAIN_ID_UNKNOWN = 999999

# Transaction and block data
MOCK_GAS_PRICE = 20000000000  # 20 Gwei
MOCK_BASE_FEE = 10000000000
MOCK_PRIORITY_FEE = 1000000000
MOCK_GAS_LIMIT = 100000
MOCK_ROUTE_GAS_LIMIT = 400000
MOCK_DESTINATION_GAS = 250000
MOCK_TX_HASH = "0xabcdef1234567890abcdef1234567890abcdef1234567890abcdef1234567890"
MOCK_CALL_DATA = "0x846a1bc6" + "00" * 64

# Amounts (base units)
MOCK_ROUTE_VALUE = 5000000000000000
MOCK_NATIVE_BALANCE = 10**18  # 1 ETH


# ========================================================================
# Mock Metadata
# ========================================================================

def create_mock_chain_payload(
    chain_id: int = MOCK_CHAIN_ID_ETHEREUM,
    chain_name: str = "Ethereum",
    symbol: str = "ETH",
    squid_main: str = MOCK_SQUID_MAIN,
) -> Dict[str, Any]:
    """Chain entry as served by ``GET /api/sdk-info``."""
    return {
        "chainId": chain_id,
        "chainName": chain_name,
        "chainType": "evm",
        "rpc": f"https://rpc.example.org/{chain_id}",
        "nativeCurrency": {"name": chain_name, "symbol": symbol, "decimals": 18},
        "squidContracts": {"squidMain": squid_main, "defaultCrosschainToken": MOCK_USDC_ETHEREUM},
    }


def create_mock_token_payload(
    address: str = MOCK_USDC_ETHEREUM,
    chain_id: int = MOCK_CHAIN_ID_ETHEREUM,
    symbol: str = "USDC",
    decimals: int = 6,
) -> Dict[str, Any]:
    """Token entry as served by ``GET /api/sdk-info``."""
    return {
        "chainId": chain_id,
        "address": address,
        "name": symbol,
        "symbol": symbol,
        "decimals": decimals,
        "logoURI": "https://example.org/logo.png",
    }


def create_mock_sdk_info() -> Dict[str, Any]:
    return {
        "chains": [
            create_mock_chain_payload(),
            create_mock_chain_payload(MOCK_CHAIN_ID_AVALANCHE, "Avalanche", "AVAX"),
        ],
        "tokens": [
            create_mock_token_payload(),
            create_mock_token_payload(MOCK_USDC_AVALANCHE, MOCK_CHAIN_ID_AVALANCHE),
            create_mock_token_payload(NATIVE_TOKEN_ADDRESS, MOCK_CHAIN_ID_ETHEREUM, "ETH", 18),
        ],
    }


def create_mock_registry() -> MetadataRegistry:
    """Registry loaded with Ethereum and Avalanche fixtures."""
    registry = MetadataRegistry()
    info = create_mock_sdk_info()
    registry.load(chains=info["chains"], tokens=info["tokens"])
    return registry


def create_mock_route_payload(
    source_token: str = MOCK_USDC_ETHEREUM,
    source_amount: int = 100,
    route_type: str = "CALL_BRIDGE_CALL",
    value: int = MOCK_ROUTE_VALUE,
    gas_limit: Optional[int] = MOCK_ROUTE_GAS_LIMIT,
    source_chain_id: int = MOCK_CHAIN_ID_ETHEREUM,
    destination_chain_id: int = MOCK_CHAIN_ID_AVALANCHE,
    target_address: Optional[str] = MOCK_ROUTE_TARGET,
) -> Dict[str, Any]:
    """Route as returned by ``GET /api/route`` (amounts as strings, like the API)."""
    transaction_request = {
        "routeType": route_type,
        "targetAddress": target_address,
        "data": MOCK_CALL_DATA,
        "value": str(value),
        "gasPrice": str(MOCK_GAS_PRICE),
        "destinationChainGas": str(MOCK_DESTINATION_GAS),
    }
    if gas_limit is not None:
        transaction_request["gasLimit"] = str(gas_limit)
    return {
        "estimate": {"toAmount": "99", "route": {}},
        "transactionRequest": transaction_request,
        "params": {
            "sourceChainId": source_chain_id,
            "destinationChainId": destination_chain_id,
            "sourceTokenAddress": source_token,
            "destinationTokenAddress": MOCK_USDC_AVALANCHE,
            "sourceAmount": str(source_amount),
            "recipientAddress": MOCK_OWNER_ADDRESS,
            "slippage": 1,
        },
    }


def create_mock_route(**kwargs) -> Route:
    return Route.model_validate(create_mock_route_payload(**kwargs))


def create_native_route(**kwargs) -> Route:
    kwargs.setdefault("source_token", NATIVE_TOKEN_ADDRESS)
    kwargs.setdefault("source_amount", 10**17)
    return create_mock_route(**kwargs)


# ========================================================================
# Mock Web3 Provider Classes
# ========================================================================

async def _resolved(value):
    return value


class MockContract:
    """
    Mock ERC20 contract for simulating token interactions.

    Balance and allowance are plain attributes read at call time, so tests can
    change them between calls. ``mock_allowances`` overrides the allowance for
    individual spenders. Every ``approve`` built is recorded in ``approvals``
    as ``(spender, amount)``.
    """

    def __init__(
        self,
        address: str,
        mock_balance: int = 0,
        mock_allowance: int = 0,
    ):
        self.address = address
        self.mock_balance = mock_balance
        self.mock_allowance = mock_allowance
        self.mock_allowances: Dict[str, int] = {}
        self.approvals: List[Tuple[str, int]] = []
        self.functions = self._create_functions_mock()

    def _create_functions_mock(self) -> Mock:
        """Create mock functions object with contract methods."""
        functions = Mock()

        def balance_of(account):
            call = Mock()
            call.call = AsyncMock(side_effect=lambda *args: self.mock_balance)
            return call
        functions.balanceOf = Mock(side_effect=balance_of)

        def allowance(owner, spender):
            call = Mock()
            call.call = AsyncMock(
                side_effect=lambda *args: self.mock_allowances.get(spender, self.mock_allowance)
            )
            return call
        functions.allowance = Mock(side_effect=allowance)

        def approve(spender, amount):
            self.approvals.append((spender, amount))

            async def build_transaction(tx_params):
                return {
                    **tx_params,
                    "to": self.address,
                    "data": "0x095ea7b3" + "00" * 64,
                    "value": 0,
                }

            call = Mock()
            call.estimate_gas = AsyncMock(return_value=MOCK_GAS_LIMIT)
            call.build_transaction = AsyncMock(side_effect=build_transaction)
            return call
        functions.approve = Mock(side_effect=approve)

        return functions


class MockEth:
    """Mock ``AsyncWeb3.eth`` namespace."""

    def __init__(self, provider: "MockWeb3Provider"):
        self._provider = provider

        self.get_balance = AsyncMock(side_effect=lambda *args: provider.mock_native_balance)
        self.get_transaction_count = AsyncMock(return_value=provider.mock_tx_count)
        self.estimate_gas = AsyncMock(return_value=MOCK_GAS_LIMIT)
        self.fee_history = AsyncMock(return_value={
            "baseFeePerGas": [MOCK_BASE_FEE, MOCK_BASE_FEE],
            "reward": [[MOCK_PRIORITY_FEE]],
        })
        self.send_raw_transaction = AsyncMock(return_value=bytes.fromhex(MOCK_TX_HASH[2:]))

        async def wait_for_receipt(tx_hash, timeout=120, poll_latency=0.1):
            if provider.mock_receipt_timeout:
                raise TimeExhausted(f"Transaction {tx_hash} is not in the chain after {timeout} seconds")
            return {
                "transactionHash": tx_hash,
                "blockNumber": 12345678,
                "status": provider.mock_receipt_status,
                "gasUsed": 46000,
            }
        self.wait_for_transaction_receipt = AsyncMock(side_effect=wait_for_receipt)

        self.contract = Mock(side_effect=lambda address, abi: provider.get_contract(address))

    @property
    def chain_id(self):
        return _resolved(self._provider.mock_chain_id)

    @property
    def gas_price(self):
        return _resolved(MOCK_GAS_PRICE)


class MockWeb3Provider:
    """
    Mock AsyncWeb3 for simulating RPC interactions on one chain.

    Attributes:
        mock_native_balance: Value returned by eth.get_balance
        mock_token_balance / mock_allowance: Initial values for every token contract
        mock_receipt_status: Receipt status (1 success, 0 reverted)
        mock_receipt_timeout: Make wait_for_transaction_receipt raise TimeExhausted
        contracts: Mock contracts by checksum address
    """

    def __init__(
        self,
        mock_native_balance: int = MOCK_NATIVE_BALANCE,
        mock_token_balance: int = 1000,
        mock_allowance: int = 0,
        mock_chain_id: int = MOCK_CHAIN_ID_ETHEREUM,
        mock_tx_count: int = 0,
        mock_receipt_status: int = 1,
        mock_receipt_timeout: bool = False,
    ):
        self.mock_native_balance = mock_native_balance
        self.mock_token_balance = mock_token_balance
        self.mock_allowance = mock_allowance
        self.mock_chain_id = mock_chain_id
        self.mock_tx_count = mock_tx_count
        self.mock_receipt_status = mock_receipt_status
        self.mock_receipt_timeout = mock_receipt_timeout
        self.contracts: Dict[str, MockContract] = {}
        self.eth = MockEth(self)

    def get_contract(self, address: str) -> MockContract:
        address = AsyncWeb3.to_checksum_address(address)
        if address not in self.contracts:
            self.contracts[address] = MockContract(
                address,
                mock_balance=self.mock_token_balance,
                mock_allowance=self.mock_allowance,
            )
        return self.contracts[address]

    @property
    def approvals(self) -> List[Tuple[str, int]]:
        return [a for contract in self.contracts.values() for a in contract.approvals]

    @property
    def write_count(self) -> int:
        return self.eth.send_raw_transaction.await_count


class MockSigner:
    """
    Signing capability double: records every transaction dict it signs,
    or raises ``error`` when one is given.

    ``signed`` holds copies of the signed transactions in order.
    """

    def __init__(self, address: str = MOCK_OWNER_ADDRESS, error: Optional[Exception] = None):
        self.address = address
        self.error = error
        self.signed: List[Dict[str, Any]] = []

    def sign_transaction(self, tx: Dict[str, Any]):
        if self.error is not None:
            raise self.error
        self.signed.append(dict(tx))
        return SimpleNamespace(raw_transaction=b"\x02" + len(self.signed).to_bytes(4, "big"))


class StaticFeeEstimator:
    """Gas fee oracle double returning a fixed fee, or raising."""

    def __init__(self, fee: int = 42 * 10**14, error: Optional[Exception] = None):
        self.fee = fee
        self.error = error
        self.calls: List[Tuple[str, str, int]] = []

    async def estimate_gas_fee(self, source_chain, destination_chain, gas_limit):
        self.calls.append((source_chain.chain_name, destination_chain.chain_name, gas_limit))
        if self.error is not None:
            raise self.error
        return self.fee

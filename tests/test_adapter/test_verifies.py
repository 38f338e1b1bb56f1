"""
Balance and Allowance Validation Tests

Covers check_sufficiency for native and token assets: exact integer
comparisons, error payloads, and the read-only guarantee.

Usage:
    pytest tests/test_adapter/test_verifies.py -v
"""

import pytest
from web3.exceptions import Web3Exception

from test_mocks import (
    MOCK_OWNER_ADDRESS,
    MOCK_SQUID_MAIN,
    MOCK_USDC_ETHEREUM,
    MOCK_CHAIN_ID_ETHEREUM,
    MockWeb3Provider,
)

from squid_sdk.adapters.evm.schemas import NativeAsset, FungibleAsset
from squid_sdk.adapters.evm.verifies import (
    check_sufficiency,
    query_erc20_allowance,
    query_native_balance,
)
from squid_sdk.engine.exceptions import InsufficientFundsError, InsufficientAllowanceError


@pytest.fixture
def native_asset():
    return NativeAsset(chain_id=MOCK_CHAIN_ID_ETHEREUM, symbol="ETH")


@pytest.fixture
def token_asset():
    return FungibleAsset(chain_id=MOCK_CHAIN_ID_ETHEREUM, address=MOCK_USDC_ETHEREUM)


class TestNativeSufficiency:
    """Native assets: balance only."""

    @pytest.mark.asyncio
    async def test_balance_below_required_raises(self, native_asset):
        w3 = MockWeb3Provider(mock_native_balance=99)

        with pytest.raises(InsufficientFundsError) as exc_info:
            await check_sufficiency(w3, native_asset, MOCK_OWNER_ADDRESS, 100)

        assert exc_info.value.account == MOCK_OWNER_ADDRESS
        assert exc_info.value.chain_id == MOCK_CHAIN_ID_ETHEREUM
        assert exc_info.value.required == 100
        assert exc_info.value.available == 99
        assert w3.write_count == 0

    @pytest.mark.asyncio
    async def test_equal_balance_passes(self, native_asset):
        w3 = MockWeb3Provider(mock_native_balance=100)

        report = await check_sufficiency(w3, native_asset, MOCK_OWNER_ADDRESS, 100)

        assert report.balance == 100
        assert report.allowance is None

    @pytest.mark.asyncio
    async def test_allowance_never_read(self, native_asset):
        w3 = MockWeb3Provider(mock_native_balance=100)

        await check_sufficiency(w3, native_asset, MOCK_OWNER_ADDRESS, 1, spender=MOCK_SQUID_MAIN)

        w3.eth.contract.assert_not_called()

    @pytest.mark.asyncio
    async def test_large_amounts_compare_exactly(self, native_asset):
        # 2**200 and 2**200 - 1 are indistinguishable as floats
        w3 = MockWeb3Provider(mock_native_balance=2**200 - 1)

        with pytest.raises(InsufficientFundsError):
            await check_sufficiency(w3, native_asset, MOCK_OWNER_ADDRESS, 2**200)

    @pytest.mark.asyncio
    async def test_query_native_balance(self):
        w3 = MockWeb3Provider(mock_native_balance=12345)
        assert await query_native_balance(w3, MOCK_OWNER_ADDRESS) == 12345


class TestTokenSufficiency:
    """Fungible assets: balanceOf, then allowance."""

    @pytest.mark.asyncio
    async def test_balance_below_required_raises_before_allowance(self, token_asset):
        w3 = MockWeb3Provider(mock_token_balance=100, mock_allowance=0)

        with pytest.raises(InsufficientFundsError):
            await check_sufficiency(w3, token_asset, MOCK_OWNER_ADDRESS, 150, spender=MOCK_SQUID_MAIN)

        contract = w3.get_contract(MOCK_USDC_ETHEREUM)
        contract.functions.allowance.assert_not_called()
        assert w3.write_count == 0

    @pytest.mark.asyncio
    async def test_allowance_below_required_raises(self, token_asset):
        w3 = MockWeb3Provider(mock_token_balance=200, mock_allowance=50)

        with pytest.raises(InsufficientAllowanceError) as exc_info:
            await check_sufficiency(w3, token_asset, MOCK_OWNER_ADDRESS, 100, spender=MOCK_SQUID_MAIN)

        assert exc_info.value.spender == MOCK_SQUID_MAIN
        assert exc_info.value.chain_id == MOCK_CHAIN_ID_ETHEREUM
        assert exc_info.value.available == 50
        assert w3.write_count == 0

    @pytest.mark.asyncio
    async def test_balance_and_allowance_sufficient(self, token_asset):
        w3 = MockWeb3Provider(mock_token_balance=100, mock_allowance=100)

        report = await check_sufficiency(w3, token_asset, MOCK_OWNER_ADDRESS, 100, spender=MOCK_SQUID_MAIN)

        assert report.balance == 100
        assert report.allowance == 100

    @pytest.mark.asyncio
    async def test_balance_only_mode(self, token_asset):
        w3 = MockWeb3Provider(mock_token_balance=100, mock_allowance=0)

        report = await check_sufficiency(
            w3, token_asset, MOCK_OWNER_ADDRESS, 100, check_allowance=False
        )

        assert report.allowance is None

    @pytest.mark.asyncio
    async def test_allowance_check_requires_spender(self, token_asset):
        w3 = MockWeb3Provider(mock_token_balance=100)

        with pytest.raises(ValueError, match="spender"):
            await check_sufficiency(w3, token_asset, MOCK_OWNER_ADDRESS, 1)

    @pytest.mark.asyncio
    async def test_repeated_checks_are_idempotent(self, token_asset):
        w3 = MockWeb3Provider(mock_token_balance=100, mock_allowance=100)

        first = await check_sufficiency(w3, token_asset, MOCK_OWNER_ADDRESS, 10, spender=MOCK_SQUID_MAIN)
        second = await check_sufficiency(w3, token_asset, MOCK_OWNER_ADDRESS, 10, spender=MOCK_SQUID_MAIN)

        assert first.balance == second.balance
        assert first.allowance == second.allowance
        assert w3.write_count == 0


class TestAllowanceQuery:

    @pytest.mark.asyncio
    async def test_query_allowance(self):
        w3 = MockWeb3Provider(mock_allowance=777)
        allowance = await query_erc20_allowance(w3, MOCK_USDC_ETHEREUM, MOCK_OWNER_ADDRESS, MOCK_SQUID_MAIN)
        assert allowance == 777

    @pytest.mark.asyncio
    async def test_rpc_error_is_propagated_with_context(self):
        w3 = MockWeb3Provider()
        contract = w3.get_contract(MOCK_USDC_ETHEREUM)
        contract.functions.allowance.side_effect = Web3Exception("execution reverted")

        with pytest.raises(Web3Exception, match="Failed to query allowance"):
            await query_erc20_allowance(w3, MOCK_USDC_ETHEREUM, MOCK_OWNER_ADDRESS, MOCK_SQUID_MAIN)

    @pytest.mark.asyncio
    async def test_invalid_address_raises(self):
        w3 = MockWeb3Provider()
        with pytest.raises(ValueError):
            await query_erc20_allowance(w3, "not-an-address", MOCK_OWNER_ADDRESS, MOCK_SQUID_MAIN)

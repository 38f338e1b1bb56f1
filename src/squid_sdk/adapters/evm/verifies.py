"""
EVM Balance and Allowance Validation

Read-only checks run before a route is approved or executed. Nothing in this
module sends a transaction, so every function can be called repeatedly.

Exported helpers
----------------
query_native_balance
    ``eth_getBalance`` for an account.

query_erc20_balance / query_erc20_allowance
    ``balanceOf`` / ``allowance`` calls on a token contract.

check_sufficiency
    Compare balance (and allowance for tokens) with a required amount and
    raise the matching shortfall error.

All amounts are ``int`` in the asset's base unit; comparisons are exact.
"""

from typing import Optional, Union

from web3 import AsyncWeb3
from web3.exceptions import Web3Exception

from .ERC20_ABI import get_balance_abi, get_allowance_abi
from .schemas import NativeAsset, FungibleAsset, SufficiencyReport
from ...engine.exceptions import InsufficientFundsError, InsufficientAllowanceError
from ...logger import get_logger

logger = get_logger(__name__)


async def query_native_balance(w3: AsyncWeb3, account: str) -> int:
    """
    Retrieve the native-currency balance of an account.

    Args:
        w3: AsyncWeb3 instance connected to the asset's chain
        account: Account address

    Returns:
        int: Balance in wei.
    """
    balance = await w3.eth.get_balance(AsyncWeb3.to_checksum_address(account))
    return int(balance)


async def query_erc20_balance(w3: AsyncWeb3, token_addr: str, account: str) -> int:
    """
    Retrieve the token balance of an account via ``balanceOf``.

    Raises:
        Web3Exception: If the contract call fails or the node returns an error.
    """
    try:
        contract = w3.eth.contract(
            address=AsyncWeb3.to_checksum_address(token_addr),
            abi=get_balance_abi(),
        )
        balance = await contract.functions.balanceOf(AsyncWeb3.to_checksum_address(account)).call()
        return int(balance)
    except Web3Exception as e:
        raise Web3Exception(
            f"Failed to query balance for token {token_addr}. Account: {account}. Error: {e}"
        ) from e


async def query_erc20_allowance(w3: AsyncWeb3, token_addr: str, owner: str, spender: str) -> int:
    """
    Retrieves the amount of tokens that an owner allowed a spender to withdraw.

    This function calls the 'allowance(address,address)' constant method of an ERC20
    smart contract after checksum address conversion.

    Args:
        w3 (AsyncWeb3): The Web3 instance connected to the target blockchain.
        token_addr (str): The contract address of the ERC20 token.
        owner (str): The address of the token holder.
        spender (str): The address authorized to spend the tokens.

    Returns:
        int: The remaining allowance amount in the token's base units.

    Raises:
        ValueError: If any provided address is not a valid hex address.
        Web3Exception: If the contract call fails or the node returns an error.
    """
    checksum_token = AsyncWeb3.to_checksum_address(token_addr)
    checksum_owner = AsyncWeb3.to_checksum_address(owner)
    checksum_spender = AsyncWeb3.to_checksum_address(spender)

    try:
        contract = w3.eth.contract(address=checksum_token, abi=get_allowance_abi())
        allowance = await contract.functions.allowance(checksum_owner, checksum_spender).call()
        return int(allowance)
    except Web3Exception as e:
        raise Web3Exception(
            f"Failed to query allowance for token {token_addr}. "
            f"Owner: {owner}, Spender: {spender}. Error: {e}"
        ) from e


async def check_sufficiency(
    w3: AsyncWeb3,
    asset: Union[NativeAsset, FungibleAsset],
    account: str,
    required_amount: int,
    spender: Optional[str] = None,
    check_allowance: bool = True,
) -> SufficiencyReport:
    """
    Check that ``account`` can spend ``required_amount`` of ``asset``.

    Native assets: only the native balance is checked.
    Fungible assets: ``balanceOf`` is checked first, then (when
    ``check_allowance`` is set) ``allowance(account, spender)``.

    Args:
        w3: AsyncWeb3 instance connected to the asset's chain
        asset: Classified source asset
        account: Account spending the asset
        required_amount: Amount required, in base units
        spender: Contract the allowance is checked for (fungible only)
        check_allowance: Set to False to check the balance only

    Returns:
        SufficiencyReport: Values read from chain.

    Raises:
        InsufficientFundsError: Balance below the required amount.
        InsufficientAllowanceError: Allowance below the required amount.
        ValueError: Allowance check requested without a spender.
    """
    required_amount = int(required_amount)

    if isinstance(asset, NativeAsset):
        balance = await query_native_balance(w3, account)
    else:
        balance = await query_erc20_balance(w3, asset.address, account)

    if balance < required_amount:
        raise InsufficientFundsError(
            account=account,
            chain_id=asset.chain_id,
            required=required_amount,
            available=balance,
        )

    allowance = None
    if isinstance(asset, FungibleAsset) and check_allowance:
        if not spender:
            raise ValueError("spender is required to check a token allowance")
        allowance = await query_erc20_allowance(w3, asset.address, account, spender)
        if allowance < required_amount:
            raise InsufficientAllowanceError(
                account=account,
                spender=spender,
                chain_id=asset.chain_id,
                required=required_amount,
                available=allowance,
            )

    logger.debug(
        "Sufficiency check passed for %s on chain %s (required=%s balance=%s allowance=%s)",
        account, asset.chain_id, required_amount, balance, allowance,
    )
    return SufficiencyReport(
        account=account,
        chain_id=asset.chain_id,
        required=required_amount,
        balance=balance,
        allowance=allowance,
    )

"""
EVM Transaction Building, Signing and Broadcast

Helpers shared by the approval and execution steps. Signing is done in-process
by the caller-supplied signing capability (an ``eth_account`` ``LocalAccount``
or anything exposing ``address`` and ``sign_transaction``).

Exported helpers
----------------
fill_transaction_fields
    Complete a transaction dict with chain id, nonce, gas and fee fields.

send_transaction
    Sign and broadcast a transaction; returns the hash without waiting.

approve_erc20
    Sign and broadcast ``approve(spender, amount)``, optionally waiting for
    one confirmation.
"""

from typing import Any, Dict, Optional, Tuple

from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3
from web3.exceptions import TimeExhausted, Web3Exception
from web3.types import TxReceipt

from .ERC20_ABI import get_approve_abi
from .constants import APPROVAL_GAS_FALLBACK, EXECUTION_GAS_FALLBACK, GAS_ESTIMATE_MULTIPLIER
from ...engine.exceptions import TransactionFailure
from ...logger import get_logger

logger = get_logger(__name__)

_FEE_FIELDS = ("gasPrice", "maxFeePerGas")


async def _apply_fee_fields(w3: AsyncWeb3, tx: Dict[str, Any]) -> None:
    """Set EIP-1559 fee fields, falling back to legacy ``gasPrice``."""
    if any(field in tx for field in _FEE_FIELDS):
        return
    try:
        fee_history = await w3.eth.fee_history(1, "latest", [25.0])
        base_fee = fee_history["baseFeePerGas"][-1]
        priority_fee = fee_history["reward"][0][0]

        # Max fee includes a buffer for base fee volatility (2x base + priority)
        tx["maxPriorityFeePerGas"] = priority_fee
        tx["maxFeePerGas"] = (base_fee * 2) + priority_fee
    except Exception:
        # Chains without EIP-1559 support
        tx["gasPrice"] = await w3.eth.gas_price


async def _base_params(w3: AsyncWeb3, sender: str, tx: Dict[str, Any]) -> None:
    if "chainId" not in tx:
        tx["chainId"] = await w3.eth.chain_id
    if "nonce" not in tx:
        tx["nonce"] = await w3.eth.get_transaction_count(sender)
    tx["from"] = sender


async def fill_transaction_fields(
    w3: AsyncWeb3,
    sender: str,
    tx: Dict[str, Any],
    gas_fallback: int = EXECUTION_GAS_FALLBACK,
) -> Dict[str, Any]:
    """
    Complete a transaction dict in place. Fields already present are kept.

    Args:
        w3: AsyncWeb3 instance for the target chain
        sender: Address of the signing account
        tx: Transaction dict (``to``, ``data`` and optionally ``value``, ``gas``...)
        gas_fallback: Gas limit used if estimation fails

    Returns:
        The same dict, for chaining.
    """
    await _base_params(w3, sender, tx)

    if "gas" not in tx:
        try:
            gas_estimate = await w3.eth.estimate_gas(dict(tx))
            tx["gas"] = int(gas_estimate * GAS_ESTIMATE_MULTIPLIER)
        except Exception:
            logger.debug("Gas estimation failed, using fallback gas limit %s", gas_fallback)
            tx["gas"] = gas_fallback

    await _apply_fee_fields(w3, tx)
    return tx


async def send_transaction(
    w3: AsyncWeb3,
    signer: LocalAccount,
    tx: Dict[str, Any],
    stage: str = "execution",
) -> str:
    """
    Sign and broadcast a complete transaction.

    Args:
        w3: AsyncWeb3 instance for the target chain
        signer: Signing capability
        tx: Complete transaction dict (see :func:`fill_transaction_fields`)
        stage: ``"approval"`` or ``"execution"``, reported on failure

    Returns:
        str: 0x-prefixed transaction hash.

    Raises:
        TransactionFailure: If the transaction cannot be signed or the node
            rejects it.
    """
    try:
        signed_tx = signer.sign_transaction(tx)
    except (TypeError, ValueError) as e:
        raise TransactionFailure(
            stage=stage,
            chain_id=tx.get("chainId", 0),
            reason=f"Failed to sign transaction: {e}",
        ) from e

    try:
        tx_hash = await w3.eth.send_raw_transaction(signed_tx.raw_transaction)
    except (Web3Exception, ValueError) as e:
        raise TransactionFailure(
            stage=stage,
            chain_id=tx.get("chainId", 0),
            reason=f"Failed to broadcast transaction: {e}",
        ) from e
    return AsyncWeb3.to_hex(tx_hash)


async def approve_erc20(
    w3: AsyncWeb3,
    token_addr: str,
    signer: LocalAccount,
    spender: str,
    amount: int,
    wait: bool = True,
    timeout: float = 120,
) -> Tuple[str, Optional[TxReceipt]]:
    """
    Asynchronously signs and broadcasts an ERC20 approve transaction.

    Args:
        w3: An instance of AsyncWeb3.
        token_addr: The contract address of the ERC20 token.
        signer: The signing capability of the token owner.
        spender: The address authorized to spend the tokens.
        amount: The raw amount (base units) to approve.
        wait: If True, waits for one confirmation before returning.
        timeout: Seconds to wait for the receipt.

    Returns:
        A tuple of (transaction_hash_hex, transaction_receipt).

    Raises:
        TransactionFailure: If the transaction cannot be broadcast, reverts,
            or is not mined within ``timeout``.
    """
    sender_addr = signer.address
    token_checksum = AsyncWeb3.to_checksum_address(token_addr)
    spender_checksum = AsyncWeb3.to_checksum_address(spender)
    contract = w3.eth.contract(address=token_checksum, abi=get_approve_abi())
    approve_fn = contract.functions.approve(spender_checksum, amount)

    tx_params: Dict[str, Any] = {}
    await _base_params(w3, sender_addr, tx_params)

    # Gas estimation with 10% buffer
    try:
        gas_estimate = await approve_fn.estimate_gas({"from": sender_addr})
        tx_params["gas"] = int(gas_estimate * GAS_ESTIMATE_MULTIPLIER)
    except Exception:
        tx_params["gas"] = APPROVAL_GAS_FALLBACK

    await _apply_fee_fields(w3, tx_params)

    transaction = await approve_fn.build_transaction(tx_params)
    tx_hex = await send_transaction(w3, signer, transaction, stage="approval")
    logger.info("Approval transaction %s sent (spender=%s amount=%s)", tx_hex, spender_checksum, amount)

    if not wait:
        return tx_hex, None

    chain_id = tx_params["chainId"]
    try:
        receipt = await w3.eth.wait_for_transaction_receipt(tx_hex, timeout=timeout)
    except TimeExhausted as e:
        raise TransactionFailure(
            stage="approval",
            chain_id=chain_id,
            reason=f"not confirmed within {timeout}s",
            tx_hash=tx_hex,
        ) from e
    except Web3Exception as e:
        raise TransactionFailure(
            stage="approval",
            chain_id=chain_id,
            reason=f"confirmation failed: {e}",
            tx_hash=tx_hex,
        ) from e

    if receipt["status"] != 1:
        raise TransactionFailure(
            stage="approval",
            chain_id=chain_id,
            reason="Transaction reverted on-chain",
            tx_hash=tx_hex,
        )
    return tx_hex, receipt

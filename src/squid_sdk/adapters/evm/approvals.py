"""
ERC20 Approval Policy

Decides how much allowance to request and issues the approval when the
current allowance does not cover a route.

Amount resolution (first explicit value wins):
    1. per-call ``infinite_approval``
    2. instance ``execution_settings.infinite_approval``
    3. default: infinite (``2**256 - 1``)

``True`` resolves to the infinite amount, ``False`` to the exact required amount.
"""

from typing import Optional, Union

from eth_account.signers.local import LocalAccount
from web3 import AsyncWeb3

from .constants import MAX_UINT256
from .schemas import ApprovalOutcome, ApprovalResult, FungibleAsset, NativeAsset
from .signatures import approve_erc20
from .verifies import query_erc20_allowance
from ...schemas.bases import TransactionStatus
from ...logger import get_logger

logger = get_logger(__name__)


def resolve_approval_amount(
    required_amount: int,
    per_call: Optional[bool] = None,
    instance: Optional[bool] = None,
) -> int:
    """
    Resolve the allowance amount to request.

    Args:
        required_amount: Amount the route spends, in base units
        per_call: Per-call infinite-approval override
        instance: Instance-level infinite-approval setting

    Returns:
        int: ``MAX_UINT256`` or ``required_amount``.
    """
    infinite = True
    if per_call is not None:
        infinite = per_call
    elif instance is not None:
        infinite = instance
    return MAX_UINT256 if infinite else int(required_amount)


async def ensure_approved(
    w3: AsyncWeb3,
    asset: Union[NativeAsset, FungibleAsset],
    signer: LocalAccount,
    spender: str,
    required_amount: int,
    per_call: Optional[bool] = None,
    instance: Optional[bool] = None,
    timeout: float = 120,
) -> ApprovalResult:
    """
    Make sure ``spender`` may move ``required_amount`` of ``asset`` for the signer.

    If the current allowance covers the amount nothing is sent. Otherwise one
    approval transaction is signed, broadcast and awaited (one confirmation)
    before returning.

    Args:
        w3: AsyncWeb3 instance for the asset's chain
        asset: Fungible source asset
        signer: Signing capability of the token owner
        spender: Contract to approve
        required_amount: Amount the route spends
        per_call: Per-call infinite-approval override
        instance: Instance-level infinite-approval setting
        timeout: Seconds to wait for the confirmation

    Returns:
        ApprovalResult: ``ALREADY_SUFFICIENT`` or ``APPROVED`` with the tx hash.

    Raises:
        TypeError: If called for a native asset.
        TransactionFailure: If the approval is not confirmed.
    """
    if not isinstance(asset, FungibleAsset):
        raise TypeError(f"Approval is not applicable to {type(asset).__name__}")

    required_amount = int(required_amount)
    allowance = await query_erc20_allowance(w3, asset.address, signer.address, spender)
    if allowance >= required_amount:
        return ApprovalResult(
            status=TransactionStatus.SKIPPED,
            outcome=ApprovalOutcome.ALREADY_SUFFICIENT,
            chain_id=asset.chain_id,
            spender=spender,
            message=f"Allowance {allowance} already covers {required_amount}",
        )

    amount = resolve_approval_amount(required_amount, per_call=per_call, instance=instance)
    logger.info(
        "Approving %s for spender %s on chain %s (allowance=%s required=%s)",
        "unlimited" if amount == MAX_UINT256 else amount,
        spender, asset.chain_id, allowance, required_amount,
    )
    tx_hash, _ = await approve_erc20(
        w3=w3,
        token_addr=asset.address,
        signer=signer,
        spender=spender,
        amount=amount,
        wait=True,
        timeout=timeout,
    )
    return ApprovalResult(
        status=TransactionStatus.SUCCESS,
        outcome=ApprovalOutcome.APPROVED,
        chain_id=asset.chain_id,
        tx_hash=tx_hash,
        spender=spender,
        amount=amount,
        message="Approval transaction confirmed",
    )

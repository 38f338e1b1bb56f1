"""
Asset Polymorphic Types (Discriminated Union)

A route's source asset is either the chain's native currency or an ERC-20
token. The two have different balance / allowance / approval rules, so they
are modeled as a tagged union discriminated on ``kind``:

    AssetTypes = NativeAsset (kind="native") | FungibleAsset (kind="fungible")

Example usage:
    asset = classify_asset(route.params.source_token_address, source_chain)
    if isinstance(asset, FungibleAsset):
        ...  # balanceOf / allowance / approve
"""

from typing import Union
from typing_extensions import Annotated
from pydantic import Field

from .evm.constants import NATIVE_TOKEN_ADDRESS
from .evm.schemas import NativeAsset, FungibleAsset
from ..schemas.routes import ChainData


AssetTypes = Annotated[
    Union[
        NativeAsset,    # kind: "native"
        FungibleAsset,  # kind: "fungible"
    ],
    Field(discriminator="kind")
]


def is_native_token(token_address: str) -> bool:
    """True when ``token_address`` is the native-currency sentinel (case-insensitive)."""
    return token_address.lower() == NATIVE_TOKEN_ADDRESS.lower()


def classify_asset(token_address: str, chain: ChainData) -> Union[NativeAsset, FungibleAsset]:
    """
    Classify a token address on a chain.

    Args:
        token_address: Token address taken from a route or a caller
        chain: Chain the token lives on

    Returns:
        NativeAsset for the sentinel address, FungibleAsset otherwise.
    """
    if is_native_token(token_address):
        return NativeAsset(chain_id=chain.chain_id, symbol=chain.native_currency.symbol)
    return FungibleAsset(chain_id=chain.chain_id, address=token_address)

"""
Chain and Token Metadata Registry

Holds the chain and token metadata fetched once from ``GET /api/sdk-info``.
The registry is an explicit object owned by the SDK instance and passed to
whatever needs lookups, so tests can build one from fixtures.
"""

from typing import Any, Dict, Iterable, List, Mapping, Optional, Tuple, Union

from ..engine.exceptions import InitializationError, ValidationError
from ..schemas.routes import ChainData, TokenData


class MetadataRegistry:
    """
    Read-only lookup of chain and token metadata.

    Every lookup raises :class:`InitializationError` until :meth:`load` has
    been called. After loading, the registry is not mutated by any operation;
    calling :meth:`load` again replaces the content (re-initialization).

    Example:
        registry = MetadataRegistry()
        registry.load(chains=sdk_info["chains"], tokens=sdk_info["tokens"])
        chain = registry.require_chain(43114)
    """

    def __init__(self):
        self._chains: Dict[int, ChainData] = {}
        self._tokens: Dict[Tuple[str, int], TokenData] = {}
        self._token_list: List[TokenData] = []
        self._loaded: bool = False

    @property
    def is_loaded(self) -> bool:
        return self._loaded

    def load(
        self,
        chains: Union[Iterable[Any], Mapping[Any, Any]],
        tokens: Iterable[Any],
    ) -> None:
        """
        Populate the registry.

        Args:
            chains: Chain payloads (dicts or ChainData), as a list or as a
                mapping whose values are chains.
            tokens: Token payloads (dicts or TokenData).

        Raises:
            pydantic.ValidationError: If a payload does not match the schema.
        """
        if isinstance(chains, Mapping):
            chains = chains.values()

        parsed_chains = [ChainData.model_validate(c) for c in chains]
        parsed_tokens = [TokenData.model_validate(t) for t in tokens]

        self._chains = {chain.chain_id: chain for chain in parsed_chains}
        self._token_list = parsed_tokens
        self._tokens = {}
        for token in parsed_tokens:
            self._tokens.setdefault((token.address.lower(), token.chain_id), token)
        self._loaded = True

    def _ensure_loaded(self) -> None:
        if not self._loaded:
            raise InitializationError(
                "SquidSdk must be inited! Please call the Squid.init method"
            )

    @property
    def chains(self) -> List[ChainData]:
        self._ensure_loaded()
        return list(self._chains.values())

    @property
    def tokens(self) -> List[TokenData]:
        self._ensure_loaded()
        return list(self._token_list)

    def lookup_chain(self, chain_id: int) -> Optional[ChainData]:
        self._ensure_loaded()
        return self._chains.get(int(chain_id))

    def lookup_token(self, address: str, chain_id: Optional[int] = None) -> Optional[TokenData]:
        """
        Find a token by address, optionally restricted to one chain.

        Without ``chain_id`` the first loaded token with that address wins.
        """
        self._ensure_loaded()
        if chain_id is not None:
            return self._tokens.get((address.lower(), int(chain_id)))
        for token in self._token_list:
            if token.address.lower() == address.lower():
                return token
        return None

    def require_chain(self, chain_id: int, role: str = "chain") -> ChainData:
        """
        Look up a chain or fail.

        Args:
            chain_id: Chain id to resolve
            role: Name used in the error message (e.g. "sourceChain")

        Raises:
            ValidationError: If the chain is unknown.
        """
        chain = self.lookup_chain(chain_id)
        if chain is None:
            raise ValidationError(f"{role} not found for {chain_id}", key=chain_id)
        return chain

    def require_token(self, address: str, chain_id: Optional[int] = None) -> TokenData:
        token = self.lookup_token(address, chain_id)
        if token is None:
            where = f" on chain {chain_id}" if chain_id is not None else ""
            raise ValidationError(f"Unsupported token {address}{where}", key=address)
        return token

"""
EVM constants shared by validation, approval and execution.
"""

from typing import Dict

#: Sentinel token address the Squid API uses for a chain's native currency.
NATIVE_TOKEN_ADDRESS: str = "0xEeeeeEeeeEeEeeEeEeEeeEEEeeeeEeeeeeeeEEeE"

#: Maximum uint256, used as the "infinite" approval amount.
MAX_UINT256: int = 2**256 - 1

#: Route type of a pure transfer; such routes never attach native value.
SEND_ROUTE_TYPE: str = "SEND"

#: Cross-chain gas fee (wei) used when the fee oracle cannot be reached.
FALLBACK_GAS_FEE: int = 3513000021000000

#: Gas limit used when estimation fails for an approval transaction.
APPROVAL_GAS_FALLBACK: int = 100000

#: Gas limit used when a route carries none and estimation fails.
EXECUTION_GAS_FALLBACK: int = 1000000

#: Buffer applied on top of estimated gas.
GAS_ESTIMATE_MULTIPLIER: float = 1.1

#: Axelarscan gas-fee oracle endpoints by environment.
AXELAR_GAS_FEE_URLS: Dict[str, str] = {
    "mainnet": "https://api.axelarscan.io/gmp/estimateGasFee",
    "testnet": "https://testnet.api.axelarscan.io/gmp/estimateGasFee",
}

"""
Function fragments for every contract read dexscout performs.

Calls are encoded directly with eth_abi, so a fragment only needs the
function name plus its input and output ABI types.
"""

from typing import NamedTuple, Tuple

from eth_utils import function_signature_to_4byte_selector


class FunctionSpec(NamedTuple):
    """Name and ABI types of a contract function."""

    name: str
    inputs: Tuple[str, ...]
    outputs: Tuple[str, ...]

    @property
    def signature(self) -> str:
        return f"{self.name}({','.join(self.inputs)})"

    @property
    def selector(self) -> bytes:
        return function_signature_to_4byte_selector(self.signature)


# Multicall3
AGGREGATE3 = FunctionSpec(
    "aggregate3", ("(address,bool,bytes)[]",), ("(bool,bytes)[]",)
)

# ERC20
BALANCE_OF = FunctionSpec("balanceOf", ("address",), ("uint256",))

# Uniswap V2
GET_PAIR = FunctionSpec("getPair", ("address", "address"), ("address",))
GET_RESERVES = FunctionSpec("getReserves", (), ("uint112", "uint112", "uint32"))
GET_AMOUNT_OUT = FunctionSpec(
    "getAmountOut", ("uint256", "uint256", "uint256"), ("uint256",)
)

# Uniswap V3
GET_POOL = FunctionSpec("getPool", ("address", "address", "uint24"), ("address",))
SLOT0 = FunctionSpec(
    "slot0",
    (),
    ("uint160", "int24", "uint16", "uint16", "uint16", "uint8", "bool"),
)

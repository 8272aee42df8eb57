"""
Uniswap pair/pool resolution and reserve/price derivation against the
chain's quote asset.
"""

from .base import BaseDexClient
from .tokens import ERC20Client
from .uniswap_v2 import UniswapV2Client, V2Quote, order_reserves, quote_reserves
from .uniswap_v3 import UniswapV3Client

__all__ = [
    'BaseDexClient',
    'ERC20Client',
    'UniswapV2Client',
    'UniswapV3Client',
    'V2Quote',
    'order_reserves',
    'quote_reserves',
]

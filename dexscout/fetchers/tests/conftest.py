"""Test configuration for fetchers."""
from unittest.mock import AsyncMock, MagicMock, PropertyMock

import pytest
from eth_abi import encode
from hexbytes import HexBytes
from web3 import Web3

from dexscout.config import ETHEREUM, ProtocolConfig

TOKEN = Web3.to_checksum_address("0x" + "ab" * 20)
OTHER = Web3.to_checksum_address("0x" + "01" * 20)
PAIR = Web3.to_checksum_address("0x" + "cd" * 20)


def awaitable(value):
    async def _value():
        return value
    return _value()


def topic(address):
    return HexBytes(encode(["address"], [address]))


@pytest.fixture
def mock_web3():
    """AsyncWeb3 stand-in with awaitable block_number/chain_id and a get_logs mock."""
    web3 = MagicMock()
    web3.eth.get_logs = AsyncMock(return_value=[])
    block_number = PropertyMock(side_effect=lambda: awaitable(2_500_000))
    chain_id = PropertyMock(side_effect=lambda: awaitable(ETHEREUM.chain_id))
    type(web3.eth).block_number = block_number
    type(web3.eth).chain_id = chain_id
    # Reading a property through the class would call it; keep the mocks themselves
    web3.block_number_property = block_number
    web3.chain_id_property = chain_id
    return web3


@pytest.fixture
def pair_created_log():
    """Build a PairCreated log for (token0, token1, pair)."""
    event = HexBytes(ProtocolConfig().get_event_hash("uniswap_v2_pair_created"))

    def _build(token0, token1, pair, index=1):
        return {
            "address": ETHEREUM.v2_factory,
            "topics": [event, topic(token0), topic(token1)],
            "data": HexBytes(encode(["address", "uint256"], [pair, index])),
        }
    return _build


@pytest.fixture
def pool_created_log():
    """Build a PoolCreated log for (token0, token1, fee, pool)."""
    event = HexBytes(ProtocolConfig().get_event_hash("uniswap_v3_pool_created"))

    def _build(token0, token1, fee, pool, tick_spacing=60):
        return {
            "address": ETHEREUM.v3_factory,
            "topics": [event, topic(token0), topic(token1), HexBytes(encode(["uint24"], [fee]))],
            "data": HexBytes(encode(["int24", "address"], [tick_spacing, pool])),
        }
    return _build

"""Test configuration for the Uniswap clients."""
from unittest.mock import AsyncMock, MagicMock, PropertyMock

import pytest
from eth_abi import decode, encode
from web3 import Web3

from dexscout.batchers import abis
from dexscout.config import ETHEREUM

WETH = ETHEREUM.quote_asset
# Either side of WETH (0xC02a...) in address order
TOKEN_LOW = Web3.to_checksum_address("0x" + "11" * 20)
TOKEN_HIGH = Web3.to_checksum_address("0x" + "ee" * 20)
PAIR_LOW = Web3.to_checksum_address("0x" + "21" * 20)
PAIR_HIGH = Web3.to_checksum_address("0x" + "22" * 20)
ZERO = "0x" + "00" * 20

FUNCTIONS = {
    function.selector: function
    for function in (abis.BALANCE_OF, abis.GET_PAIR, abis.GET_RESERVES, abis.GET_AMOUNT_OUT, abis.GET_POOL, abis.SLOT0)
}


def awaitable(value):
    async def _value():
        return value
    return _value()


class FakeChain:
    """
    Answers aggregate3 eth_calls from per-function handlers.

    A handler gets (target, args) and returns the decoded return value, or
    None to make that call revert. Every inner call is recorded in order.
    """

    def __init__(self):
        self.handlers = {}
        self.calls = []

    def on(self, function, handler):
        self.handlers[function.selector] = handler

    def calls_to(self, function):
        return [(target, args) for target, name, args in self.calls if name == function.name]

    async def respond(self, transaction, block_identifier="latest"):
        data = bytes(transaction["data"])
        assert data[:4] == abis.AGGREGATE3.selector
        (calls,) = decode(["(address,bool,bytes)[]"], data[4:])

        results = []
        for target, _allow_failure, call_data in calls:
            function = FUNCTIONS[call_data[:4]]
            args = decode(list(function.inputs), call_data[4:])
            target = Web3.to_checksum_address(target)
            self.calls.append((target, function.name, args))

            value = self.handlers[function.selector](target, args)
            if value is None:
                results.append((False, b""))
                continue
            values = list(value) if len(function.outputs) > 1 else [value]
            results.append((True, encode(list(function.outputs), values)))
        return encode(["(bool,bytes)[]"], [results])


@pytest.fixture
def chain():
    return FakeChain()


@pytest.fixture
def mock_web3(chain):
    """AsyncWeb3 stand-in on chain id 1 whose eth.call is served by FakeChain."""
    web3 = MagicMock()
    web3.eth.call = AsyncMock(side_effect=chain.respond)
    chain_id = PropertyMock(side_effect=lambda: awaitable(ETHEREUM.chain_id))
    type(web3.eth).chain_id = chain_id
    # Reading the property through the class would call it; keep the mock itself
    web3.chain_id_property = chain_id
    return web3

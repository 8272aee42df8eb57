#!/usr/bin/env python3
"""
Command-line interface for dexscout.

Usage:
    python -m dexscout.cli scan --token 0x... --from-block 10000835
    python -m dexscout.cli scan --token 0x... --v3
    python -m dexscout.cli price --token 0x... --token 0x... --amount 1000000000000000000
    python -m dexscout.cli pools --token 0x...
"""

import argparse
import asyncio
import json
import logging
import sys
from typing import List, Optional

from web3 import AsyncHTTPProvider, AsyncWeb3

from .batchers.base import BatchConfig
from .batchers.errors import BatchError
from .config import ConfigError, get_config
from .fetchers import AdaptiveRangeScanner, FetchError
from .pairs import UniswapV2Client, UniswapV3Client

logger = logging.getLogger(__name__)


def build_web3(rpc_url: str) -> AsyncWeb3:
    return AsyncWeb3(AsyncHTTPProvider(rpc_url))


def batch_config(config) -> BatchConfig:
    return BatchConfig(batch_size=config.scanner.MULTICALL_BATCH_SIZE)


async def run_scan(web3: AsyncWeb3, args) -> list:
    config = get_config()
    scanner = AdaptiveRangeScanner(web3, scanner_config=config.scanner, registry=config.chains.registry)
    from_block, chain_id = args.from_block, None
    if from_block is None:
        chain_id = await scanner.get_chain_id()
        deployment = scanner.registry.get(chain_id)
        from_block = deployment.v3_deployment_block if args.v3 else deployment.v2_deployment_block
    if args.v3:
        records = await scanner.get_pools_with_token(args.token, from_block, args.to_block, chain_id=chain_id)
    else:
        records = await scanner.get_pairs_with_token(args.token, from_block, args.to_block, chain_id=chain_id)
    logger.info(f"🔎 Found {len(records)} creation events for {args.token}")
    return [record._asdict() for record in records]


async def run_price(web3: AsyncWeb3, args) -> list:
    config = get_config()
    client = UniswapV2Client(web3, registry=config.chains.registry, batch_config=batch_config(config))
    quotes = await client.price_tokens(args.token, args.amount)
    priced = sum(1 for quote in quotes if quote.amount_out)
    logger.info(f"💱 Priced {priced}/{len(quotes)} tokens")
    return [
        {
            "token": quote.token,
            "pair": quote.pair,
            "reserves": list(quote.reserves),
            "amount_out": str(quote.amount_out),
        }
        for quote in quotes
    ]


async def run_pools(web3: AsyncWeb3, args) -> list:
    config = get_config()
    client = UniswapV3Client(web3, registry=config.chains.registry, batch_config=batch_config(config))
    groups = await client.get_quote_pools(args.token)
    return [
        {"token": token, "pools": dict(zip(map(str, client.fee_tiers), group))}
        for token, group in zip(args.token, groups)
    ]


COMMANDS = {"scan": run_scan, "price": run_price, "pools": run_pools}


def parse_args(argv: Optional[List[str]] = None) -> argparse.Namespace:
    parser = argparse.ArgumentParser(
        description="Uniswap pair discovery and batched reserve/price reads",
        formatter_class=argparse.RawDescriptionHelpFormatter,
    )
    parser.add_argument("--chain", default=None, help="Chain name for the RPC URL (default: DEFAULT_CHAIN)")
    parser.add_argument("--rpc-url", default=None, help="Override the configured RPC URL")

    subparsers = parser.add_subparsers(dest="command", required=True)

    scan = subparsers.add_parser("scan", help="Find pairs/pools created with a token")
    scan.add_argument("--token", required=True, help="Token address")
    scan.add_argument(
        "--from-block", type=int, default=None, help="First block (default: factory deployment block)"
    )
    scan.add_argument("--to-block", type=int, default=None, help="Last block (default: chain head)")
    scan.add_argument("--v3", action="store_true", help="Scan V3 PoolCreated instead of V2 PairCreated")

    price = subparsers.add_parser("price", help="Price tokens against the quote asset via V2")
    price.add_argument("--token", action="append", required=True, help="Token address (repeatable)")
    price.add_argument("--amount", type=int, required=True, help="Quote-asset amount in base units")

    pools = subparsers.add_parser("pools", help="Resolve V3 fee-tier pools against the quote asset")
    pools.add_argument("--token", action="append", required=True, help="Token address (repeatable)")

    return parser.parse_args(argv)


async def main(argv: Optional[List[str]] = None) -> int:
    """Main CLI function."""
    args = parse_args(argv)

    try:
        config = get_config()
        rpc_url = args.rpc_url or config.chains.get_rpc_url(args.chain)
        web3 = build_web3(rpc_url)
        output = await COMMANDS[args.command](web3, args)
    except (ConfigError, BatchError, FetchError) as e:
        logger.error(f"❌ {args.command} failed: {e}")
        return 1

    print(json.dumps(output, indent=2))
    return 0


def run():
    sys.exit(asyncio.run(main()))


if __name__ == "__main__":
    run()

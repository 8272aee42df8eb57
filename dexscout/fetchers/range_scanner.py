"""
Adaptive block-range log scanner.

Providers cap eth_getLogs by block span or result count, and rarely say what
the cap is. The scanner starts with a large step, doubles it after every
successful sub-range and divides it by ten after a failure, retrying the same
cursor until the provider accepts the request.

The step policy lives in pure functions over ScanState so it can be tested
without a node.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Callable, Dict, List, Optional, Tuple

from eth_abi import encode
from hexbytes import HexBytes
from web3 import AsyncWeb3, Web3

from ..batchers.errors import TransportError
from ..config.chains import DeploymentRegistry
from ..config.protocols import ProtocolConfig, ScannerConfig
from ..types import PairRecord, PoolRecord
from .base import BaseFetcher, ScanExhaustedError, ScanResult


@dataclass(frozen=True)
class ScanState:
    """Scanner position: next block to query and current step size."""

    cursor: int
    step: int


def next_sub_range(state: ScanState, to_block: int) -> Tuple[int, int]:
    """Inclusive (start, end) of the next query, never past to_block."""
    return state.cursor, min(to_block, state.cursor + state.step)


def on_success(state: ScanState, sub_range_end: int, growth_factor: int = 2) -> ScanState:
    """Advance past the finished sub-range and grow the step."""
    return ScanState(cursor=sub_range_end + 1, step=state.step * growth_factor)


def on_failure(state: ScanState, shrink_factor: int = 10, min_step: int = 1) -> ScanState:
    """Keep the cursor and shrink the step."""
    return ScanState(cursor=state.cursor, step=max(state.step // shrink_factor, min_step))


def address_topic(address: str) -> str:
    """Left-pad an address to a 32-byte indexed topic."""
    return "0x" + encode(["address"], [Web3.to_checksum_address(address)]).hex()


def _topic_address(topic: Any) -> str:
    return Web3.to_checksum_address(HexBytes(topic)[-20:])


def decode_pair_created(log: Dict[str, Any]) -> PairRecord:
    """
    PairCreated(address indexed token0, address indexed token1, address pair, uint256).

    The pair address is the first data word, right-aligned.
    """
    data = HexBytes(log["data"])
    return PairRecord(
        token0=_topic_address(log["topics"][1]),
        token1=_topic_address(log["topics"][2]),
        pair=Web3.to_checksum_address(data[12:32]),
    )


def decode_pool_created(log: Dict[str, Any]) -> PoolRecord:
    """
    PoolCreated(address indexed token0, address indexed token1, uint24 indexed fee,
    int24 tickSpacing, address pool).

    The pool address is the second data word.
    """
    data = HexBytes(log["data"])
    return PoolRecord(
        token0=_topic_address(log["topics"][1]),
        token1=_topic_address(log["topics"][2]),
        fee=int.from_bytes(HexBytes(log["topics"][3]), "big"),
        pool=Web3.to_checksum_address(data[44:64]),
    )


class AdaptiveRangeScanner(BaseFetcher):
    """
    Finds factory creation events that reference a token.

    A token can sit in either indexed slot of the event, so every sub-range
    is queried twice: token pinned to topic 1, then to topic 2. Results keep
    that order (topic-1 matches then topic-2 matches) and are not
    deduplicated or sorted by log index.
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        scanner_config: Optional[ScannerConfig] = None,
        registry: Optional[DeploymentRegistry] = None,
        protocol_config: Optional[ProtocolConfig] = None,
    ):
        super().__init__(web3)
        self.scanner_config = scanner_config or ScannerConfig()
        self.registry = registry or DeploymentRegistry()
        self.protocol_config = protocol_config or ProtocolConfig()
        # Most recent scan, kept for callers that want sub-range statistics
        self.last_result: Optional[ScanResult] = None

    async def get_pairs_with_token(
        self,
        token: str,
        from_block: int,
        to_block: Optional[int] = None,
        chain_id: Optional[int] = None,
    ) -> List[PairRecord]:
        """
        All Uniswap V2 pairs created with the token, as (token0, token1, pair).

        Args:
            token: Token address to look for in either position
            from_block: First block to scan
            to_block: Last block to scan, defaults to the chain head
            chain_id: Chain id, fetched from the provider if omitted

        Raises:
            ValidationError: If from_block > to_block
            ConfigurationError: If the chain has no known deployment
            ScanExhaustedError: If a sub-range keeps failing
            TransportError: If the provider rejects the request outright
        """
        from_block, to_block = await self.resolve_block_range(from_block, to_block)
        deployment = self.registry.get(chain_id if chain_id is not None else await self.get_chain_id())

        result = await self.scan(
            address=deployment.v2_factory,
            event_topic=self.protocol_config.get_event_hash("uniswap_v2_pair_created"),
            token=token,
            from_block=from_block,
            to_block=to_block,
            decode_log=decode_pair_created,
        )
        return result.records

    async def get_pools_with_token(
        self,
        token: str,
        from_block: int,
        to_block: Optional[int] = None,
        chain_id: Optional[int] = None,
    ) -> List[PoolRecord]:
        """All Uniswap V3 pools created with the token, as (token0, token1, fee, pool)."""
        from_block, to_block = await self.resolve_block_range(from_block, to_block)
        deployment = self.registry.get(chain_id if chain_id is not None else await self.get_chain_id())

        result = await self.scan(
            address=deployment.v3_factory,
            event_topic=self.protocol_config.get_event_hash("uniswap_v3_pool_created"),
            token=token,
            from_block=from_block,
            to_block=to_block,
            decode_log=decode_pool_created,
        )
        return result.records

    async def scan(
        self,
        address: str,
        event_topic: str,
        token: str,
        from_block: int,
        to_block: int,
        decode_log: Callable[[Dict[str, Any]], Any],
    ) -> ScanResult:
        """
        Run the adaptive loop over [from_block, to_block] inclusive.

        The range must already be validated; see resolve_block_range().
        """
        config = self.scanner_config
        address = Web3.to_checksum_address(address)
        token_topic = address_topic(token)

        result = ScanResult(start_block=from_block, end_block=to_block)
        state = ScanState(cursor=from_block, step=config.SCAN_INITIAL_STEP)
        consecutive_failures = 0

        while state.cursor <= to_block:
            start, end = next_sub_range(state, to_block)
            self.logger.info(f"Searching for logs from {start} to {end} (step {state.step})")

            try:
                logs = await self._get_logs_either_position(address, event_topic, token_topic, start, end)
            except Exception as e:
                consecutive_failures += 1
                result.failed_attempts += 1
                self.error_handler.log_error(
                    e,
                    {
                        "from_block": start,
                        "to_block": end,
                        "step": state.step,
                        "attempt": consecutive_failures,
                    },
                )

                if self.error_handler.is_fatal_for_scan(e):
                    raise TransportError(f"Log query rejected by provider: {e}", cause=e) from e

                if consecutive_failures >= config.SCAN_MAX_CONSECUTIVE_FAILURES:
                    raise ScanExhaustedError(
                        f"Giving up at block {state.cursor} after {consecutive_failures} "
                        f"consecutive failures: {e}",
                        cursor=state.cursor,
                        step=state.step,
                        last_error=e,
                    ) from e

                if config.SCAN_RATE_LIMIT_BACKOFF and self.error_handler.classify_error(e) == "rate_limit":
                    # Throttled, not too large: wait and retry the same step
                    await asyncio.sleep(self.error_handler.get_retry_delay(e, consecutive_failures - 1))
                else:
                    state = on_failure(state, config.SCAN_SHRINK_FACTOR, config.SCAN_MIN_STEP)
                continue

            result.records.extend(decode_log(log) for log in logs)
            result.sub_ranges.append((start, end))
            consecutive_failures = 0
            state = on_success(state, end, config.SCAN_GROWTH_FACTOR)

        self.log_result(result)
        self.last_result = result
        return result

    async def _get_logs_either_position(
        self, address: str, event_topic: str, token_topic: str, start: int, end: int
    ) -> List[Dict[str, Any]]:
        """Both topic-position queries for one sub-range; either failing fails the pair."""
        base_filter = {"address": address, "fromBlock": start, "toBlock": end}

        logs = list(await self.web3.eth.get_logs({**base_filter, "topics": [event_topic, token_topic]}))
        logs_token1 = await self.web3.eth.get_logs({**base_filter, "topics": [event_topic, None, token_topic]})

        self.logger.debug(f"logs as token0: {len(logs)}, logs as token1: {len(logs_token1)}")
        logs.extend(logs_token1)
        return logs


async def get_pairs_with_token(
    web3: AsyncWeb3,
    token: str,
    from_block: int,
    to_block: Optional[int] = None,
    chain_id: Optional[int] = None,
) -> List[PairRecord]:
    """
    Convenience function to scan for Uniswap V2 pairs containing a token.

    Args:
        web3: AsyncWeb3 instance
        token: Token address
        from_block: First block to scan
        to_block: Last block to scan, defaults to the chain head
        chain_id: Chain id, fetched from the provider if omitted

    Returns:
        List of (token0, token1, pair) records in discovery order
    """
    scanner = AdaptiveRangeScanner(web3)
    return await scanner.get_pairs_with_token(token, from_block, to_block, chain_id)

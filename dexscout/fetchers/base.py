"""
Base classes for blockchain log fetchers.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional, Tuple
import logging

from web3 import AsyncWeb3

from ..batchers.errors import ErrorHandler, TransportError, ValidationError

logger = logging.getLogger(__name__)


class FetchError(Exception):
    """Base exception for fetch-related errors."""
    pass


class ScanExhaustedError(FetchError):
    """Raised when a sub-range keeps failing after every allowed shrink."""

    def __init__(self, message: str, cursor: int, step: int, last_error: Optional[BaseException] = None):
        super().__init__(message)
        self.cursor = cursor
        self.step = step
        self.last_error = last_error


@dataclass
class ScanResult:
    """Result from a log scan."""
    start_block: int
    end_block: int
    records: List[Any] = field(default_factory=list)
    # Inclusive (start, end) of every sub-range that succeeded, in order
    sub_ranges: List[Tuple[int, int]] = field(default_factory=list)
    failed_attempts: int = 0

    @property
    def scanned_blocks(self) -> int:
        return sum(end - start + 1 for start, end in self.sub_ranges)


class BaseFetcher(ABC):
    """
    Abstract base class for fetchers that read logs from an RPC node.

    Holds the async provider and resolves/validates block ranges.
    """

    def __init__(self, web3: AsyncWeb3):
        self.web3 = web3
        self.logger = logging.getLogger(f"{self.__class__.__module__}.{self.__class__.__name__}")
        self.error_handler = ErrorHandler(self.logger)

    @abstractmethod
    async def scan(self, *args, **kwargs) -> ScanResult:
        """Scan a block range and return decoded records."""
        pass

    async def get_latest_block(self) -> int:
        """Current chain head."""
        try:
            return await self.web3.eth.block_number
        except Exception as e:
            raise TransportError(f"Failed to get current block: {e}", cause=e) from e

    async def get_chain_id(self) -> int:
        try:
            return await self.web3.eth.chain_id
        except Exception as e:
            raise TransportError(f"Failed to get chain id: {e}", cause=e) from e

    async def resolve_block_range(self, from_block: int, to_block: Optional[int] = None) -> Tuple[int, int]:
        """
        Default to_block to the chain head and validate the range.

        No network call is made when to_block is given.

        Raises:
            ValidationError: If from_block > to_block or from_block is negative
        """
        if from_block < 0:
            raise ValidationError(f"Invalid block range: from_block {from_block} is negative")
        if to_block is None:
            to_block = await self.get_latest_block()
        if from_block > to_block:
            raise ValidationError(f"Invalid block range: {from_block} > {to_block}")
        return from_block, to_block

    def log_result(self, result: ScanResult) -> None:
        self.logger.info(
            f"Scan completed: {len(result.records)} records from {result.scanned_blocks} blocks "
            f"({result.start_block}-{result.end_block}) in {len(result.sub_ranges)} sub-ranges, "
            f"{result.failed_attempts} failed attempts"
        )

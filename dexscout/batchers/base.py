"""
Base classes for batched contract reads.

Many independent read-only calls are queued, then executed in a single
eth_call against Multicall3's aggregate3 so that a whole pipeline stage costs
one RPC round trip. Results come back in the order the calls were added.
"""

import logging
from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Any, List, Optional, Sequence, Tuple, Union

from eth_abi import decode, encode
from eth_abi.exceptions import DecodingError
from hexbytes import HexBytes
from web3 import AsyncWeb3, Web3

from ..config.chains import MULTICALL3_ADDRESS
from ..types import is_zero_address
from .abis import AGGREGATE3, FunctionSpec
from .errors import BatchError, ContractError, ErrorHandler, TransportError, ValidationError

logger = logging.getLogger(__name__)

BlockIdentifier = Union[int, str]


@dataclass
class BatchConfig:
    """Configuration for batch operations."""

    # Calls per aggregate3 round trip; larger batches are split into chunks
    batch_size: int = 500


@dataclass(frozen=True)
class ContractCall:
    """
    A single pending read.

    Attributes:
        target: Contract to call
        function: Function fragment (name, input and output types)
        args: Positional arguments matching function.inputs
        allow_failure: If True a revert yields None instead of failing the batch
    """

    target: str
    function: FunctionSpec
    args: Tuple[Any, ...] = field(default_factory=tuple)
    allow_failure: bool = True

    def encode(self) -> bytes:
        """Selector followed by the ABI-encoded arguments."""
        return self.function.selector + encode(list(self.function.inputs), list(self.args))

    def decode(self, data: bytes) -> Any:
        """Decode return data; single-output functions yield the bare value."""
        values = decode(list(self.function.outputs), data)
        if len(values) == 1:
            return values[0]
        return tuple(values)


class BaseBatcher(ABC):
    """
    Abstract base class for batched reads.

    Holds the provider, configuration and per-instance logger, plus the
    pending call list shared by concrete batchers.
    """

    def __init__(self, web3: AsyncWeb3, config: Optional[BatchConfig] = None):
        self.web3 = web3
        self.config = config or BatchConfig()
        self.logger = logging.getLogger(f"{__name__}.{self.__class__.__name__}")
        self.error_handler = ErrorHandler(self.logger)
        self._calls: List[ContractCall] = []

    def add(self, call: ContractCall) -> int:
        """
        Queue a call.

        Returns:
            Position of the call's result in the list returned by flush()

        Raises:
            ValidationError: If the target is the zero address
        """
        if is_zero_address(call.target):
            raise ValidationError(
                f"Refusing to call {call.function.signature} on the zero address"
            )
        self._calls.append(call)
        return len(self._calls) - 1

    def add_call(
        self,
        target: str,
        function: FunctionSpec,
        args: Sequence[Any] = (),
        allow_failure: bool = True,
    ) -> int:
        """Build a ContractCall and queue it."""
        return self.add(
            ContractCall(
                target=Web3.to_checksum_address(target),
                function=function,
                args=tuple(args),
                allow_failure=allow_failure,
            )
        )

    @property
    def pending(self) -> List[ContractCall]:
        return list(self._calls)

    def clear(self) -> None:
        self._calls = []

    def __len__(self) -> int:
        return len(self._calls)

    def _chunk_calls(self, calls: List[ContractCall]) -> List[List[ContractCall]]:
        """Split calls into chunks based on batch_size."""
        chunk_size = self.config.batch_size
        return [calls[i : i + chunk_size] for i in range(0, len(calls), chunk_size)]

    @abstractmethod
    async def flush(self, block_identifier: BlockIdentifier = "latest") -> List[Any]:
        """Execute every pending call and return results in add() order."""
        pass


class MulticallBatcher(BaseBatcher):
    """
    Batcher backed by Multicall3.aggregate3.

    Not safe to share between concurrent logical operations: each pipeline
    stage should own its instance for the add -> flush cycle.
    """

    def __init__(
        self,
        web3: AsyncWeb3,
        multicall_address: str = MULTICALL3_ADDRESS,
        config: Optional[BatchConfig] = None,
    ):
        super().__init__(web3, config)
        self.multicall_address = Web3.to_checksum_address(multicall_address)

    async def flush(self, block_identifier: BlockIdentifier = "latest") -> List[Any]:
        """
        Execute the pending batch.

        The pending list is swapped out before any I/O, so the batcher is empty
        afterwards whether or not the flush succeeded.

        Args:
            block_identifier: Block to call at

        Returns:
            One entry per queued call, in add() order. Best-effort calls that
            reverted are None.

        Raises:
            TransportError: If the RPC call fails or a required call reverts
            ContractError: If a required call returns undecodable data
        """
        calls, self._calls = self._calls, []
        if not calls:
            return []

        chunks = self._chunk_calls(calls)
        self.logger.debug(
            f"Flushing {len(calls)} calls in {len(chunks)} round trip(s) at {block_identifier}"
        )

        results: List[Any] = []
        for chunk in chunks:
            raw_response = await self._make_batch_call(chunk, block_identifier)
            results.extend(self._decode_batch_response(chunk, raw_response))
        return results

    def _prepare_call_data(self, calls: List[ContractCall]) -> HexBytes:
        encoded_calls = [
            (call.target, call.allow_failure, call.encode()) for call in calls
        ]
        try:
            return HexBytes(AGGREGATE3.selector + encode(list(AGGREGATE3.inputs), [encoded_calls]))
        except Exception as e:
            raise BatchError(f"Failed to prepare call data: {e}") from e

    async def _make_batch_call(
        self, calls: List[ContractCall], block_identifier: BlockIdentifier
    ) -> bytes:
        call_data = self._prepare_call_data(calls)
        try:
            return await self.web3.eth.call(
                {"to": self.multicall_address, "data": call_data},
                block_identifier=block_identifier,
            )
        except Exception as e:
            self.error_handler.log_error(e, {"calls": len(calls), "block": str(block_identifier)})
            raise TransportError(f"Batch call failed: {e}", cause=e) from e

    def _decode_batch_response(
        self, calls: List[ContractCall], raw_response: bytes
    ) -> List[Any]:
        try:
            (call_results,) = decode(list(AGGREGATE3.outputs), bytes(raw_response))
        except DecodingError as e:
            raise TransportError(f"Malformed multicall response: {e}", cause=e) from e

        if len(call_results) != len(calls):
            raise TransportError(
                f"Multicall returned {len(call_results)} results for {len(calls)} calls"
            )

        decoded: List[Any] = []
        for call, (success, return_data) in zip(calls, call_results):
            if not success:
                self.logger.debug(f"{call.function.signature} reverted on {call.target}")
                decoded.append(None)
                continue
            try:
                decoded.append(call.decode(return_data))
            except DecodingError as e:
                if not call.allow_failure:
                    raise ContractError(
                        f"Undecodable result from {call.function.signature} on {call.target}: {e}"
                    ) from e
                self.logger.debug(
                    f"{call.function.signature} on {call.target} returned undecodable data"
                )
                decoded.append(None)
        return decoded

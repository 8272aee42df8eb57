"""
Batched contract reads.

This package coalesces many independent read-only calls into Multicall3
round trips, reducing RPC overhead while keeping results aligned with the
order calls were queued.
"""

from . import abis
from .base import BaseBatcher, BatchConfig, ContractCall, MulticallBatcher
from .errors import (
    BatchError,
    ContractError,
    ErrorHandler,
    RateLimitError,
    TransportError,
    ValidationError,
)

__all__ = [
    'abis',
    'BaseBatcher',
    'BatchConfig',
    'ContractCall',
    'MulticallBatcher',
    'BatchError',
    'ContractError',
    'ErrorHandler',
    'RateLimitError',
    'TransportError',
    'ValidationError',
]

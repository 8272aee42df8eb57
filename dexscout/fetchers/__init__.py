"""
Historical log fetchers.

The adaptive range scanner discovers pair/pool creation events for a token
under provider block-range limits that are not advertised.
"""

from .base import BaseFetcher, FetchError, ScanExhaustedError, ScanResult
from .range_scanner import (
    AdaptiveRangeScanner,
    ScanState,
    decode_pair_created,
    decode_pool_created,
    get_pairs_with_token,
    next_sub_range,
    on_failure,
    on_success,
)

__all__ = [
    'BaseFetcher',
    'FetchError',
    'ScanExhaustedError',
    'ScanResult',
    'AdaptiveRangeScanner',
    'ScanState',
    'decode_pair_created',
    'decode_pool_created',
    'get_pairs_with_token',
    'next_sub_range',
    'on_failure',
    'on_success',
]

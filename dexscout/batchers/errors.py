"""
Error handling utilities for batched reads and log scanning.

This module provides the exception hierarchy shared by the multicall batcher
and the range scanner, plus an ErrorHandler that classifies provider errors
so callers can decide whether to shrink, back off or give up.
"""

import logging
import re
from typing import Optional, Dict, Any

logger = logging.getLogger(__name__)


class BatchError(Exception):
    """Base exception for batch operations."""
    pass


class TransportError(BatchError):
    """Raised when the RPC transport or provider fails."""

    def __init__(self, message: str, cause: Optional[BaseException] = None):
        super().__init__(message)
        self.cause = cause


class RateLimitError(TransportError):
    """Raised when rate limit is hit."""

    def __init__(self, message: str, retry_after: Optional[float] = None):
        super().__init__(message)
        self.retry_after = retry_after


class ContractError(BatchError):
    """Raised when a call result cannot be decoded."""
    pass


class ValidationError(BatchError):
    """Raised when input validation fails."""
    pass


# Substrings providers use when a log query covers too many blocks or results
_RANGE_KEYWORDS = (
    'block range',
    'range too large',
    'range is too large',
    'more than',
    'too many results',
    'query returned',
    'limit exceeded',
    'response size',
    'log response',
    'exceed maximum',
)
_AUTH_KEYWORDS = ('unauthorized', 'forbidden', 'api key', 'apikey')
_RATE_LIMIT_KEYWORDS = ('rate limit', 'too many requests')

# Status codes only count as whole words, never inside block numbers
_AUTH_STATUS = re.compile(r'\b40[13]\b')
_RATE_LIMIT_STATUS = re.compile(r'\b429\b')
_BAD_REQUEST_STATUS = re.compile(r'\b400\b')


class ErrorHandler:
    """
    Centralized error classification for RPC failures.

    Providers rarely return structured codes for "range too large", so
    classification works off the lowercased message text.
    """

    def __init__(self, logger: Optional[logging.Logger] = None):
        self.logger = logger or logging.getLogger(__name__)

    def classify_error(self, error: Exception) -> str:
        """
        Classify an error into a category for appropriate handling.

        Args:
            error: Exception to classify

        Returns:
            One of 'rate_limit', 'range', 'auth', 'network', 'contract',
            'validation' or 'unknown'
        """
        if isinstance(error, RateLimitError):
            return 'rate_limit'

        error_str = str(error).lower()

        # Checked before 'range': "too many requests" must not read as "too many results"
        if any(keyword in error_str for keyword in _RATE_LIMIT_KEYWORDS) or _RATE_LIMIT_STATUS.search(error_str):
            return 'rate_limit'

        if any(keyword in error_str for keyword in _RANGE_KEYWORDS):
            return 'range'

        if any(keyword in error_str for keyword in _AUTH_KEYWORDS) or _AUTH_STATUS.search(error_str):
            return 'auth'

        if any(keyword in error_str for keyword in ['connection', 'timeout', 'timed out', 'network', 'dns']):
            return 'network'

        if any(keyword in error_str for keyword in ['revert', 'execution reverted', 'out of gas']):
            return 'contract'

        if any(keyword in error_str for keyword in ['invalid', 'bad request']) or _BAD_REQUEST_STATUS.search(error_str):
            return 'validation'

        return 'unknown'

    def is_fatal_for_scan(self, error: Exception) -> bool:
        """Errors that a smaller block range cannot fix."""
        return self.classify_error(error) == 'auth'

    def get_retry_delay(self, error: Exception, attempt: int) -> float:
        """
        Calculate appropriate retry delay based on error type and attempt.

        Args:
            error: Exception that occurred
            attempt: Current attempt number (0-based)

        Returns:
            Delay in seconds before retry
        """
        retry_after = getattr(error, 'retry_after', None)
        if retry_after is not None:
            return float(retry_after)

        # Base exponential backoff
        base_delay = min(2 ** attempt, 60)  # Cap at 60 seconds

        if self.classify_error(error) == 'rate_limit':
            return base_delay * 2

        return base_delay

    def log_error(self, error: Exception, context: Dict[str, Any]):
        """
        Log error with appropriate level and context.

        Args:
            error: Exception to log
            context: Additional context for logging
        """
        error_category = self.classify_error(error)

        log_data = {
            'error_type': type(error).__name__,
            'error_category': error_category,
            'error_message': str(error),
            **context
        }

        if error_category == 'auth':
            self.logger.error(f"Provider rejected request: {error}", extra=log_data)
        elif error_category in ('rate_limit', 'range'):
            # Expected while probing provider limits
            self.logger.info(f"Provider limit hit ({error_category}): {error}", extra=log_data)
        else:
            self.logger.warning(f"Provider error ({error_category}): {error}", extra=log_data)

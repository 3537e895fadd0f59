"""Error handling utilities.

The synthesis engine itself never raises for out-of-range numbers (it clamps
or substitutes). Exceptions here cover caller contract violations, the spot
feed, and configuration.
"""

import time
from typing import TypeVar, Callable, Type, Tuple, TYPE_CHECKING
from functools import wraps
import logging

if TYPE_CHECKING:
    from ..models.quote import OptionQuote

logger = logging.getLogger("chain_synth.error_handling")

T = TypeVar('T')


def retry_with_backoff(
    max_retries: int = 2,
    backoff_factor: float = 0.8,
    exceptions: Tuple[Type[Exception], ...] = (Exception,),
    logger_func: Callable[[str], None] | None = None
):
    """Decorator to retry function with exponential backoff.

    Args:
        max_retries: Maximum number of attempts (including the first one)
        backoff_factor: Base wait in seconds (wait time = backoff_factor * 2 ** attempt)
        exceptions: Tuple of exception types to catch and retry
        logger_func: Optional logging function (defaults to logger.warning)

    Returns:
        Decorated function with retry logic

    Example:
        >>> @retry_with_backoff(max_retries=2, exceptions=(SpotFeedError,))
        >>> def fetch_markets():
        >>>     return requests.get(url, timeout=8.0)

    Raises:
        The original exception if all retries are exhausted
    """
    log_func = logger_func or logger.warning

    def decorator(func: Callable[..., T]) -> Callable[..., T]:
        @wraps(func)
        def wrapper(*args, **kwargs) -> T:
            for attempt in range(max_retries):
                try:
                    return func(*args, **kwargs)
                except exceptions as e:
                    if attempt == max_retries - 1:
                        logger.error(
                            f"Function {func.__name__} failed after {max_retries} attempts: {e}"
                        )
                        raise

                    wait_time = backoff_factor * (2 ** attempt)
                    log_func(
                        f"Attempt {attempt + 1}/{max_retries} failed for {func.__name__}: {e}. "
                        f"Retrying in {wait_time:.1f}s..."
                    )
                    time.sleep(wait_time)

            raise RuntimeError(f"Unexpected state in retry logic for {func.__name__}")

        return wrapper
    return decorator


def validate_quote(quote: "OptionQuote") -> Tuple[bool, str]:
    """Check a synthesized quote against the chain invariants.

    Args:
        quote: OptionQuote to check

    Returns:
        Tuple of (is_valid, error_message)

    Example:
        >>> is_valid, error = validate_quote(row.call)
        >>> if not is_valid:
        >>>     logger.error("Bad quote at strike %s: %s", row.strike, error)
    """
    if quote.bid <= 0:
        return False, f"Non-positive bid: {quote.bid}"

    if quote.bid > quote.ask:
        return False, f"Bid {quote.bid} > Ask {quote.ask} (crossed market)"

    if not 35.0 <= quote.iv <= 95.0:
        return False, f"IV {quote.iv} outside [35, 95]"

    if not 0.05 <= quote.delta <= 0.95:
        return False, f"Delta {quote.delta} outside [0.05, 0.95]"

    if quote.volume < 0 or quote.open_interest < 0:
        return False, f"Negative volume/open interest: {quote.volume}/{quote.open_interest}"

    return True, ""


class ChainSynthError(Exception):
    """Base exception for engine errors."""
    pass


class OrderValidationError(ValueError, ChainSynthError):
    """Raised when an order names an unknown side, order side or order type.

    Inherits from ValueError so callers treating it as bad input keep working.
    """
    pass


class SpotFeedError(ChainSynthError):
    """Raised when the spot price provider returns an unusable response."""
    pass


class ConfigurationError(ChainSynthError):
    """Raised when configuration is invalid."""
    pass

"""
Retry utilities with exponential backoff.
"""

import asyncio
from dataclasses import dataclass
from typing import Any, Awaitable, Callable, Optional, Tuple, Type, TypeVar
import logging

logger = logging.getLogger(__name__)

T = TypeVar("T")

Sleep = Callable[[float], Awaitable[Any]]


@dataclass
class RetryConfig:
    """
    Configuration for retry behavior.
    
    Attributes:
        max_attempts: Maximum number of attempts (1 = no retries)
        initial_delay_ms: Delay before the first retry
        max_delay_ms: Maximum delay between retries
        backoff_multiplier: Multiplier for exponential backoff
        retry_on: Exception types to retry on
        on_retry: Callback function called on each retry
    """
    max_attempts: int = 3
    initial_delay_ms: float = 1000
    max_delay_ms: float = 30000
    backoff_multiplier: float = 2.0
    retry_on: Tuple[Type[BaseException], ...] = (Exception,)
    on_retry: Optional[Callable[[int, BaseException], None]] = None


async def retry_async(
    func: Callable[..., Awaitable[T]],
    config: RetryConfig,
    *args: Any,
    sleep: Sleep = asyncio.sleep,
    **kwargs: Any,
) -> T:
    """
    Execute an async function with retry logic.
    
    Args:
        func: Async function to execute
        config: Retry configuration
        *args: Function arguments
        sleep: Awaitable sleep used between attempts (seconds)
        **kwargs: Function keyword arguments
        
    Returns:
        Function result
        
    Raises:
        The last exception if all attempts fail. Exceptions not listed in
        ``config.retry_on`` propagate immediately.
    """
    last_exception: Optional[BaseException] = None
    delay_ms = config.initial_delay_ms
    
    for attempt in range(max(1, config.max_attempts)):
        try:
            return await func(*args, **kwargs)
        except config.retry_on as e:
            last_exception = e
            
            if attempt == config.max_attempts - 1:
                break
            
            logger.warning(
                f"Attempt {attempt + 1}/{config.max_attempts} failed: {e}. "
                f"Retrying in {delay_ms:.0f}ms..."
            )
            
            if config.on_retry:
                config.on_retry(attempt + 1, e)
            
            await sleep(delay_ms / 1000)
            
            delay_ms = min(
                delay_ms * config.backoff_multiplier,
                config.max_delay_ms,
            )
    
    raise last_exception  # type: ignore[misc]

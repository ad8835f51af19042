"""
Bounded retry with a fresh resource per attempt.
"""

import time
from typing import Any, Callable, Optional, Tuple, Type

from .config import Config


class RetryPolicy:
    """
    Retry an operation a fixed number of times.

    Every attempt asks ``resource_factory`` for a new resource (a filename,
    for saving) and hands it to the operation. Resources from failed attempts
    are passed to ``on_failure`` and never reused.
    """

    def __init__(self, max_attempts: Optional[int] = None, delay: Optional[float] = None,
                 backoff: Optional[float] = None,
                 retry_on: Tuple[Type[BaseException], ...] = (Exception,),
                 sleep: Callable[[float], None] = time.sleep):
        self.max_attempts = Config.SAVE_RETRY_ATTEMPTS if max_attempts is None else max_attempts
        self.delay = Config.SAVE_RETRY_DELAY if delay is None else delay
        self.backoff = Config.SAVE_RETRY_BACKOFF if backoff is None else backoff
        self.retry_on = retry_on
        self.sleep = sleep

        if self.max_attempts < 1:
            raise ValueError(f"max_attempts must be at least 1, got {self.max_attempts}")
        if self.delay < 0:
            raise ValueError(f"delay must not be negative, got {self.delay}")

    def run(self, operation: Callable[[Any], Any], resource_factory: Callable[[], Any],
            on_failure: Optional[Callable[[int, Any, BaseException], None]] = None) -> Tuple[Any, Any]:
        """
        Run ``operation`` until it succeeds or the attempts are used up.

        Args:
            operation: Called with the resource of the current attempt
            resource_factory: Called once per attempt to produce a fresh resource
            on_failure: Called with (attempt, resource, error) after each failed attempt

        Returns:
            Tuple of (resource, result) of the successful attempt

        Raises:
            The error of the last attempt once all attempts failed.
        """
        delay = self.delay
        attempt = 1
        while True:
            resource = resource_factory()
            try:
                return resource, operation(resource)
            except self.retry_on as e:
                if on_failure is not None:
                    on_failure(attempt, resource, e)
                if attempt >= self.max_attempts:
                    raise
            attempt += 1
            if delay > 0:
                self.sleep(delay)
                delay *= self.backoff

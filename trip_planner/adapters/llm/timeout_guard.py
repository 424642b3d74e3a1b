"""Hard timeout wrapper for language model adapters.

Some clients ignore the ``timeout`` argument or block in ways their own
timeouts do not cover. This wrapper runs the call on a worker thread and
stops waiting once the bound elapses. The worker is abandoned, not
killed; its eventual result is discarded.

Each wrapper owns one pool of ``max_workers`` threads, so abandoned calls
never hold more than that many threads. While every worker is stuck, new
calls wait in the pool queue and still time out at their bound.
"""

from __future__ import annotations

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from concurrent.futures import TimeoutError as FutureTimeoutError
from dataclasses import dataclass, field
from typing import Optional

from ...domain.errors import LanguageModelError, LanguageModelTimeoutError
from ...ports.llm import LanguageModelPort

DEFAULT_MAX_WORKERS = 4


@dataclass
class TimeoutBoundedLanguageModel:
    """Wraps a LanguageModelPort and enforces a per-call time bound.

    Attributes:
        inner: The wrapped generator
        default_timeout_seconds: Bound used when a call passes no timeout
        max_workers: Size of the worker pool shared by all calls
    """

    inner: LanguageModelPort
    default_timeout_seconds: Optional[float] = None
    max_workers: int = DEFAULT_MAX_WORKERS

    _executor: Optional[ThreadPoolExecutor] = field(default=None, init=False, repr=False)
    _closed: bool = field(default=False, init=False, repr=False)
    _lock: threading.Lock = field(default_factory=threading.Lock, init=False, repr=False)
    _logger: logging.Logger = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._logger = logging.getLogger(__name__)

    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._closed:
                raise LanguageModelError(
                    "Language model wrapper is closed",
                    provider=type(self.inner).__name__,
                )
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers, thread_name_prefix="llm-call"
                )
            return self._executor

    def generate(self, prompt: str, *, timeout: Optional[float] = None) -> str:
        """Call the inner generator, giving up after the bound.

        Raises:
            LanguageModelTimeoutError: If the bound elapses first.
            LanguageModelError: Whatever the inner generator raises, or if
                the wrapper has been closed.
        """
        bound = timeout if timeout is not None else self.default_timeout_seconds
        if bound is None:
            return self.inner.generate(prompt)

        future = self._get_executor().submit(self.inner.generate, prompt, timeout=bound)
        try:
            return future.result(timeout=bound)
        except FutureTimeoutError as e:
            # Drops the call if it is still queued behind stuck workers.
            future.cancel()
            self._logger.warning(
                "Language model call exceeded its bound",
                extra={
                    "timeout": bound,
                    "inner": type(self.inner).__name__,
                },
            )
            raise LanguageModelTimeoutError(
                f"Language model call exceeded {bound:.1f}s",
                cause=e,
                provider=type(self.inner).__name__,
                timeout_seconds=bound,
            )

    def close(self) -> None:
        """Release the worker pool without waiting for abandoned calls."""
        with self._lock:
            self._closed = True
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=False, cancel_futures=True)

"""Bounded worker pool for CPU-bound credential work.

bcrypt hashing blocks a thread for the whole cost-factor computation, so it
never runs on the event loop. The pool is sized to the available cores; work
beyond that queues instead of oversubscribing the CPU.
"""

import asyncio
import threading
from concurrent.futures import ThreadPoolExecutor
from functools import partial
from typing import Any, Callable, Optional, TypeVar

from tresor.infrastructure.logging import get_logger

logger = get_logger(__name__)

T = TypeVar("T")


class CredentialExecutor:
    """Runs blocking hash/verify calls on a fixed-size thread pool"""
    
    def __init__(self, max_workers: int):
        if max_workers < 1:
            raise ValueError("max_workers must be at least 1")
        self.max_workers = max_workers
        self._executor: Optional[ThreadPoolExecutor] = None
        self._lock = threading.Lock()
    
    def _get_executor(self) -> ThreadPoolExecutor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self.max_workers,
                    thread_name_prefix="tresor-credential"
                )
                logger.info("credential_pool_started", max_workers=self.max_workers)
            return self._executor
    
    async def run(self, func: Callable[..., T], *args: Any, **kwargs: Any) -> T:
        """Run func(*args, **kwargs) on the pool and await its result"""
        loop = asyncio.get_running_loop()
        call = partial(func, *args, **kwargs)
        return await loop.run_in_executor(self._get_executor(), call)
    
    def shutdown(self, wait: bool = True) -> None:
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            # Running hashes cannot be interrupted, only queued ones are cancelled
            executor.shutdown(wait=wait, cancel_futures=True)
            logger.info("credential_pool_stopped")
    
    def __enter__(self) -> "CredentialExecutor":
        return self
    
    def __exit__(self, exc_type, exc_val, exc_tb) -> None:
        self.shutdown()

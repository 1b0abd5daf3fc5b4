"""
service.py - SecurePass, the object applications hold on to.

Responsibilities:
- Own one HashingConfiguration and let callers replace its costs safely
- Hash and verify passwords either on the caller's thread or on a worker pool
- Expose the one-time auth helpers next to the password API

Every hash/verify call takes a snapshot of the configuration when it starts.
A cost change made while calls are in flight only affects calls started later.
The worker and asyncio variants run the exact same functions from ``auth`` as
the blocking ones, after the same precondition checks on the caller's thread.
"""

from __future__ import annotations

import asyncio
import logging
import threading
from concurrent.futures import Executor, Future, ThreadPoolExecutor
from typing import Optional

from . import auth, onetimeauth, tokens
from .auth import Password, VerificationResult
from .config import HashingConfiguration
from .errors import ConfigurationError

logger = logging.getLogger(__name__)


class SecurePass:
    def __init__(
        self,
        config: Optional[HashingConfiguration] = None,
        *,
        executor: Optional[Executor] = None,
        max_workers: Optional[int] = None,
    ) -> None:
        """
        Args:
            config: cost parameters. Defaults to the interactive preset.
            executor: pool used by the non-blocking calls. If None, a thread
                pool is created on first use and owned by this instance.
            max_workers: size of the owned pool (ignored with ``executor``).
        """
        self._lock = threading.Lock()
        self.config = HashingConfiguration.create() if config is None else config
        self._executor = executor
        self._owns_executor = executor is None
        self._max_workers = max_workers

    # -- configuration -------------------------------------------------------

    @property
    def config(self) -> HashingConfiguration:
        return self._config

    @config.setter
    def config(self, value: HashingConfiguration) -> None:
        if not isinstance(value, HashingConfiguration):
            raise ConfigurationError(f"expected a HashingConfiguration, got {type(value).__name__}")
        with self._lock:
            self._config = value

    @property
    def memory_cost(self) -> int:
        return self._config.memory_cost

    @memory_cost.setter
    def memory_cost(self, value: int) -> None:
        with self._lock:
            self._config = self._config.with_memory_cost(value)
        logger.debug("memory cost set to %d", value)

    @property
    def ops_cost(self) -> int:
        return self._config.ops_cost

    @ops_cost.setter
    def ops_cost(self, value: int) -> None:
        with self._lock:
            self._config = self._config.with_ops_cost(value)
        logger.debug("operations cost set to %d", value)

    # -- blocking ------------------------------------------------------------

    def hash_password(self, password: Password) -> bytes:
        """Hash ``password`` on the calling thread."""
        return auth.hash_password(password, self._config)

    def verify_hash(self, password: Password, hash: bytes) -> VerificationResult:
        """Verify ``password`` against ``hash`` on the calling thread."""
        return auth.verify_hash(password, hash, self._config)

    # -- worker pool ---------------------------------------------------------

    def _pool(self) -> Executor:
        with self._lock:
            if self._executor is None:
                self._executor = ThreadPoolExecutor(
                    max_workers=self._max_workers, thread_name_prefix="securepass"
                )
            return self._executor

    def submit_hash(self, password: Password) -> "Future[bytes]":
        """
        Hash ``password`` on the worker pool.
        Raises ValidationError immediately if the password length is out of bounds.
        """
        password = auth.check_password(password)
        return self._pool().submit(auth.hash_password, password, self._config)

    def submit_verify(self, password: Password, hash: bytes) -> "Future[VerificationResult]":
        """
        Verify on the worker pool. The future resolves to exactly one result.
        Raises ValidationError immediately for out-of-bounds password or hash lengths.
        """
        password = auth.check_password(password)
        hash = auth.check_hash(hash)
        return self._pool().submit(auth.verify_hash, password, hash, self._config)

    async def hash_password_async(self, password: Password) -> bytes:
        return await asyncio.wrap_future(self.submit_hash(password))

    async def verify_hash_async(self, password: Password, hash: bytes) -> VerificationResult:
        return await asyncio.wrap_future(self.submit_verify(password, hash))

    def close(self) -> None:
        """Shut down the pool if this instance created it."""
        if not self._owns_executor:
            return
        with self._lock:
            executor, self._executor = self._executor, None
        if executor is not None:
            executor.shutdown(wait=True)

    def __enter__(self) -> "SecurePass":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    # -- one-time auth -------------------------------------------------------

    generate_one_time_auth = staticmethod(onetimeauth.generate_one_time_auth)
    verify_one_time_auth = staticmethod(onetimeauth.verify_one_time_auth)
    generate_one_time_auth_code = staticmethod(tokens.generate_one_time_auth_code)
    verify_one_time_auth_code = staticmethod(tokens.verify_one_time_auth_code)

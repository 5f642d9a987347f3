# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_attestation

"""
Coreason Attestation Services.

This module provides the Async-Native and Sync-Facade service classes for quote verification.
"""

from enum import Enum
from threading import Lock
from typing import Any, List, Optional, Sequence

import anyio

from coreason_attestation.dcap.factory import get_quote_verifier
from coreason_attestation.dcap.interfaces import QuoteVerifier
from coreason_attestation.quote import Clock, Quote, system_clock
from coreason_attestation.schemas import Verdict
from coreason_attestation.utils.logger import logger


class ServiceStatus(str, Enum):
    INITIALIZING = "INITIALIZING"
    READY = "READY"
    ERROR = "ERROR"


class QuoteVerificationServiceAsync:
    """
    Async-Native Quote Verification Service.

    The verifier call blocks, so every verification runs in a worker thread.
    """

    def __init__(self, verifier: Optional[QuoteVerifier] = None, clock: Optional[Clock] = None) -> None:
        """
        Initialize the Async Service.

        Args:
            verifier (Optional[QuoteVerifier]): Verifier to use. Defaults to the environment's verifier.
            clock (Optional[Clock]): Time source for expiration checks. Defaults to the system clock.
        """
        self.verifier = verifier or get_quote_verifier()
        self.clock = clock or system_clock

    async def __aenter__(self) -> "QuoteVerificationServiceAsync":
        return self

    async def __aexit__(self, exc_type: Any, exc_val: Any, exc_tb: Any) -> None:
        pass

    def _verify_sync(self, quote: Quote, evaluation_time: Optional[int]) -> Verdict:
        if evaluation_time is None:
            return quote.verify(self.verifier, self.clock)
        return quote.verify(self.verifier, lambda: evaluation_time)

    async def verify(self, quote: Quote, evaluation_time: Optional[int] = None) -> Verdict:
        """
        Verify one quote.

        Args:
            quote (Quote): The evidence to verify.
            evaluation_time (Optional[int]): Fixed evaluation time; the service clock is used when omitted.
        """
        return await anyio.to_thread.run_sync(self._verify_sync, quote, evaluation_time)

    async def verify_batch(self, quotes: Sequence[Quote], evaluation_time: Optional[int] = None) -> List[Verdict]:
        """
        Verify several quotes concurrently.

        Each verification is independent; verdicts are returned in input order.
        """
        results: List[Optional[Verdict]] = [None] * len(quotes)

        async def _run(index: int, quote: Quote) -> None:
            results[index] = await self.verify(quote, evaluation_time)

        async with anyio.create_task_group() as tg:
            for index, quote in enumerate(quotes):
                tg.start_soon(_run, index, quote)

        return [verdict for verdict in results if verdict is not None]


class QuoteVerificationService:
    """
    Sync Facade for Quote Verification Service.

    Wraps QuoteVerificationServiceAsync to provide a synchronous interface.
    A process-wide instance is available through ``get_instance``. If the verifier
    cannot be created the instance is kept in the ERROR state, so health checks can
    report it; entering it raises.
    """

    _instance: Optional["QuoteVerificationService"] = None
    _lock = Lock()

    def __init__(self, verifier: Optional[QuoteVerifier] = None, clock: Optional[Clock] = None) -> None:
        self.status = ServiceStatus.INITIALIZING
        self.error: Optional[Exception] = None
        self._async: Optional[QuoteVerificationServiceAsync] = None
        self._portal: Optional[anyio.from_thread.BlockingPortal] = None
        self._portal_cm: Any = None
        self._ref_count = 0
        try:
            self._async = QuoteVerificationServiceAsync(verifier, clock)
        except Exception as e:
            logger.critical(f"Quote verifier unavailable: {e}")
            self.status = ServiceStatus.ERROR
            self.error = e

    @classmethod
    def get_instance(cls) -> "QuoteVerificationService":
        with cls._lock:
            if cls._instance is None:
                cls._instance = cls()
            return cls._instance

    @property
    def verifier_name(self) -> str:
        if self._async is None:
            return "unavailable"
        return type(self._async.verifier).__name__

    def _service(self) -> QuoteVerificationServiceAsync:
        if self._async is None:
            raise RuntimeError(f"Quote verifier unavailable: {self.error}") from self.error
        return self._async

    def __enter__(self) -> "QuoteVerificationService":
        service = self._service()
        # The singleton may be entered by several owners (e.g. API lifespan and CLI).
        with self._lock:
            self._ref_count += 1
            if self._portal is None:
                self._portal_cm = anyio.from_thread.start_blocking_portal()
                self._portal = self._portal_cm.__enter__()
                self._portal.call(service.__aenter__)
                self.status = ServiceStatus.READY
                logger.info(f"Quote verification service ready ({self.verifier_name}).")
        return self

    def __exit__(self, *args: Any) -> None:
        with self._lock:
            self._ref_count = max(self._ref_count - 1, 0)
            if self._portal and self._ref_count == 0:
                try:
                    self._portal.call(self._service().__aexit__, *args)
                finally:
                    if self._portal_cm:
                        self._portal_cm.__exit__(None, None, None)
                    self._portal = None
                    self._portal_cm = None
                    self.status = ServiceStatus.INITIALIZING

    def verify(self, quote: Quote, evaluation_time: Optional[int] = None) -> Verdict:
        if not self._portal:
            raise RuntimeError("Service used outside of context manager")
        return self._portal.call(self._service().verify, quote, evaluation_time)  # type: ignore[no-any-return]

    def verify_batch(self, quotes: Sequence[Quote], evaluation_time: Optional[int] = None) -> List[Verdict]:
        if not self._portal:
            raise RuntimeError("Service used outside of context manager")
        return self._portal.call(self._service().verify_batch, quotes, evaluation_time)  # type: ignore[no-any-return]

from threading import Lock
from typing import Callable, Generator

import pytest


@pytest.fixture(autouse=True)
def reset_service_singleton() -> Generator[None, None, None]:
    """
    Reset the QuoteVerificationService singleton before and after each test.
    The service is shared across the process, so a verifier from one test must not leak into the next.
    """
    from coreason_attestation.services import QuoteVerificationService

    def _teardown() -> None:
        instance = QuoteVerificationService._instance
        if instance:
            if instance._portal:
                instance._ref_count = 1
                instance.__exit__(None, None, None)
            QuoteVerificationService._instance = None

    _teardown()
    QuoteVerificationService._lock = Lock()

    yield

    _teardown()


@pytest.fixture
def well_formed_quote() -> bytes:
    """A quote the simulation verifier accepts: version 3 header, padded to 1024 bytes."""
    return (3).to_bytes(2, "little") + bytes(1022)


@pytest.fixture
def fixed_clock() -> Callable[[], int]:
    return lambda: 1_700_000_000

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
Quote evidence container and verification entry point.
"""

import time
from typing import Callable, Optional

from coreason_attestation.adjudication import adjudicate
from coreason_attestation.dcap.factory import get_quote_verifier
from coreason_attestation.dcap.interfaces import QuoteVerifier
from coreason_attestation.schemas import Ok, Verdict
from coreason_attestation.utils.logger import logger

Clock = Callable[[], int]


def system_clock() -> int:
    """Current wall-clock time in whole seconds since the Unix epoch."""
    return int(time.time())


class Quote:
    """
    Raw attestation evidence (an SGX ECDSA quote).

    The bytes are opaque here; format checks belong to the verifier.
    """

    __slots__ = ("_data",)

    def __init__(self, data: bytes) -> None:
        self._data = bytes(data)

    @property
    def data(self) -> bytes:
        return self._data

    def __bytes__(self) -> bytes:
        return self._data

    def __len__(self) -> int:
        return len(self._data)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Quote):
            return NotImplemented
        return self._data == other._data

    def __hash__(self) -> int:
        return hash(self._data)

    def __repr__(self) -> str:
        return f"Quote(<{len(self._data)} bytes>)"

    def verify(self, verifier: Optional[QuoteVerifier] = None, clock: Optional[Clock] = None) -> Verdict:
        """
        Verify the quote and adjudicate the verifier's outputs into a single verdict.

        Args:
            verifier (Optional[QuoteVerifier]): Verifier to use. Defaults to ``get_quote_verifier()``.
            clock (Optional[Clock]): Time source for the expiration check. Defaults to the system clock.

        Returns:
            Verdict: The adjudicated outcome. Failures are returned, not raised.
        """
        verifier = verifier or get_quote_verifier()
        evaluation_time = (clock or system_clock)()

        output = verifier.verify_quote(self._data, evaluation_time)
        verdict = adjudicate(output.call_status, output.verification_status, output.expiration_status)

        if isinstance(verdict, Ok):
            logger.info(f"Quote verified ({len(self._data)} bytes) at {evaluation_time}: {verdict.kind}")
        else:
            logger.warning(f"Quote verification did not succeed at {evaluation_time}: {verdict!r}")
        return verdict

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
Simulation Quote Verifier.

Implementation of QuoteVerifier for development and testing environments where
the DCAP libraries are unavailable.
"""

from typing import Optional

from coreason_attestation.enums import Quote3Error, QvResult
from coreason_attestation.dcap.interfaces import QuoteVerifier
from coreason_attestation.schemas import VerifierOutput
from coreason_attestation.utils.logger import logger

# Smallest quote the DCAP library accepts (header + report body + signature length field).
QUOTE_MIN_SIZE = 1020
SUPPORTED_QUOTE_VERSIONS = (3, 4)


class SimulationQuoteVerifier(QuoteVerifier):
    """
    Simulation verifier for development and testing.

    Rejects quotes that are too short or carry an unsupported version, as the real
    library does, and otherwise reports the configured outcome.
    WARNING: DO NOT USE IN PRODUCTION.

    Args:
        verification_status (int): Status reported for well-formed quotes.
        expiration_status (int): Expiration flag reported for well-formed quotes.
        collateral_expires_at (Optional[int]): If set, the flag is raised whenever the
            evaluation time is later than this timestamp.
    """

    def __init__(
        self,
        verification_status: int = QvResult.OK,
        expiration_status: int = 0,
        collateral_expires_at: Optional[int] = None,
    ) -> None:
        self.verification_status = verification_status
        self.expiration_status = expiration_status
        self.collateral_expires_at = collateral_expires_at

    def verify_quote(self, quote: bytes, evaluation_time: int) -> VerifierOutput:
        logger.warning("Performing SIMULATED quote verification. Do not use in production!")

        version = int.from_bytes(quote[:2], "little")
        if len(quote) < QUOTE_MIN_SIZE or version not in SUPPORTED_QUOTE_VERSIONS:
            return VerifierOutput(Quote3Error.SGX_QL_QUOTE_FORMAT_UNSUPPORTED, QvResult.UNSPECIFIED, 1)

        expiration_status = self.expiration_status
        if self.collateral_expires_at is not None and evaluation_time > self.collateral_expires_at:
            expiration_status = 1

        return VerifierOutput(Quote3Error.SGX_QL_SUCCESS, self.verification_status, expiration_status)

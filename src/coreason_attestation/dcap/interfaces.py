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
Quote Verifier Interfaces.

Defines the contract for the external evidence verifier.
"""

from abc import ABC, abstractmethod

from coreason_attestation.schemas import VerifierOutput


class QuoteVerifier(ABC):
    """
    Abstract Base Class for quote verifiers.

    A verifier performs one blocking, non-retried verification per call and
    returns the raw signals; it never interprets them.
    """

    @abstractmethod
    def verify_quote(self, quote: bytes, evaluation_time: int) -> VerifierOutput:
        """
        Verify a quote as of the given time.

        Args:
            quote (bytes): Raw quote bytes.
            evaluation_time (int): Seconds since the Unix epoch used for the collateral expiration check.

        Returns:
            VerifierOutput: Call status, verification status and expiration flag.
        """
        pass  # pragma: no cover

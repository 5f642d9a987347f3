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
Coreason Attestation Package.

Exposes quote verification, verdict adjudication and enclave identity types.
"""

from coreason_attestation.adjudication import adjudicate, classify
from coreason_attestation.identity import ConfigId, MrEnclave, MrSigner, constant_time_eq
from coreason_attestation.quote import Quote
from coreason_attestation.schemas import CallFailed, CollateralExpired, NonTerminal, Ok, Verdict
from coreason_attestation.services import QuoteVerificationService, QuoteVerificationServiceAsync

__all__ = [
    "CallFailed",
    "CollateralExpired",
    "ConfigId",
    "MrEnclave",
    "MrSigner",
    "NonTerminal",
    "Ok",
    "Quote",
    "QuoteVerificationService",
    "QuoteVerificationServiceAsync",
    "Verdict",
    "adjudicate",
    "classify",
    "constant_time_eq",
]

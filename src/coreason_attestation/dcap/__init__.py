# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_attestation

from coreason_attestation.dcap.factory import get_quote_verifier
from coreason_attestation.dcap.interfaces import QuoteVerifier
from coreason_attestation.dcap.real import DcapQuoteVerifier
from coreason_attestation.dcap.simulation import SimulationQuoteVerifier

__all__ = [
    "DcapQuoteVerifier",
    "QuoteVerifier",
    "SimulationQuoteVerifier",
    "get_quote_verifier",
]

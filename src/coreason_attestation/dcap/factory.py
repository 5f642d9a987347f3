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
Verifier Factory.

Provides the factory method to instantiate the correct QuoteVerifier
based on the execution environment (Simulation vs. DCAP library).
"""

import os

from coreason_attestation.dcap.interfaces import QuoteVerifier
from coreason_attestation.dcap.real import DcapQuoteVerifier
from coreason_attestation.dcap.simulation import SimulationQuoteVerifier
from coreason_attestation.utils.logger import logger


def is_simulation_mode() -> bool:
    return os.getenv("COREASON_ATTESTATION_SIMULATION", "false").lower() == "true"


def get_quote_verifier() -> QuoteVerifier:
    """
    Factory to return the appropriate QuoteVerifier.

    Controlled by 'COREASON_ATTESTATION_SIMULATION' environment variable.
    If 'true', returns a simulation verifier (for dev/test).
    Otherwise, returns the DCAP library binding.

    Returns:
        QuoteVerifier: An instance of SimulationQuoteVerifier or DcapQuoteVerifier.
    """
    if is_simulation_mode():
        logger.info("Initializing Simulation Quote Verifier.")
        return SimulationQuoteVerifier()
    else:
        logger.info("Initializing DCAP Quote Verifier.")
        return DcapQuoteVerifier()

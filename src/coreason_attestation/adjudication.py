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
Quote verification outcome adjudication.

``sgx_qv_verify_quote()`` reports its outcome through three separate outputs. They
have to be read in a fixed order to arrive at a single verdict:

1. the call status: anything but ``SGX_QL_SUCCESS`` is a failure, and the other
   two outputs may not even have been written;
2. the verification status, split into success, non-terminal and terminal
   values (the split is documented in the DCAP QuoteLib reference, not the header);
3. the collateral expiration flag, consulted only when the status is OK.
"""

from typing import FrozenSet

from coreason_attestation.enums import Quote3Error, QvResult
from coreason_attestation.schemas import (
    CallFailed,
    Classification,
    CollateralExpired,
    NonTerminal,
    NonTerminalResult,
    Ok,
    Success,
    TerminalResult,
    Verdict,
)

ADVISORY_STATUSES: FrozenSet[int] = frozenset(
    {
        QvResult.CONFIG_NEEDED,
        QvResult.OUT_OF_DATE,
        QvResult.OUT_OF_DATE_CONFIG_NEEDED,
        QvResult.SW_HARDENING_NEEDED,
        QvResult.CONFIG_AND_SW_HARDENING_NEEDED,
    }
)


def classify(status: int) -> Classification:
    """
    Partition a verification status into success, non-terminal or terminal.

    Any status not explicitly listed, including values unknown to ``QvResult``, is terminal.

    Args:
        status (int): The ``sgx_ql_qv_result_t`` value.

    Returns:
        Classification: ``Success``, ``NonTerminalResult`` or ``TerminalResult``.
    """
    if status == QvResult.OK:
        return Success()
    if status in ADVISORY_STATUSES:
        return NonTerminalResult(code=status)
    return TerminalResult(code=status)


def adjudicate(call_status: int, verification_status: int, expiration_status: int) -> Verdict:
    """
    Combine the outputs of ``sgx_qv_verify_quote()`` into one verdict.

    Args:
        call_status (int): The return value of the call (``quote3_error_t``).
        verification_status (int): The ``p_quote_verification_result`` output.
        expiration_status (int): The ``p_collateral_expiration_status`` output.

    Returns:
        Verdict: ``Ok``, ``CollateralExpired``, ``NonTerminal`` or ``CallFailed``.
    """
    if call_status != Quote3Error.SGX_QL_SUCCESS:
        return CallFailed(code=call_status)

    classification = classify(verification_status)
    if isinstance(classification, TerminalResult):
        return CallFailed(code=classification.code)
    if isinstance(classification, NonTerminalResult):
        # Expiration is not reported alongside an advisory status.
        return NonTerminal(code=classification.code)

    if expiration_status == 0:
        return Ok()
    return CollateralExpired()

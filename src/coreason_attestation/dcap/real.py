# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_attestation

import ctypes
import ctypes.util
import os
from typing import Any, Optional

from coreason_attestation.enums import QvResult
from coreason_attestation.dcap.interfaces import QuoteVerifier
from coreason_attestation.schemas import VerifierOutput
from coreason_attestation.utils.logger import logger

DEFAULT_LIBRARY = "libsgx_dcap_quoteverify.so.1"


class DcapQuoteVerifier(QuoteVerifier):
    """
    Verifier backed by the Intel SGX DCAP Quote Verification Library.

    Calls ``sgx_qv_verify_quote()`` without supplied collateral, so the library
    fetches it through the configured quote provider library.
    """

    def __init__(self, library: Optional[str] = None) -> None:
        logger.info("Initializing DCAP Quote Verifier. Loading verification library...")
        self.library_path = library or os.getenv("COREASON_DCAP_QVL_LIBRARY") or self._find_library()
        self._verify_fn = self._load(self.library_path)

    @staticmethod
    def _find_library() -> str:
        return ctypes.util.find_library("sgx_dcap_quoteverify") or DEFAULT_LIBRARY

    def _load(self, path: str) -> Any:
        try:
            lib = ctypes.CDLL(path)
            verify_fn = lib.sgx_qv_verify_quote
        except (OSError, AttributeError) as e:
            error_msg = (
                f"Unable to load sgx_qv_verify_quote from {path}! "
                "Install the Intel SGX DCAP Quote Verification Library, "
                "set COREASON_DCAP_QVL_LIBRARY, "
                "or use COREASON_ATTESTATION_SIMULATION=true."
            )
            logger.critical(error_msg)
            raise RuntimeError(error_msg) from e

        verify_fn.argtypes = [
            ctypes.POINTER(ctypes.c_uint8),  # p_quote
            ctypes.c_uint32,  # quote_size
            ctypes.c_void_p,  # p_quote_collateral
            ctypes.c_int64,  # expiration_check_date (time_t)
            ctypes.POINTER(ctypes.c_uint32),  # p_collateral_expiration_status
            ctypes.POINTER(ctypes.c_uint32),  # p_quote_verification_result
            ctypes.c_void_p,  # p_qve_report_info
            ctypes.c_uint32,  # supplemental_data_size
            ctypes.c_void_p,  # p_supplemental_data
        ]
        verify_fn.restype = ctypes.c_uint32
        logger.info(f"DCAP Quote Verification Library loaded: {path}")
        return verify_fn

    def verify_quote(self, quote: bytes, evaluation_time: int) -> VerifierOutput:
        """
        Run ``sgx_qv_verify_quote()`` on the quote.

        Output cells are allocated per call. They start as "expired" and
        ``UNSPECIFIED`` so a call that never writes them cannot look successful.
        """
        buffer = (ctypes.c_uint8 * len(quote)).from_buffer_copy(quote)
        expiration_status = ctypes.c_uint32(1)
        verification_result = ctypes.c_uint32(QvResult.UNSPECIFIED)

        call_status = self._verify_fn(
            buffer,
            len(quote),
            None,
            evaluation_time,
            ctypes.byref(expiration_status),
            ctypes.byref(verification_result),
            None,
            0,
            None,
        )
        return VerifierOutput(int(call_status), verification_result.value, expiration_status.value)

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
DCAP status enumerations.

Mirrors the ``quote3_error_t`` and ``sgx_ql_qv_result_t`` values from the
Intel SGX DCAP headers (``sgx_ql_lib_common.h`` / ``sgx_qve_header.h``).
"""

from enum import IntEnum


class Quote3Error(IntEnum):
    """
    Call-level status returned by ``sgx_qv_verify_quote()``.

    ``SGX_QL_SUCCESS`` means the call completed; the verification outcome is then
    reported separately through ``QvResult``.
    """

    SGX_QL_SUCCESS = 0x0000
    SGX_QL_ERROR_UNEXPECTED = 0xE001
    SGX_QL_ERROR_INVALID_PARAMETER = 0xE002
    SGX_QL_ERROR_OUT_OF_MEMORY = 0xE003
    SGX_QL_ERROR_ECDSA_ID_MISMATCH = 0xE004
    SGX_QL_PATHNAME_BUFFER_OVERFLOW_ERROR = 0xE005
    SGX_QL_FILE_ACCESS_ERROR = 0xE006
    SGX_QL_ERROR_STORED_KEY = 0xE007
    SGX_QL_ERROR_PUB_KEY_ID_MISMATCH = 0xE008
    SGX_QL_ERROR_INVALID_PCE_SIG_SCHEME = 0xE009
    SGX_QL_ATT_KEY_BLOB_ERROR = 0xE00A
    SGX_QL_UNSUPPORTED_ATT_KEY_ID = 0xE00B
    SGX_QL_UNSUPPORTED_LOADING_POLICY = 0xE00C
    SGX_QL_INTERFACE_UNAVAILABLE = 0xE00D
    SGX_QL_PLATFORM_LIB_UNAVAILABLE = 0xE00E
    SGX_QL_ATT_KEY_NOT_INITIALIZED = 0xE00F
    SGX_QL_ATT_KEY_CERT_DATA_INVALID = 0xE010
    SGX_QL_NO_PLATFORM_CERT_DATA = 0xE011
    SGX_QL_OUT_OF_EPC = 0xE012
    SGX_QL_ERROR_REPORT = 0xE013
    SGX_QL_ENCLAVE_LOST = 0xE014
    SGX_QL_INVALID_REPORT = 0xE015
    SGX_QL_ENCLAVE_LOAD_ERROR = 0xE016
    SGX_QL_UNABLE_TO_GENERATE_QE_REPORT = 0xE017
    SGX_QL_KEY_CERTIFCATION_ERROR = 0xE018
    SGX_QL_NETWORK_ERROR = 0xE019
    SGX_QL_MESSAGE_ERROR = 0xE01A
    SGX_QL_NO_QUOTE_COLLATERAL_DATA = 0xE01B
    SGX_QL_QUOTE_CERTIFICATION_DATA_UNSUPPORTED = 0xE01C
    SGX_QL_QUOTE_FORMAT_UNSUPPORTED = 0xE01D
    SGX_QL_UNABLE_TO_GENERATE_REPORT = 0xE01E
    SGX_QL_QE_REPORT_INVALID_SIGNATURE = 0xE01F
    SGX_QL_QE_REPORT_UNSUPPORTED_FORMAT = 0xE020
    SGX_QL_PCK_CERT_UNSUPPORTED_FORMAT = 0xE021
    SGX_QL_PCK_CERT_CHAIN_ERROR = 0xE022
    SGX_QL_TCBINFO_UNSUPPORTED_FORMAT = 0xE023
    SGX_QL_TCBINFO_MISMATCH = 0xE024
    SGX_QL_QEIDENTITY_UNSUPPORTED_FORMAT = 0xE025
    SGX_QL_QEIDENTITY_MISMATCH = 0xE026
    SGX_QL_TCB_OUT_OF_DATE = 0xE027
    SGX_QL_TCB_OUT_OF_DATE_CONFIGURATION_NEEDED = 0xE028
    SGX_QL_SGX_ENCLAVE_IDENTITY_OUT_OF_DATE = 0xE029
    SGX_QL_SGX_ENCLAVE_REPORT_ISVSVN_OUT_OF_DATE = 0xE02A
    SGX_QL_QE_IDENTITY_OUT_OF_DATE = 0xE02B
    SGX_QL_SGX_TCB_INFO_EXPIRED = 0xE02C
    SGX_QL_SGX_PCK_CERT_CHAIN_EXPIRED = 0xE02D
    SGX_QL_SGX_CRL_EXPIRED = 0xE02E
    SGX_QL_SGX_SIGNING_CERT_CHAIN_EXPIRED = 0xE02F
    SGX_QL_SGX_ENCLAVE_IDENTITY_EXPIRED = 0xE030
    SGX_QL_PCK_REVOKED = 0xE031
    SGX_QL_TCB_REVOKED = 0xE032
    SGX_QL_TCB_CONFIGURATION_NEEDED = 0xE033
    SGX_QL_UNABLE_TO_GET_COLLATERAL = 0xE034
    SGX_QL_ERROR_INVALID_PRIVILEGE = 0xE035
    SGX_QL_NO_QVE_IDENTITY_DATA = 0xE037
    SGX_QL_CRL_UNSUPPORTED_FORMAT = 0xE038
    SGX_QL_QEIDENTITY_CHAIN_ERROR = 0xE039
    SGX_QL_TCBINFO_CHAIN_ERROR = 0xE03A
    SGX_QL_ERROR_QVL_QVE_MISMATCH = 0xE03B
    SGX_QL_TCB_SW_HARDENING_NEEDED = 0xE03C
    SGX_QL_TCB_CONFIGURATION_AND_SW_HARDENING_NEEDED = 0xE03D
    SGX_QL_UNSUPPORTED_MODE = 0xE03E
    SGX_QL_NO_DEVICE = 0xE03F
    SGX_QL_SERVICE_UNAVAILABLE = 0xE040
    SGX_QL_NETWORK_FAILURE = 0xE041
    SGX_QL_SERVICE_TIMEOUT = 0xE042
    SGX_QL_ERROR_BUSY = 0xE043
    SGX_QL_UNKNOWN_MESSAGE_RESPONSE = 0xE044
    SGX_QL_PERSISTENT_STORAGE_ERROR = 0xE045
    SGX_QL_ERROR_MESSAGE_PARSING_ERROR = 0xE046
    SGX_QL_PLATFORM_UNKNOWN = 0xE047
    SGX_QL_UNKNOWN_API_VERSION = 0xE048
    SGX_QL_CERTS_UNAVAILABLE = 0xE049


class QvResult(IntEnum):
    """
    Quote verification result (``sgx_ql_qv_result_t``).

    Only meaningful when the verification call itself returned ``SGX_QL_SUCCESS``.
    """

    OK = 0x0000
    CONFIG_NEEDED = 0xA001
    OUT_OF_DATE = 0xA002
    OUT_OF_DATE_CONFIG_NEEDED = 0xA003
    INVALID_SIGNATURE = 0xA004
    REVOKED = 0xA005
    UNSPECIFIED = 0xA006
    SW_HARDENING_NEEDED = 0xA007
    CONFIG_AND_SW_HARDENING_NEEDED = 0xA008
    TD_RELAUNCH_ADVISED = 0xA009
    TD_RELAUNCH_ADVISED_CONFIG_NEEDED = 0xA00A


def describe_status(code: int) -> str:
    """
    Render a raw status code as its symbolic name, falling back to hex for unknown values.

    ``0`` resolves to ``SGX_QL_SUCCESS``; the two enumerations do not otherwise overlap.
    """
    for enum_type in (Quote3Error, QvResult):
        try:
            return enum_type(code).name
        except ValueError:
            continue
    return f"0x{code:04X}"

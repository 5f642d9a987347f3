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
Data schemas for quote verification.

Defines the raw verifier output, the classification of a verification status,
and the final verdict surfaced to policy consumers.
"""

from typing import Annotated, Literal, NamedTuple, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, computed_field

from coreason_attestation.enums import describe_status


class VerifierOutput(NamedTuple):
    """
    The three independent signals produced by one external verification call.

    Attributes:
        call_status (int): ``quote3_error_t`` returned by the call itself.
        verification_status (int): ``sgx_ql_qv_result_t`` written by the call.
        expiration_status (int): Collateral expiration flag; 0 means not expired.
    """

    call_status: int
    verification_status: int
    expiration_status: int


class _StatusCode(BaseModel):
    model_config = ConfigDict(frozen=True)

    code: int = Field(..., description="Raw DCAP status code")

    @computed_field  # type: ignore[prop-decorator]
    @property
    def status_name(self) -> str:
        return describe_status(self.code)


# --- Classification of a verification status ---


class Success(BaseModel):
    """Verification status is OK."""

    model_config = ConfigDict(frozen=True)

    kind: Literal["SUCCESS"] = "SUCCESS"


class NonTerminalResult(_StatusCode):
    """Evidence is valid but an advisory condition must be reviewed by policy."""

    kind: Literal["NON_TERMINAL"] = "NON_TERMINAL"


class TerminalResult(_StatusCode):
    """Evidence must not be trusted."""

    kind: Literal["TERMINAL"] = "TERMINAL"


Classification = Annotated[Union[Success, NonTerminalResult, TerminalResult], Field(discriminator="kind")]


# --- Verdict ---


class Ok(BaseModel):
    """
    Quote verified, status OK, collateral fresh.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["OK"] = "OK"


class CollateralExpired(BaseModel):
    """
    Quote verified with status OK, but the collateral used has expired.
    """

    model_config = ConfigDict(frozen=True)

    kind: Literal["COLLATERAL_EXPIRED"] = "COLLATERAL_EXPIRED"


class NonTerminal(_StatusCode):
    """
    Advisory verification status (e.g. SW_HARDENING_NEEDED) for the policy layer to judge.
    """

    kind: Literal["NON_TERMINAL"] = "NON_TERMINAL"


class CallFailed(_StatusCode):
    """
    The verification call failed, or the verification status is terminal.

    ``code`` is the call status in the first case and the verification status in the second.
    """

    kind: Literal["CALL_FAILED"] = "CALL_FAILED"


Verdict = Annotated[Union[Ok, CollateralExpired, NonTerminal, CallFailed], Field(discriminator="kind")]

verdict_adapter: TypeAdapter[Verdict] = TypeAdapter(Verdict)

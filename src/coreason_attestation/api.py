# Copyright (c) 2025 CoReason, Inc.
#
# This software is proprietary and dual-licensed.
# Licensed under the Prosperity Public License 3.0 (the "License").
# A copy of the license is available at https://prosperitylicense.com/versions/3.0.0
# For details, see the LICENSE file.
# Commercial use beyond a 30-day trial requires a separate license.
#
# Source Code: https://github.com/CoReason-AI/coreason_attestation

from contextlib import asynccontextmanager
from typing import AsyncGenerator, Optional

from fastapi import FastAPI, HTTPException
from pydantic import Base64Bytes, BaseModel, Field

from coreason_attestation.quote import Quote
from coreason_attestation.schemas import Ok, Verdict
from coreason_attestation.services import QuoteVerificationService, ServiceStatus
from coreason_attestation.utils.logger import logger


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """
    Manage the lifecycle of the Attestation API and Service.

    Opens the service singleton's blocking portal before requests are served. If
    the verifier could not be loaded the API still starts, so ``/health`` can
    report the ERROR state.
    """
    service = QuoteVerificationService.get_instance()

    if service.status == ServiceStatus.ERROR:
        logger.critical(f"Startup verifier error: {service.error}. Serving health checks only.")
        yield
        return

    service.__enter__()
    try:
        yield
    finally:
        logger.info("Shutting down Attestation API...")
        service.__exit__(None, None, None)


app = FastAPI(title="Coreason Attestation API", lifespan=lifespan)


class VerifyQuoteRequest(BaseModel):
    quote: Base64Bytes = Field(..., description="Base64-encoded SGX quote")
    evaluation_time: Optional[int] = Field(None, ge=0, description="Seconds since epoch; defaults to now")


class VerifyQuoteResponse(BaseModel):
    verdict: Verdict
    trusted: bool


class HealthResponse(BaseModel):
    status: ServiceStatus
    verifier: str


@app.get("/health", response_model=HealthResponse)  # type: ignore[misc]
async def get_health() -> HealthResponse:
    """
    Health check endpoint.

    Returns 200 OK only once the verifier is loaded and the service is ready.
    """
    service = QuoteVerificationService.get_instance()

    if service.status == ServiceStatus.ERROR:
        raise HTTPException(status_code=503, detail="Verifier in ERROR state")

    if service.status == ServiceStatus.INITIALIZING:
        raise HTTPException(status_code=503, detail="Verifier initializing")

    return HealthResponse(status=service.status, verifier=service.verifier_name)


@app.post("/quotes/verify", response_model=VerifyQuoteResponse)  # type: ignore[misc]
def verify_quote(request: VerifyQuoteRequest) -> VerifyQuoteResponse:
    """
    Verify a quote and return the adjudicated verdict.

    Verification outcomes are reported in the body with status 200; only
    service failures produce an error status.
    """
    service = QuoteVerificationService.get_instance()
    if service.status != ServiceStatus.READY:
        raise HTTPException(status_code=503, detail=f"Verifier not ready: {service.status.value}")

    try:
        verdict = service.verify(Quote(request.quote), request.evaluation_time)
    except Exception as e:
        logger.error(f"Quote verification failed: {e}")
        raise HTTPException(status_code=500, detail="Quote verification failed") from e

    return VerifyQuoteResponse(verdict=verdict, trusted=isinstance(verdict, Ok))

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
Entry point for the Coreason Attestation CLI.

Verifies a quote file from the command line, or serves the management API,
after enforcing the security policy (DCAP library vs. simulation).
"""

import argparse
import os
import sys
from pathlib import Path
from typing import Dict, Optional

import uvicorn

from coreason_attestation.quote import Quote
from coreason_attestation.schemas import Verdict, verdict_adapter
from coreason_attestation.services import QuoteVerificationService
from coreason_attestation.utils.logger import logger

EXIT_CODES: Dict[str, int] = {
    "OK": 0,
    "CALL_FAILED": 1,
    "COLLATERAL_EXPIRED": 3,
    "NON_TERMINAL": 4,
}


def apply_security_policy(simulation_flag: bool, insecure_flag: bool) -> None:
    """
    Configure the security mode for quote verification.

    Simulation mode is only honoured with an explicit --simulation or --insecure flag,
    so production verification cannot silently run against the simulation verifier.

    Args:
        simulation_flag (bool): True if --simulation was passed in CLI.
        insecure_flag (bool): True if --insecure was passed in CLI.

    Raises:
        RuntimeError: If simulation mode is requested via environment but the required CLI flag is missing.
    """
    env_simulation = os.environ.get("COREASON_ATTESTATION_SIMULATION", "false").lower() == "true"
    requested_simulation = simulation_flag or insecure_flag

    if requested_simulation:
        logger.warning("!!! RUNNING IN INSECURE SIMULATION MODE !!!")
        logger.warning("Quotes are NOT verified by the DCAP library via --simulation/--insecure flag.")
        logger.warning("Do NOT use this mode for access-control decisions.")
        os.environ["COREASON_ATTESTATION_SIMULATION"] = "true"
    else:
        if env_simulation:
            error_msg = (
                "Security Violation: COREASON_ATTESTATION_SIMULATION=true is set in the environment, "
                "but the required '--insecure' or '--simulation' CLI flag is missing. "
                "Refusing to verify in insecure mode without explicit CLI override."
            )
            logger.critical(error_msg)
            raise RuntimeError(error_msg)

        os.environ["COREASON_ATTESTATION_SIMULATION"] = "false"
        logger.info("Running in SECURE MODE. DCAP Quote Verification Library required.")


def run_verify(quote_file: str, evaluation_time: Optional[int]) -> Verdict:
    """Verify a quote file through the shared service and print the verdict as JSON."""
    quote = Quote(Path(quote_file).read_bytes())
    with QuoteVerificationService.get_instance() as service:
        verdict = service.verify(quote, evaluation_time)
    print(verdict_adapter.dump_json(verdict).decode())
    return verdict


def run_api_server(host: str, port: int) -> None:
    """Run the Management API server."""
    logger.info(f"Starting Management API on {host}:{port}")
    uvicorn.run("coreason_attestation.api:app", host=host, port=port, log_level="info")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description="Coreason Attestation")
    parser.add_argument(
        "--simulation",
        action="store_true",
        help="Use the simulation verifier (bypasses the DCAP library)",
    )
    parser.add_argument(
        "--insecure",
        action="store_true",
        help="Alias for --simulation",
    )
    subparsers = parser.add_subparsers(dest="command", required=True)

    verify_parser = subparsers.add_parser("verify", help="Verify a quote file")
    verify_parser.add_argument("quote_file", type=str, help="Path to a binary quote file")
    verify_parser.add_argument("--time", "-t", type=int, default=None, help="Evaluation time (seconds since epoch)")

    serve_parser = subparsers.add_parser("serve", help="Run the management API")
    # Constraint: loopback by default
    serve_parser.add_argument("--host", type=str, default="127.0.0.1", help="Bind address")
    serve_parser.add_argument("--port", "-p", type=int, default=8000, help="Bind port")
    return parser


def main(args: Optional[list[str]] = None) -> None:
    """
    Entry point for the Coreason Attestation CLI.

    Exits with 0 for an Ok verdict, 3 for expired collateral, 4 for non-terminal
    and 1 for failures (including start-up errors). 2 is left to argparse usage errors.

    Args:
        args (Optional[list[str]]): Command line arguments. Defaults to sys.argv[1:].
    """
    parser = build_parser()
    parsed_args = parser.parse_args(args)

    try:
        apply_security_policy(simulation_flag=parsed_args.simulation, insecure_flag=parsed_args.insecure)

        if parsed_args.command == "serve":
            run_api_server(parsed_args.host, parsed_args.port)
            return

        verdict = run_verify(parsed_args.quote_file, parsed_args.time)
    except Exception as e:
        logger.exception(f"Quote verification aborted: {e}")
        sys.exit(1)

    sys.exit(EXIT_CODES[verdict.kind])


if __name__ == "__main__":  # pragma: no cover
    main()  # pragma: no cover

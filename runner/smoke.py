#!/usr/bin/env python3
"""Smoke runner: probe a running bookserver end to end.

Steps:
- wait until the server answers
- run every route check for the chosen variant
- emit a compact summary and exit code
"""
from __future__ import annotations

import asyncio
import sys

import httpx

from runner.cli import parse_args
from runner.client import run_checks, wait_until_ready
from runner.logging_conf import get_logger, setup_logging
from runner.utils import expected_checks, summarize

logger = get_logger("runner")


async def run_smoke(
    *,
    base_url: str,
    variant: str = "books",
    timeout_s: float = 20.0,
    transport: httpx.AsyncBaseTransport | None = None,
) -> int:
    await wait_until_ready(base_url, timeout_s, transport=transport)
    results = await run_checks(base_url, expected_checks(variant), transport=transport)
    summary, exit_code = summarize(results)
    logger.info("runner.summary", extra=summary)
    return exit_code


def main(argv: list[str] | None = None) -> None:
    setup_logging()
    args = parse_args(sys.argv[1:] if argv is None else argv)
    code = asyncio.run(
        run_smoke(base_url=args.base_url, variant=args.variant, timeout_s=args.timeout)
    )
    raise SystemExit(code)


if __name__ == "__main__":
    main()

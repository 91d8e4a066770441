from __future__ import annotations

import asyncio
import time
from collections.abc import Iterable

import httpx
from pydantic import ValidationError

from bookserver.api.models import ErrorBody, MessageBody
from runner.logging_conf import get_logger
from runner.types import CheckResult, ReadinessError, RouteCheck

logger = get_logger("runner.client")


def _client(
    base_url: str, transport: httpx.AsyncBaseTransport | None, timeout: float
) -> httpx.AsyncClient:
    return httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)


async def wait_until_ready(
    base_url: str,
    timeout_s: float = 20.0,
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> None:
    """Hit "/" until the server answers or raise after a timeout.

    - Any non-5xx status counts as ready; "/" is 200 in every variant
    - Logs once when the server is confirmed up
    """
    deadline = time.monotonic() + timeout_s
    async with _client(base_url, transport, 5.0) as client:
        while time.monotonic() < deadline:
            try:
                r = await client.get("/")
                if r.status_code < 500:
                    logger.info("server.ready", extra={"event": "server_ready"})
                    return
            except httpx.TransportError:
                pass
            await asyncio.sleep(0.25)
    raise ReadinessError(f"{base_url} did not answer within {timeout_s}s")


def _check_body(check: RouteCheck, response: httpx.Response) -> str | None:
    """Return a mismatch description, or None when the body is as expected."""
    if isinstance(check.body, str):
        if response.text != check.body:
            return f"body {response.text!r} != {check.body!r}"
        return None

    model = ErrorBody if response.status_code == 404 else MessageBody
    try:
        parsed = model.model_validate_json(response.content)
    except ValidationError as e:
        return f"body does not match {model.__name__}: {e.error_count()} error(s)"
    if parsed.model_dump() != check.body:
        return f"body {parsed.model_dump()!r} != {check.body!r}"
    return None


async def run_check(client: httpx.AsyncClient, check: RouteCheck) -> CheckResult:
    """Send one request and compare status, content type and body."""
    start = time.perf_counter()
    try:
        r = await client.request(check.method, check.path)
    except httpx.HTTPError as e:
        elapsed_ms = (time.perf_counter() - start) * 1000.0
        logger.warning(
            "check.error",
            extra={"event": "check_error", "check": check.name, "error": str(e)},
        )
        return CheckResult(check=check, ok=False, elapsed_ms=elapsed_ms, detail=str(e))
    elapsed_ms = (time.perf_counter() - start) * 1000.0

    detail: str | None = None
    content_type = r.headers.get("content-type", "")
    if r.status_code != check.status:
        detail = f"status {r.status_code} != {check.status}"
    elif not content_type.startswith(check.content_type):
        detail = f"content-type {content_type!r} != {check.content_type!r}"
    else:
        detail = _check_body(check, r)

    return CheckResult(
        check=check,
        ok=detail is None,
        elapsed_ms=elapsed_ms,
        status=r.status_code,
        detail=detail,
    )


async def run_checks(
    base_url: str,
    checks: Iterable[RouteCheck],
    *,
    transport: httpx.AsyncBaseTransport | None = None,
) -> list[CheckResult]:
    """Run every check concurrently and return results in input order."""
    async with _client(base_url, transport, 10.0) as client:
        results = await asyncio.gather(*(run_check(client, c) for c in checks))
    logger.info(
        "checks.done",
        extra={
            "event": "checks_done",
            "total": len(results),
            "failed": sum(1 for r in results if not r.ok),
        },
    )
    return list(results)

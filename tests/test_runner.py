"""Smoke runner tests against an in-process app via httpx.ASGITransport."""

import asyncio

import httpx
import pytest

from bookserver.config import Settings
from bookserver.main import create_app
from runner.client import run_check, run_checks
from runner.smoke import run_smoke
from runner.types import CheckResult, RouteCheck, SmokeError
from runner.utils import expected_checks, percentile, summarize

BASE = "http://testserver"


def _transport(variant: str = "books") -> httpx.ASGITransport:
    return httpx.ASGITransport(app=create_app(Settings(variant=variant)))


def test_percentile_interpolates() -> None:
    assert percentile([], 0.95) == 0.0
    assert percentile([5.0], 0.95) == 5.0
    assert percentile([0.0, 10.0], 0.5) == pytest.approx(5.0)


def test_expected_checks_unknown_variant() -> None:
    with pytest.raises(SmokeError):
        expected_checks("movies")


def test_summarize_counts_failures() -> None:
    check = RouteCheck("GET", "/", 200, "application/json", {"message": "Welcome"})
    results = [
        CheckResult(check=check, ok=True, elapsed_ms=2.0, status=200),
        CheckResult(check=check, ok=False, elapsed_ms=4.0, status=404, detail="status 404 != 200"),
    ]

    summary, code = summarize(results)

    assert code == 1
    assert summary["passed"] == 1
    assert summary["failed"] == 1
    assert summary["failures"][0]["check"] == "GET /"
    assert summary["timings"]["max_ms"] == 4.0


def test_summarize_empty_is_failure() -> None:
    _, code = summarize([])

    assert code == 1


@pytest.mark.parametrize("variant", ["books", "hello"])
def test_all_checks_pass_against_matching_variant(variant: str) -> None:
    results = asyncio.run(run_checks(BASE, expected_checks(variant), transport=_transport(variant)))

    assert all(r.ok for r in results), [r.detail for r in results if not r.ok]


def test_body_mismatch_is_reported() -> None:
    check = RouteCheck("GET", "/books", 200, "application/json", {"message": "Welcome"})

    async def go() -> CheckResult:
        async with httpx.AsyncClient(base_url=BASE, transport=_transport()) as client:
            return await run_check(client, check)

    result = asyncio.run(go())

    assert result.ok is False
    assert result.status == 200
    assert "body" in result.detail


def test_run_smoke_exit_codes() -> None:
    ok = asyncio.run(run_smoke(base_url=BASE, variant="books", transport=_transport("books")))
    bad = asyncio.run(run_smoke(base_url=BASE, variant="books", transport=_transport("hello")))

    assert ok == 0
    assert bad == 1

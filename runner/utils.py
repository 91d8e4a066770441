from __future__ import annotations

from runner.types import CheckResult, RouteCheck, SmokeError

_JSON = "application/json"
_NOT_FOUND = {"error": "Not Found"}

_BOOKS_CHECKS = [
    RouteCheck("GET", "/", 200, _JSON, {"message": "Welcome"}),
    RouteCheck("GET", "/books", 200, _JSON, {"message": "List of books"}),
    RouteCheck("POST", "/books", 200, _JSON, {"message": "List of books"}),
    RouteCheck("GET", "/books?page=2", 200, _JSON, {"message": "List of books"}),
    RouteCheck("GET", "/Books", 404, _JSON, _NOT_FOUND),
    RouteCheck("GET", "/unknown", 404, _JSON, _NOT_FOUND),
]

_HELLO_CHECKS = [
    RouteCheck("GET", "/", 200, "text/plain", "Hello World"),
    RouteCheck("POST", "/", 200, "text/plain", "Hello World"),
    RouteCheck("GET", "/anything/else", 200, "text/plain", "Hello World"),
]


def expected_checks(variant: str) -> list[RouteCheck]:
    """Return the checks a server running `variant` must pass."""
    if variant == "books":
        return list(_BOOKS_CHECKS)
    if variant == "hello":
        return list(_HELLO_CHECKS)
    raise SmokeError(f"unknown route variant: {variant!r}")


def percentile(values: list[float], p: float) -> float:
    """Compute the p-th percentile using linear interpolation."""
    if not values:
        return 0.0
    s = sorted(values)
    k = (len(s) - 1) * p
    f = int(k)
    c = min(f + 1, len(s) - 1)
    if f == c:
        return s[f]
    d0 = s[f] * (c - k)
    d1 = s[c] * (k - f)
    return d0 + d1


def summarize(results: list[CheckResult]) -> tuple[dict, int]:
    """Compute summary dict and an exit code from check results."""
    durations_ms = [r.elapsed_ms for r in results]
    passed = sum(1 for r in results if r.ok)
    failures = [
        {"check": r.check.name, "status": r.status, "detail": r.detail}
        for r in results
        if not r.ok
    ]

    avg_ms = (sum(durations_ms) / len(durations_ms)) if durations_ms else 0.0
    summary = {
        "component": "runner",
        "event": "summary",
        "checks": len(results),
        "passed": passed,
        "failed": len(failures),
        "timings": {
            "avg_ms": round(avg_ms, 2),
            "p95_ms": round(percentile(durations_ms, 0.95), 2),
            "max_ms": round(max(durations_ms) if durations_ms else 0.0, 2),
        },
        "failures": failures,
    }
    exit_code = 0 if (results and not failures) else 1
    return summary, exit_code

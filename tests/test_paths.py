"""Tests for request-target normalization."""

import pytest

from bookserver.domain.paths import normalize_request_path


@pytest.mark.parametrize(
    ("target", "expected"),
    [
        ("/", "/"),
        ("/books", "/books"),
        ("/books?page=2", "/books"),
        ("/books#top", "/books"),
        ("/books?x=1#frag", "/books"),
        ("http://127.0.0.1:3000/books?x=1", "/books"),
        ("http://127.0.0.1:3000", "/"),
        ("", "/"),
        ("?only=query", "/"),
    ],
)
def test_normalize_request_path(target: str, expected: str) -> None:
    assert normalize_request_path(target) == expected


def test_normalize_keeps_case_and_trailing_slash() -> None:
    assert normalize_request_path("/Books/") == "/Books/"


def test_normalize_rejects_non_strings() -> None:
    with pytest.raises(TypeError):
        normalize_request_path(None)  # type: ignore[arg-type]

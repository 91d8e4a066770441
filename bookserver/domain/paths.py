from __future__ import annotations

from urllib.parse import urlsplit

__all__ = [
    "normalize_request_path",
]


def normalize_request_path(target: str) -> str:
    """Reduce a raw request target to the path used for route lookup.

    Rules:
    - Drop the query string and fragment.
    - Accept origin-form ("/books?x=1") and absolute-form
      ("http://host:3000/books") targets.
    - An empty target, or one with an empty path, becomes "/".
    - Keep case, trailing slashes and percent-escapes as they are; matching
      is exact.
    """
    if not isinstance(target, str):
        raise TypeError("request target must be a string")

    if not target:
        return "/"
    if target.startswith("/") and not target.startswith("//"):
        # Origin-form: cheaper than urlsplit and keeps odd characters intact.
        path = target.split("?", 1)[0].split("#", 1)[0]
    else:
        path = urlsplit(target).path
    return path or "/"

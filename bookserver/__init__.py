"""bookserver: a tiny fixed-route JSON server.

Exposes the package version when installed; falls back to a dev marker
when imported from a source checkout.
"""
from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("bookserver")
except PackageNotFoundError:  # pragma: no cover
    __version__ = "0.0.0"

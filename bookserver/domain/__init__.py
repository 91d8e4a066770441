"""Pure routing primitives: request paths and the route table.

Nothing here imports FastAPI, so the router can be unit-tested and reused by
the smoke runner.
"""
__all__ = ["paths", "routes"]

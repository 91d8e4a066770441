"""Smoke runner for a live bookserver (HTTP client side only)."""

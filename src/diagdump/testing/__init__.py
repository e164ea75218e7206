"""Deterministic fakes shared by the test suite."""

from .hosts import StaticHost, fixed_now

__all__ = ["StaticHost", "fixed_now"]

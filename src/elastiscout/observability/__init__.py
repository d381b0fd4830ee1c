"""Observability — Structured logging setup."""

from elastiscout.observability.logging import setup_logging

__all__ = ["setup_logging"]

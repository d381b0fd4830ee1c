"""Payload builders — Nested engine query documents."""

from elastiscout.payloads.builder import IndexPayload, PayloadBuilder, is_empty

__all__ = ["IndexPayload", "PayloadBuilder", "is_empty"]

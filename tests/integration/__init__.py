"""Integration tests for block conversion.

These tests run whole documents through the converter with the default
registry and class resolver, covering the interplay of reconciliation,
class injection, SSR optimization and chunked streaming.

Test Coverage:
- Document order and determinism
- Framework class resolution on nested and unknown blocks
- SSR document rewrites (idempotence, minification, hooks)
- Chunked output equivalence, cancellation and backpressure
"""

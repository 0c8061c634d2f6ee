"""
CodeFirst SDK Test Suite.

This package contains:
- unit/: Unit tests (no network)
- integration/: Synchronization against mock clients and a mock HTTP transport
- fixtures/: Content type classes scanned and compiled by the tests
"""

"""
User-state synchronization pipeline.

Persisted user preferences exposed as a single source of truth to
independent screens and to the app-level router.

Structure:
- domain/: UserState model, record codec, errors, ports, live stream
- infrastructure/: preference store, storage adapters, repository, logging
- application/: use cases, view-state projections, router, navigation
- tests/: Test suite (unit, integration)
"""

__version__ = "1.0.0"

"""Application layer: use cases, view-state projections, router and navigation."""

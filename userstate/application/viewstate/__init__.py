"""Per-screen view-state projections and view-models."""

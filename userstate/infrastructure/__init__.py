"""Infrastructure layer: preference store, storage adapters, repository, logging."""

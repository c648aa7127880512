"""User state use cases (commands and queries)."""

"""Infrastructure adapters: databases, repositories and external services."""

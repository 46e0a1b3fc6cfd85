"""Database connection management (PostgreSQL pool, MongoDB client)."""

"""Database-backed services."""

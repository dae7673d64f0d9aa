"""Core configuration, database and utilities."""

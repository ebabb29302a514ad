"""Core infrastructure: configuration, database, logging, error handling."""

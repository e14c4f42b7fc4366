"""Answer lookup service."""

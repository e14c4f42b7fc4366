"""Infrastructure module."""

"""Intent classification service."""

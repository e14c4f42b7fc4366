"""Logging infrastructure module."""

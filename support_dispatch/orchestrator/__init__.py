"""Dispatch orchestration: routing, correlation and the worker pool."""

"""Collaborator services used by the dispatcher."""

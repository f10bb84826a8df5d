"""Adapters for the server's external boundaries (filesystem, environment)."""

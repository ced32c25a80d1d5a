"""Core business logic layer.

Subpackages:
- state: List State and Settings State containers with their transitions
- shopping: recipe list building and the shopping session (optimistic add + async analysis)
"""
__all__ = ["state", "shopping"]

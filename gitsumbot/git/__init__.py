"""Fetching commit history from the source-control host."""

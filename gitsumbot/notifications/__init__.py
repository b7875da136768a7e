"""Delivering digests to chat channels."""

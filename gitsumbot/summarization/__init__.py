"""Generating the summary and categorized digest."""

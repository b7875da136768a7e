"""Commit digests from GitHub, summarized by an LLM and posted to Slack."""

"""Emoji descriptions generated by an LLM, stored and searchable by similarity."""

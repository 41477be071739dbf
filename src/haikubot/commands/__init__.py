"""Slash command schemas, parsing and dispatch."""

"""Async command handlers."""

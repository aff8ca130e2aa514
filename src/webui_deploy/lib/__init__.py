"""Shared helpers: errors, logging and terminal UI."""

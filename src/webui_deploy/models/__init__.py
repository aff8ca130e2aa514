"""Typed models for settings, the environment file and container specs."""

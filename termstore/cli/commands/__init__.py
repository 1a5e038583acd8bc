"""Termstore CLI commands."""

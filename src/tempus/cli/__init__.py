"""Tempus CLI."""

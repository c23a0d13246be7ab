"""Utility helpers for the shaux CLI."""

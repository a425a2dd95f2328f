"""Formatting and parsing helpers."""

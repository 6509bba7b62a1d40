"""Endpoint modules for the GitHub contents API."""

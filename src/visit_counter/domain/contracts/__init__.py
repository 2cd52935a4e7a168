"""Protocols implemented by web adapters."""

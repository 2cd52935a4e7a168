"""Website visitor counter backed by a relational visitors table."""

__version__ = "0.1.0"

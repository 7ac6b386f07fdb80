"""Local media gallery: folder scanning, a JSON catalog index and tag editing."""

__version__ = "0.1.0"

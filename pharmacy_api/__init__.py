"""Multilingual pharmacy reference API."""

__version__ = "1.0.0"

"""Frequency-weighted practice text generation for typing tests."""

__version__ = "0.1.0"

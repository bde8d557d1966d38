"""Inkwell: social graph and content ranking engine for a publishing platform."""

__version__ = "0.1.0"

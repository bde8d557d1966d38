# src/inkwell/services/__init__.py
"""Business logic services for the Inkwell engine."""

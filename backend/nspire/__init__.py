"""NSPIRE compliance engine for housing inspections."""

__version__ = "1.0.0"

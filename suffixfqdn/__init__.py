"""Registrable-domain extraction backed by the Public Suffix List."""

__version__ = "1.0.0"
__all__ = ["api", "cli", "errors", "etld", "fqdn", "options"]
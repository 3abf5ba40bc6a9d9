"""Folio: tenant-scoped document folder hierarchy service."""

__version__ = "0.1.0"

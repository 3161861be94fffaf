"""Kernel – flag types and the error hierarchy. No I/O lives here."""

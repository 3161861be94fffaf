"""Adapters – concrete FlagStore implementations (each behind its own extra)."""

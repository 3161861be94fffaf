"""Observability – structured logging and the caller-facing logger hook."""

"""Core exception types."""

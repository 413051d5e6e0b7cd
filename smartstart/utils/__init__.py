"""Shared helpers: JSON envelopes and crypto."""

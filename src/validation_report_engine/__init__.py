"""Validation report engine."""

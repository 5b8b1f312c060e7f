"""Example schemas."""

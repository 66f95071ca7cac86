"""Taskhub API application package."""

"""Retrieval-grounded personal chat."""

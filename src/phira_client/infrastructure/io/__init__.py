"""IO-bound infrastructure helpers."""

"""Command-line interface for userdir."""

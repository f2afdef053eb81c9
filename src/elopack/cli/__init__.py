"""Command-line interface for elopack."""

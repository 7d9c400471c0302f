"""Command-line interface for anchoredit."""

"""Command line interface for erdfix."""

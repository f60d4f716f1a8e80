"""Command-line interface for promptduel."""

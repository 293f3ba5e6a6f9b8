"""Command-line interface for minidash."""

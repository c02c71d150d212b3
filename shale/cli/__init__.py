"""Command-line interface for Shale."""

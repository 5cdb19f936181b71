"""Command-line interface for translated-mirror."""

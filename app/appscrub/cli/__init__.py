"""Command-line interface for appscrub."""

"""Command-line interface for clean_framework."""

"""Command-line interface for schemalint."""

"""Command handlers for the schemalint CLI."""

"""
CLI Command Handlers Facade.

Re-exports handlers from ``schemalint.cli.handlers`` so the entry point and
tests patch a single module.
"""

from schemalint.cli.handlers.check import collect_python_files, handle_check
from schemalint.cli.handlers.rules import handle_rules, handle_sets

__all__ = [
  "collect_python_files",
  "handle_check",
  "handle_rules",
  "handle_sets",
]

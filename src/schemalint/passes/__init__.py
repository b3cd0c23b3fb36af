"""
Analyzer Passes.

Support passes produce results for rules; rules report diagnostics.

Modules:
    - ``inspector``: Preorder traversal service (``inspect``).
    - ``commentignore``: ``lintignore`` suppression comments (``commentignore``).
    - ``schemaschema``: Schema literal extraction (``schemaschema``).
    - ``resourcedataset``: Resource data setter call sites (``resourcedataset``).
    - ``s011``: Rule S011.
"""

from typing import Dict, Optional, Tuple

from schemalint.core.analyzer import Analyzer
from schemalint.passes import commentignore, inspector, resourcedataset, s011, schemaschema

ALL_CHECKS: Tuple[Analyzer, ...] = (s011.ANALYZER,)

_CHECKS_BY_NAME: Dict[str, Analyzer] = {check.name.upper(): check for check in ALL_CHECKS}


def get_check(name: str) -> Optional[Analyzer]:
  """
  Looks up a rule by name.

  Args:
      name: Rule name (case-insensitive), e.g. 'S011'.

  Returns:
      The rule's analyzer, or None if unknown.
  """
  return _CHECKS_BY_NAME.get(name.strip().upper())


__all__ = [
  "ALL_CHECKS",
  "commentignore",
  "get_check",
  "inspector",
  "resourcedataset",
  "s011",
  "schemaschema",
]

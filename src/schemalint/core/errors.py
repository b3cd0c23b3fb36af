"""
Exception hierarchy for schemalint.

Every error raised by the analysis core derives from ``SchemalintError`` so
drivers can separate analysis failures from programming errors.

- ``UnitLoadError``: a source file could not be read or parsed. Fatal for
  that unit only.
- ``AnalyzerConfigError``: the analyzer graph is malformed (duplicate names,
  unknown descriptors). Raised before any unit is analyzed.
- ``DependencyCycleError``: the analyzer graph contains a cycle.
- ``AnalyzerError``: an analyzer failed while producing its result for a unit.
"""

from pathlib import Path
from typing import Sequence, Union


class SchemalintError(Exception):
  """Base class for all schemalint errors."""


class UnitLoadError(SchemalintError):
  """
  Raised when a compilation unit cannot be produced from a source file.
  """

  def __init__(self, path: Union[str, Path], reason: str):
    """
    Args:
        path: The path (or pseudo path) of the failing source.
        reason: Human-readable explanation (parser message, OS error).
    """
    self.path = str(path)
    self.reason = reason
    super().__init__(f"{self.path}: {reason}")


class AnalyzerConfigError(SchemalintError):
  """Raised when analyzer descriptors cannot form a valid execution graph."""


class DependencyCycleError(AnalyzerConfigError):
  """
  Raised when analyzer dependencies form a cycle.

  Attributes:
      cycle (List[str]): Analyzer names along the cycle, first name repeated last.
  """

  def __init__(self, cycle: Sequence[str]):
    self.cycle = list(cycle)
    super().__init__(f"analyzer dependency cycle: {' -> '.join(self.cycle)}")


class AnalyzerError(SchemalintError):
  """
  Raised when an analyzer fails for a unit. Aborts analysis of that unit.
  """

  def __init__(self, analyzer: str, path: str, reason: str):
    self.analyzer = analyzer
    self.path = path
    self.reason = reason
    super().__init__(f"{path}: analyzer '{analyzer}' failed: {reason}")

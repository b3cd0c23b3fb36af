"""
Analysis Core.

Modules:
    - ``unit``: Parsing source into immutable compilation units with resolved metadata.
    - ``analyzer``: Analyzer descriptors, the ``Pass`` context and ``Diagnostic``.
    - ``executor``: Dependency-ordered, memoized execution of analyzers per unit.
    - ``errors``: Exception hierarchy.
"""

from schemalint.core.analyzer import Analyzer, Diagnostic, Pass
from schemalint.core.errors import (
  AnalyzerConfigError,
  AnalyzerError,
  DependencyCycleError,
  SchemalintError,
  UnitLoadError,
)
from schemalint.core.executor import Executor, UnitReport, UnitSession, plan
from schemalint.core.unit import CompilationUnit, TypeInfo, load_unit, parse_unit

__all__ = [
  "Analyzer",
  "AnalyzerConfigError",
  "AnalyzerError",
  "CompilationUnit",
  "DependencyCycleError",
  "Diagnostic",
  "Executor",
  "Pass",
  "SchemalintError",
  "TypeInfo",
  "UnitLoadError",
  "UnitReport",
  "UnitSession",
  "load_unit",
  "parse_unit",
  "plan",
]

"""
Analyzer Descriptors and the Pass Context.

An ``Analyzer`` is a named, documented unit of analysis with declared
dependencies. The executor hands each analyzer's ``run`` function a ``Pass``:
an explicit context that exposes the unit, the active configuration and the
results of exactly the analyzers it declared in ``requires``.

Rules report findings through ``Pass.report``; the resulting ``Diagnostic``
objects are immutable.
"""

import logging
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Callable, List, Mapping, Optional, Tuple

import libcst as cst
from libcst.metadata import CodePosition
from pydantic import BaseModel, ConfigDict, Field

from schemalint.config import LintConfig
from schemalint.core.unit import CompilationUnit, TypeInfo

logger = logging.getLogger(__name__)


@dataclass(frozen=True, eq=False)
class Analyzer:
  """
  Descriptor of a single analysis pass.

  Descriptors hash by identity; two descriptors are the same analyzer only
  if they are the same object.
  """

  name: str
  """Unique analyzer name. For rules this is also the rule name (e.g. "S011")."""

  doc: str
  """Documentation. The first line is the summary shown by ``schemalint rules``."""

  run: Callable[["Pass"], Any] = field(repr=False)
  """Callable producing the result for one unit."""

  requires: Tuple["Analyzer", ...] = ()
  """Analyzers whose results must exist before ``run`` is called."""

  result_type: Optional[type] = None
  """Declared result shape. None means the result is not checked (rules return None)."""

  @property
  def summary(self) -> str:
    """First non-empty line of the documentation."""
    for line in self.doc.strip().splitlines():
      if line.strip():
        return line.strip()
    return ""


class Diagnostic(BaseModel):
  """
  A reported rule violation.
  """

  model_config = ConfigDict(frozen=True)

  rule: str = Field(..., description="Name of the rule that produced the finding.")
  path: str = Field(..., description="Path of the analyzed unit.")
  line: int = Field(..., description="1-based line number.")
  column: int = Field(..., description="1-based column number.")
  message: str = Field(..., description="Human readable message.")

  @property
  def location(self) -> str:
    """Editor friendly ``path:line:column`` string."""
    return f"{self.path}:{self.line}:{self.column}"


class Pass:
  """
  Execution context given to an analyzer's run function.

  Attributes:
      analyzer (Analyzer): The analyzer being run.
      unit (CompilationUnit): The unit under analysis.
      config (LintConfig): Active configuration.
      result_of (Mapping[Analyzer, Any]): Results of the declared dependencies only.
  """

  def __init__(
    self,
    analyzer: Analyzer,
    unit: CompilationUnit,
    config: LintConfig,
    result_of: Mapping[Analyzer, Any],
  ):
    self.analyzer = analyzer
    self.unit = unit
    self.config = config
    self.result_of = MappingProxyType(dict(result_of))
    self.diagnostics: List[Diagnostic] = []

  @property
  def types(self) -> TypeInfo:
    """Shortcut to the unit's resolved static information."""
    return self.unit.types

  def report_at(self, position: CodePosition, message: str) -> Optional[Diagnostic]:
    """
    Records a diagnostic at an explicit position.

    Positions outside the unit are dropped.

    Args:
        position: LibCST position (1-based line, 0-based column).
        message: Diagnostic text.

    Returns:
        The recorded Diagnostic, or None when dropped.
    """
    if not self.types.contains(position):
      logger.debug("Dropping %s report outside %s: %s", self.analyzer.name, self.unit.path, position)
      return None

    diagnostic = Diagnostic(
      rule=self.analyzer.name,
      path=self.unit.path,
      line=position.line,
      column=position.column + 1,
      message=message,
    )
    self.diagnostics.append(diagnostic)
    return diagnostic

  def report(self, node: cst.CSTNode, message: str) -> Optional[Diagnostic]:
    """
    Records a diagnostic at the start of a node.

    Nodes without a known position are not reported.

    Args:
        node: A node of ``unit.module``.
        message: Diagnostic text.

    Returns:
        The recorded Diagnostic, or None when dropped.
    """
    code_range = self.types.position(node)
    if code_range is None:
      logger.debug("Dropping %s report for unpositioned %s", self.analyzer.name, type(node).__name__)
      return None
    return self.report_at(code_range.start, message)

  def reportf(self, node: cst.CSTNode, fmt: str, *args: Any) -> Optional[Diagnostic]:
    """
    Printf-style variant of ``report``.

    Args:
        node: A node of ``unit.module``.
        fmt: %-format string.
        *args: Format arguments.

    Returns:
        The recorded Diagnostic, or None when dropped.
    """
    return self.report(node, fmt % args)

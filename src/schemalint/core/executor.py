"""
Pass Graph Executor.

This module schedules analyzers over compilation units.

1.  **Planning**: ``plan`` orders a set of descriptors dependencies-first using an
    explicit depth-first colouring. Cycles and name clashes are rejected before
    anything runs.
2.  **Execution**: ``UnitSession`` owns the result cache and diagnostic buffer for
    one unit. Each analyzer runs at most once per session, strictly after all of
    its dependencies have completed.
3.  **Isolation**: sessions are private to a unit. The executor's analyzer graph is
    frozen after construction, so units can be analyzed on a thread pool.

A failure inside an analyzer aborts its unit: the error is raised as
``AnalyzerError`` and no diagnostics of that unit are returned.
"""

import logging
import threading
from concurrent.futures import ThreadPoolExecutor
from pathlib import Path
from typing import Any, Dict, Iterable, List, Optional, Sequence, Union

from pydantic import BaseModel, Field

from schemalint.config import LintConfig
from schemalint.core.analyzer import Analyzer, Diagnostic, Pass
from schemalint.core.errors import (
  AnalyzerConfigError,
  AnalyzerError,
  DependencyCycleError,
  UnitLoadError,
)
from schemalint.core.unit import CompilationUnit, load_unit

logger = logging.getLogger(__name__)

_VISITING = 1
_DONE = 2


def plan(analyzers: Iterable[Analyzer]) -> List[Analyzer]:
  """
  Computes a dependency-first execution order for analyzers and their requirements.

  Args:
      analyzers: Root descriptors. Transitive requirements are included.

  Returns:
      Every reachable analyzer exactly once; each appears after all of its requirements.

  Raises:
      DependencyCycleError: If the requirements form a cycle.
      AnalyzerConfigError: If two distinct descriptors share a name.
  """
  order: List[Analyzer] = []
  state: Dict[Analyzer, int] = {}
  names: Dict[str, Analyzer] = {}
  path: List[Analyzer] = []

  def visit(analyzer: Analyzer) -> None:
    mark = state.get(analyzer)
    if mark == _DONE:
      return
    if mark == _VISITING:
      start = path.index(analyzer)
      cycle = [a.name for a in path[start:]] + [analyzer.name]
      raise DependencyCycleError(cycle)

    existing = names.setdefault(analyzer.name, analyzer)
    if existing is not analyzer:
      raise AnalyzerConfigError(f"duplicate analyzer name: '{analyzer.name}'")

    state[analyzer] = _VISITING
    path.append(analyzer)
    for dep in analyzer.requires:
      visit(dep)
    path.pop()
    state[analyzer] = _DONE
    order.append(analyzer)

  for root in analyzers:
    visit(root)
  return order


class UnitReport(BaseModel):
  """
  Outcome of analyzing one file.
  """

  path: str = Field(..., description="Path of the analyzed file.")
  diagnostics: List[Diagnostic] = Field(default_factory=list, description="Findings, ordered by position.")
  error: Optional[str] = Field(None, description="Load or analysis failure, if any.")

  @property
  def ok(self) -> bool:
    """True when the unit was analyzed to completion."""
    return self.error is None


class UnitSession:
  """
  Result cache and diagnostic buffer for one unit within one run.
  """

  def __init__(self, executor: "Executor", unit: CompilationUnit):
    """
    Args:
        executor: Owner holding the frozen analyzer graph.
        unit: The unit this session analyzes.
    """
    self.executor = executor
    self.unit = unit
    self._results: Dict[Analyzer, Any] = {}
    self._diagnostics: List[Diagnostic] = []

  def run(self, analyzer: Analyzer) -> Any:
    """
    Returns the analyzer's result, running it and any missing requirements first.

    Args:
        analyzer: A descriptor registered with the executor.

    Returns:
        The (cached) result.

    Raises:
        AnalyzerError: If any analyzer in the chain fails.
    """
    if analyzer in self._results:
      return self._results[analyzer]

    for step in self.executor.steps_for(analyzer):
      if step not in self._results:
        self._execute(step)
    return self._results[analyzer]

  @property
  def diagnostics(self) -> List[Diagnostic]:
    """Diagnostics reported so far, ordered by position then rule."""
    return sorted(self._diagnostics, key=lambda d: (d.line, d.column, d.rule))

  def _execute(self, analyzer: Analyzer) -> None:
    deps = {dep: self._results[dep] for dep in analyzer.requires}
    pass_ = Pass(analyzer, self.unit, self.executor.config, deps)

    logger.debug("Running analyzer %s on %s", analyzer.name, self.unit.path)
    try:
      result = analyzer.run(pass_)
    except Exception as e:
      raise AnalyzerError(analyzer.name, self.unit.path, f"{type(e).__name__}: {e}") from e

    if analyzer.result_type is not None and not isinstance(result, analyzer.result_type):
      raise AnalyzerError(
        analyzer.name,
        self.unit.path,
        f"returned {type(result).__name__}, expected {analyzer.result_type.__name__}",
      )

    self._results[analyzer] = result
    self._diagnostics.extend(pass_.diagnostics)


class Executor:
  """
  Runs a fixed set of analyzers over compilation units.

  The graph is validated on construction; an invalid graph raises before
  any unit is touched.
  """

  def __init__(self, analyzers: Sequence[Analyzer], config: Optional[LintConfig] = None):
    """
    Args:
        analyzers: Root analyzers (typically rules). Requirements are discovered.
        config: Active configuration. Defaults to ``LintConfig()``.

    Raises:
        AnalyzerConfigError: If the graph is cyclic or has clashing names.
    """
    self.roots = tuple(analyzers)
    self.config = config or LintConfig()
    self.order = plan(self.roots)
    self._steps = {analyzer: plan([analyzer]) for analyzer in self.order}
    self._sessions: Dict[CompilationUnit, UnitSession] = {}
    self._lock = threading.Lock()

  def steps_for(self, analyzer: Analyzer) -> List[Analyzer]:
    """
    Returns the execution order needed to produce one analyzer's result.

    Raises:
        AnalyzerConfigError: If the analyzer is not part of this executor's graph.
    """
    try:
      return self._steps[analyzer]
    except KeyError:
      raise AnalyzerConfigError(f"analyzer '{analyzer.name}' is not registered with this executor") from None

  def session(self, unit: CompilationUnit) -> UnitSession:
    """
    Returns the session of a unit, creating it on first use.
    """
    with self._lock:
      session = self._sessions.get(unit)
      if session is None:
        session = UnitSession(self, unit)
        self._sessions[unit] = session
      return session

  def release(self, unit: CompilationUnit) -> None:
    """Drops the cached results of a unit."""
    with self._lock:
      self._sessions.pop(unit, None)

  def run(self, analyzer: Analyzer, unit: CompilationUnit) -> Any:
    """
    Produces one analyzer's result for a unit, reusing cached results.

    Results stay cached until ``release(unit)``; callers that run analyzers
    directly over many units release each one when done.

    Args:
        analyzer: A registered descriptor.
        unit: The unit to analyze.

    Returns:
        The analyzer's result.
    """
    self.steps_for(analyzer)
    return self.session(unit).run(analyzer)

  def analyze(self, unit: CompilationUnit) -> List[Diagnostic]:
    """
    Runs every enabled root analyzer over a unit.

    Args:
        unit: The unit to analyze.

    Returns:
        Diagnostics ordered by position.

    Raises:
        AnalyzerError: If any analyzer fails; no diagnostics are returned.
    """
    session = self.session(unit)
    try:
      for root in self.roots:
        if not self.config.is_enabled(root.name):
          logger.debug("Skipping disabled rule %s", root.name)
          continue
        session.run(root)
      return session.diagnostics
    finally:
      self.release(unit)

  def analyze_path(self, path: Union[str, Path]) -> UnitReport:
    """
    Loads and analyzes one file. Failures are confined to the returned report.

    Args:
        path: Python source file.

    Returns:
        The unit's report.
    """
    try:
      unit = load_unit(path)
      diagnostics = self.analyze(unit)
    except (UnitLoadError, AnalyzerError) as e:
      logger.warning("%s", e)
      return UnitReport(path=str(path), error=str(e))
    return UnitReport(path=str(path), diagnostics=diagnostics)

  def analyze_paths(self, paths: Sequence[Union[str, Path]], jobs: Optional[int] = None) -> List[UnitReport]:
    """
    Analyzes files independently, optionally on a thread pool.

    Args:
        paths: Python source files.
        jobs: Worker count. Defaults to ``config.jobs``.

    Returns:
        One report per path, in input order.
    """
    workers = max(1, jobs or self.config.jobs)
    if workers == 1 or len(paths) < 2:
      return [self.analyze_path(p) for p in paths]

    with ThreadPoolExecutor(max_workers=workers) as pool:
      return list(pool.map(self.analyze_path, paths))

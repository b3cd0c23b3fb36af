"""
Compilation Unit Front End.

This module turns Python source text into an immutable ``CompilationUnit``:
a LibCST tree wrapped in a ``MetadataWrapper`` together with a ``TypeInfo``
view over the resolved metadata. Every analyzer reads the unit; none mutates it.

Resolved metadata:

1.  **Positions**: ``PositionProvider`` ranges (syntactic, 1-based lines, 0-based columns).
2.  **Qualified Names**: scope-resolved import names, the static
    "type" of a callee or annotation (e.g. ``schema.Schema`` -> ``tfsdk.helper.schema.Schema``).
3.  **Scopes**: ``ScopeProvider`` assignments, used to find the declaration of a name.
4.  **Parents**: ``ParentNodeProvider`` back-links from children to parents.

Note that ``MetadataWrapper`` deep copies the parsed module; analyzers must always
walk ``unit.module`` (the wrapped copy) so node identities match the metadata.
"""

from dataclasses import dataclass, field
from pathlib import Path
from typing import List, Optional, Set, Union

import libcst as cst
from libcst.metadata import (
  Assignment,
  CodePosition,
  CodeRange,
  MetadataWrapper,
  ParentNodeProvider,
  PositionProvider,
  ScopeProvider,
)

from schemalint.core.errors import UnitLoadError


class TypeInfo:
  """
  Read-only view over the metadata resolved for one module.
  """

  def __init__(self, wrapper: MetadataWrapper, line_count: int):
    """
    Resolves all providers eagerly.

    Args:
        wrapper: The metadata wrapper holding the analyzed module.
        line_count: Number of lines in the source text.
    """
    resolved = wrapper.resolve_many(
      [
        PositionProvider,
        ScopeProvider,
        ParentNodeProvider,
      ]
    )
    self._positions = resolved[PositionProvider]
    self._scopes = resolved[ScopeProvider]
    self._parents = resolved[ParentNodeProvider]
    self.line_count = line_count

  def position(self, node: cst.CSTNode) -> Optional[CodeRange]:
    """
    Returns the syntactic source range of a node, or None when unknown.

    Args:
        node: A node of the wrapped module.

    Returns:
        The CodeRange covering the node.
    """
    return self._positions.get(node)

  def qualified_names(self, node: cst.CSTNode) -> Set[str]:
    """
    Returns every fully qualified name a Name/Attribute/Call may refer to.

    Args:
        node: The expression node.

    Returns:
        Set of dotted names (empty when unresolvable).
    """
    scope = self._scopes.get(node)
    if scope is None:
      return set()
    return {qn.name for qn in scope.get_qualified_names_for(node)}

  def parent(self, node: cst.CSTNode) -> Optional[cst.CSTNode]:
    """Returns the parent node, or None for the module root."""
    return self._parents.get(node)

  def declarations(self, name: cst.Name) -> List[cst.CSTNode]:
    """
    Finds the nodes that bind the value read by a ``Name`` access.

    Builtins and names without a recorded access yield an empty list.
    For parameters the binding node is the ``cst.Param``; for plain and
    annotated assignments it is the target ``cst.Name``.

    Args:
        name: A Name node in load context.

    Returns:
        Binding nodes, ordered by source position.
    """
    scope = self._scopes.get(name)
    if scope is None:
      return []

    for access in scope.accesses[name]:
      if access.node is not name:
        continue
      nodes = [ref.node for ref in access.referents if isinstance(ref, Assignment)]
      return sorted(nodes, key=self._sort_key)
    return []

  def contains(self, position: CodePosition) -> bool:
    """
    Checks whether a position falls inside the unit's text.

    Args:
        position: Candidate position.

    Returns:
        True when the line lies within the source.
    """
    return 1 <= position.line <= max(self.line_count, 1) and position.column >= 0

  def _sort_key(self, node: cst.CSTNode):
    pos = self._positions.get(node)
    if pos is None:
      return (0, 0)
    return (pos.start.line, pos.start.column)


@dataclass(frozen=True, eq=False)
class CompilationUnit:
  """
  One parsed Python source file with its resolved static information.

  Units compare and hash by identity; the executor keys its caches on them.
  """

  path: str
  source: str
  wrapper: MetadataWrapper = field(repr=False)
  types: TypeInfo = field(repr=False)

  @property
  def module(self) -> cst.Module:
    """The analyzed tree. Node identities match ``types`` metadata."""
    return self.wrapper.module

  @property
  def lines(self) -> List[str]:
    """Source text split into lines (no terminators)."""
    return self.source.splitlines()


def parse_unit(source: str, path: Union[str, Path] = "<string>") -> CompilationUnit:
  """
  Parses source text into a CompilationUnit.

  Args:
      source: Python source code.
      path: Path used when reporting diagnostics.

  Returns:
      The immutable unit.

  Raises:
      UnitLoadError: If the source is not valid Python.
  """
  try:
    module = cst.parse_module(source)
  except cst.ParserSyntaxError as e:
    raise UnitLoadError(path, f"syntax error: {e.message} (line {e.raw_line}, column {e.raw_column})") from e

  wrapper = MetadataWrapper(module)
  types = TypeInfo(wrapper, line_count=len(source.splitlines()))
  return CompilationUnit(path=str(path), source=source, wrapper=wrapper, types=types)


def load_unit(path: Union[str, Path]) -> CompilationUnit:
  """
  Reads and parses a file from disk.

  Args:
      path: Python file to load.

  Returns:
      The immutable unit.

  Raises:
      UnitLoadError: If the file is unreadable or not valid Python.
  """
  file_path = Path(path)
  try:
    source = file_path.read_text(encoding="utf-8")
  except (OSError, UnicodeDecodeError) as e:
    raise UnitLoadError(file_path, f"cannot read file: {e}") from e
  return parse_unit(source, file_path)

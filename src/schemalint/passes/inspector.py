"""
AST Traversal Service.

The ``inspect`` analyzer flattens a unit's tree once into preorder and hands
later passes an ``Inspector`` that can replay that order filtered by node
class. Every pass sharing the service shares one walk of the tree.
"""

from typing import Iterator, List, Tuple, Type

import libcst as cst

from schemalint.core.analyzer import Analyzer, Pass


class Inspector:
  """
  Preorder node index over one module.
  """

  def __init__(self, module: cst.Module):
    """
    Walks the module once.

    Args:
        module: The wrapped module of a compilation unit.
    """
    self._nodes: List[cst.CSTNode] = []
    stack: List[cst.CSTNode] = [module]
    while stack:
      node = stack.pop()
      self._nodes.append(node)
      # Reverse so the leftmost child is visited first
      stack.extend(reversed(node.children))

  def __len__(self) -> int:
    return len(self._nodes)

  def preorder(self, *kinds: Type[cst.CSTNode]) -> Iterator[cst.CSTNode]:
    """
    Yields nodes in preorder, optionally restricted to some node classes.

    The returned generator is lazy and single-use.

    Args:
        *kinds: Node classes (or base classes) to keep. None means every node.

    Yields:
        Matching nodes, parents before children, left to right.
    """
    wanted: Tuple[Type[cst.CSTNode], ...] = tuple(kinds)
    for node in self._nodes:
      if not wanted or isinstance(node, wanted):
        yield node


def _run(pass_: Pass) -> Inspector:
  return Inspector(pass_.unit.module)


ANALYZER = Analyzer(
  name="inspect",
  doc="optimize AST traversal for later passes",
  run=_run,
  result_type=Inspector,
)

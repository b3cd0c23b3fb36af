"""
Ignore-Directive Resolver.

The ``commentignore`` analyzer collects suppression comments of the form::

    # lintignore:S011
    # lintignore:*

and ties each one to an anchor node:

1.  **Trailing comments** anchor to the outermost nodes starting on the comment's line.
2.  **Own-line comments** anchor to the outermost nodes starting on the next line
    that holds code.

A node is outermost on its line when no other node starting on that line
encloses it. One line can hold several, e.g. the tail of a multi-line call
followed by a sibling literal.

A node is ignored for a rule when its start position lies inside the range of an
anchor recorded for that rule or for the ``*`` wildcard. Comments that do not
match the directive syntax, or that have nothing to anchor to, are skipped.
"""

import bisect
import re
from collections import defaultdict
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

import libcst as cst
from libcst.metadata import CodePosition, CodeRange

from schemalint.core.analyzer import Analyzer, Pass
from schemalint.core.unit import TypeInfo
from schemalint.passes import inspector

WILDCARD = "*"

_DIRECTIVE_RE = re.compile(r"^#\s*lintignore:(?P<rule>\*|[A-Za-z][A-Za-z0-9_-]*)(?:\s|$)")

# Node classes that may carry a directive. Whitespace, punctuation and
# operator nodes also have positions but are never anchors.
_ANCHOR_KINDS = (
  cst.BaseStatement,
  cst.BaseSmallStatement,
  cst.BaseExpression,
  cst.BaseDictElement,
  cst.BaseElement,
  cst.Arg,
  cst.Param,
  cst.Decorator,
)


def parse_directive(text: str) -> Optional[str]:
  """
  Extracts the rule name from a comment.

  Args:
      text: Raw comment text, including the leading ``#``.

  Returns:
      The upper-cased rule name, ``*``, or None for any other comment.
  """
  match = _DIRECTIVE_RE.match(text.strip())
  if not match:
    return None
  return match.group("rule").upper()


@dataclass(frozen=True)
class IgnoreDirective:
  """
  One suppression: a rule name and the source range of its anchor node.
  """

  rule: str
  start: CodePosition
  end: CodePosition

  def covers(self, position: CodePosition) -> bool:
    """True when the position lies within the anchor range (inclusive)."""
    point = (position.line, position.column)
    return (self.start.line, self.start.column) <= point <= (self.end.line, self.end.column)


class Ignorer:
  """
  Position-indexed table of ignore directives for one unit.
  """

  def __init__(self, types: TypeInfo, directives: List[IgnoreDirective]):
    self._types = types
    self.directives = list(directives)
    self._by_rule: Dict[str, List[IgnoreDirective]] = defaultdict(list)
    for directive in self.directives:
      self._by_rule[directive.rule].append(directive)

  def should_ignore(self, rule: str, node: cst.CSTNode) -> bool:
    """
    Checks whether findings of a rule on a node are suppressed.

    Args:
        rule: Rule name (case-insensitive).
        node: A node of the unit's module.

    Returns:
        True if a matching directive covers the node's start.
    """
    code_range = self._types.position(node)
    if code_range is None:
      return False

    candidates = [*self._by_rule.get(rule.upper(), ()), *self._by_rule.get(WILDCARD, ())]
    return any(d.covers(code_range.start) for d in candidates)


def _encloses(outer: CodeRange, inner: CodeRange) -> bool:
  start_ok = (outer.start.line, outer.start.column) <= (inner.start.line, inner.start.column)
  end_ok = (inner.end.line, inner.end.column) <= (outer.end.line, outer.end.column)
  return start_ok and end_ok


def _run(pass_: Pass) -> Ignorer:
  inspect = pass_.result_of[inspector.ANALYZER]
  types = pass_.types
  lines = pass_.unit.lines

  # Outermost anchor ranges per line; preorder visits enclosing nodes first
  anchors: Dict[int, List[CodeRange]] = defaultdict(list)
  comments: List[Tuple[cst.Comment, str]] = []
  for node in inspect.preorder(cst.Comment, *_ANCHOR_KINDS):
    if isinstance(node, cst.Comment):
      rule = parse_directive(node.value)
      if rule is not None:
        comments.append((node, rule))
      continue
    code_range = types.position(node)
    if code_range is None:
      continue
    same_line = anchors[code_range.start.line]
    if not any(_encloses(outer, code_range) for outer in same_line):
      same_line.append(code_range)

  anchor_lines = sorted(anchors)
  directives: List[IgnoreDirective] = []
  for comment, rule in comments:
    pos = types.position(comment)
    if pos is None:
      continue

    line = pos.start.line
    prefix = lines[line - 1][: pos.start.column] if line <= len(lines) else ""
    if prefix.strip():
      targets = anchors.get(line, [])
    else:
      idx = bisect.bisect_right(anchor_lines, line)
      targets = anchors[anchor_lines[idx]] if idx < len(anchor_lines) else []

    for target in targets:
      directives.append(IgnoreDirective(rule=rule, start=target.start, end=target.end))

  return Ignorer(types, directives)


ANALYZER = Analyzer(
  name="commentignore",
  doc="find lintignore comments for later passes",
  run=_run,
  requires=(inspector.ANALYZER,),
  result_type=Ignorer,
)

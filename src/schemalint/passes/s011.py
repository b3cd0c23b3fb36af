"""
S011: Schema with only computed enabled and diff_suppress_func configured.

A schema that is computed but neither optional nor required is never set
from configuration, so a diff suppression function has nothing to compare
and the provider fails schema validation at runtime::

    schema.Schema(
        type=schema.TypeString,
        computed=True,
        diff_suppress_func=suppress_case,  # S011
    )
"""

from typing import List, Optional

import libcst as cst
from libcst.metadata import CodePosition

from schemalint.core.analyzer import Analyzer, Pass
from schemalint.core.unit import TypeInfo
from schemalint.enums import TypeForm
from schemalint.passes import commentignore, schemaschema

NAME = "S011"

DOC = """check for schemas with only computed enabled and diff_suppress_func configured

The S011 analyzer reports schemas which only enable computed and configure
diff_suppress_func, which will fail provider schema validation."""

MESSAGE = "schema should not only enable computed and configure diff_suppress_func"


def opening_paren(types: TypeInfo, lines: List[str], call: cst.Call) -> Optional[CodePosition]:
  """
  Locates the opening parenthesis of a call.

  Args:
      types: Resolved metadata of the unit.
      lines: Source lines of the unit.
      call: The call expression.

  Returns:
      Position of ``(``, or None when the callee has no position.
  """
  func_range = types.position(call.func)
  if func_range is None:
    return None

  ws = call.whitespace_after_func
  if isinstance(ws, cst.SimpleWhitespace) and "\n" not in ws.value:
    return CodePosition(func_range.end.line, func_range.end.column + len(ws.value))

  # Callee and paren are split across lines; walk the text between them
  position = _scan_for_paren(lines, func_range.end)
  if position is not None:
    return position
  call_range = types.position(call)
  return call_range.start if call_range is not None else None


def _scan_for_paren(lines: List[str], start: CodePosition) -> Optional[CodePosition]:
  line, column = start.line, start.column
  while line <= len(lines):
    text = lines[line - 1]
    while column < len(text):
      char = text[column]
      if char == "(":
        return CodePosition(line, column)
      if char == "#":
        break
      if not char.isspace() and char != "\\":
        return None
      column += 1
    line, column = line + 1, 0
  return None


def _run(pass_: Pass) -> None:
  ignorer = pass_.result_of[commentignore.ANALYZER]
  schemas = pass_.result_of[schemaschema.ANALYZER]

  for info in schemas:
    if ignorer.should_ignore(NAME, info.node):
      continue

    fields = info.fields
    if not fields.computed or fields.optional or fields.required:
      continue

    if not fields.diff_suppress_func:
      continue

    message = f"{NAME}: {MESSAGE}"
    if info.type_form is TypeForm.SELECTOR:
      pass_.report(info.type_node.attr, message)
    else:
      position = opening_paren(pass_.types, pass_.unit.lines, info.node)
      if position is not None:
        pass_.report_at(position, message)

  return None


ANALYZER = Analyzer(
  name=NAME,
  doc=DOC,
  run=_run,
  requires=(schemaschema.ANALYZER, commentignore.ANALYZER),
)

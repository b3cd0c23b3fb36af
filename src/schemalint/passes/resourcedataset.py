"""
Call-Site Detection Pass.

The ``resourcedataset`` analyzer finds setter calls on resource data values::

    def resource_read(d: schema.ResourceData, meta):
        d.set("name", name)

A call qualifies when its receiver is a plain name whose single annotated
declaration carries an annotation resolving to the resource data type. Parameters and
annotated assignments are the supported declarations; the annotation may be
wrapped once in ``Optional[...]`` or ``... | None``. Receivers that cannot be
resolved this way are skipped.
"""

from typing import Collection, List, Optional

import libcst as cst

from schemalint.core.analyzer import Analyzer, Pass
from schemalint.core.unit import TypeInfo
from schemalint.enums import DeclForm
from schemalint.passes import inspector

_OPTIONAL_NAMES = frozenset({"typing.Optional", "typing_extensions.Optional"})


def unwrap_annotation(types: TypeInfo, expr: cst.BaseExpression) -> Optional[cst.BaseExpression]:
  """
  Strips at most one optional wrapper from an annotation.

  Args:
      types: Resolved metadata of the unit.
      expr: Annotation expression.

  Returns:
      The Name/Attribute naming the type, or None for unsupported shapes.
  """
  if isinstance(expr, (cst.Attribute, cst.Name)):
    return expr

  if isinstance(expr, cst.Subscript):
    if types.qualified_names(expr.value).isdisjoint(_OPTIONAL_NAMES) or len(expr.slice) != 1:
      return None
    index = expr.slice[0].slice
    if isinstance(index, cst.Index) and isinstance(index.value, (cst.Name, cst.Attribute)):
      return index.value
    return None

  if isinstance(expr, cst.BinaryOperation) and isinstance(expr.operator, cst.BitOr):
    left, right = expr.left, expr.right
    if _is_none(right) and isinstance(left, (cst.Name, cst.Attribute)):
      return left
    if _is_none(left) and isinstance(right, (cst.Name, cst.Attribute)):
      return right

  return None


def _is_none(expr: cst.BaseExpression) -> bool:
  return isinstance(expr, cst.Name) and expr.value == "None"


def binding_form(types: TypeInfo, binding: cst.CSTNode) -> Optional[DeclForm]:
  """
  Classifies a binding node as an annotated declaration.

  Args:
      types: Resolved metadata of the unit.
      binding: A node returned by ``TypeInfo.declarations``.

  Returns:
      FIELD for an annotated parameter, VARIABLE for the target of an
      annotated assignment, None for anything else.
  """
  if isinstance(binding, cst.Param):
    return DeclForm.FIELD if binding.annotation is not None else None
  if isinstance(binding, cst.Name):
    parent = types.parent(binding)
    if isinstance(parent, cst.AnnAssign) and parent.target is binding:
      return DeclForm.VARIABLE
  return None


def declared_annotation(types: TypeInfo, receiver: cst.Name) -> Optional[cst.BaseExpression]:
  """
  Finds the annotation that gives a receiver name its static type.

  Plain assignments may rebind the name (``d: ResourceData`` then
  ``d = meta.data()``); only the annotated declarations are considered,
  and exactly one must exist.

  Args:
      types: Resolved metadata of the unit.
      receiver: Name node in load context.

  Returns:
      The annotation expression, or None when not determinable.
  """
  annotated = []
  for binding in types.declarations(receiver):
    form = binding_form(types, binding)
    if form is not None:
      annotated.append((form, binding))
  if len(annotated) != 1:
    return None

  form, binding = annotated[0]
  if form is DeclForm.FIELD:
    return binding.annotation.annotation
  if form is DeclForm.VARIABLE:
    return types.parent(binding).annotation.annotation
  return None


def is_resource_data_set(
  types: TypeInfo,
  call: cst.Call,
  targets: Collection[str],
  method: str = "set",
) -> bool:
  """
  Checks whether a call is ``<receiver>.<method>(...)`` on a resource data value.

  Args:
      types: Resolved metadata of the unit.
      call: Candidate call expression.
      targets: Fully qualified resource data type names.
      method: Setter method name.

  Returns:
      True when the receiver's declared type matches.
  """
  func = call.func
  if not isinstance(func, cst.Attribute) or func.attr.value != method:
    return False
  if not isinstance(func.value, cst.Name):
    return False

  annotation = declared_annotation(types, func.value)
  if annotation is None:
    return False

  type_expr = unwrap_annotation(types, annotation)
  if type_expr is None:
    return False

  return not types.qualified_names(type_expr).isdisjoint(targets)


def _run(pass_: Pass) -> List[cst.Call]:
  inspect = pass_.result_of[inspector.ANALYZER]
  targets = frozenset(pass_.config.resource_data_types)
  method = pass_.config.set_method

  return [
    node for node in inspect.preorder(cst.Call) if is_resource_data_set(pass_.types, node, targets, method)
  ]


ANALYZER = Analyzer(
  name="resourcedataset",
  doc="find resource data set() calls for later passes",
  run=_run,
  requires=(inspector.ANALYZER,),
  result_type=list,
)

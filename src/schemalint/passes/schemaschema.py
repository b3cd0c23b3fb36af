"""
Schema Extraction Pass.

The ``schemaschema`` analyzer finds construction sites of the provider schema
type and decodes the keyword arguments later rules inspect::

    schema.Schema(
        type=schema.TypeString,
        computed=True,
        diff_suppress_func=suppress_equivalent_json,
    )

Decoding is conservative. A flag is only true when the literal spells
``True``; a callback is only present when the value is a name, an attribute
or a lambda other than ``None``. Everything else (calls, conditionals,
``**kwargs`` expansion, missing keys) counts as false / absent.
"""

from dataclasses import dataclass, field
from typing import Collection, FrozenSet, List, Optional

import libcst as cst

from schemalint.core.analyzer import Analyzer, Pass
from schemalint.core.unit import TypeInfo
from schemalint.enums import TypeForm
from schemalint.passes import inspector

BOOL_FIELDS = ("computed", "optional", "required", "force_new", "sensitive")
CALLBACK_FIELDS = ("diff_suppress_func", "default_func", "state_func", "validate_func", "set_func")
TYPE_FIELD = "type"


@dataclass(frozen=True)
class SchemaFields:
  """
  Decoded values of the known schema fields.
  """

  computed: bool = False
  optional: bool = False
  required: bool = False
  force_new: bool = False
  sensitive: bool = False
  diff_suppress_func: bool = False
  default_func: bool = False
  state_func: bool = False
  validate_func: bool = False
  set_func: bool = False
  type_name: Optional[str] = None
  """Trailing identifier of the ``type`` value (e.g. "TypeString"), if spelled as a name."""


@dataclass(frozen=True, eq=False)
class SchemaInfo:
  """
  One recognized schema literal.
  """

  node: cst.Call
  type_node: cst.BaseExpression
  """The callee naming the schema type."""

  type_form: TypeForm
  fields: SchemaFields
  keys: FrozenSet[str] = field(default_factory=frozenset)
  """Keyword names spelled in the literal, known or not."""


def is_schema_type(types: TypeInfo, node: cst.BaseExpression, targets: Collection[str]) -> Optional[TypeForm]:
  """
  Checks whether an expression names one of the target schema types.

  Args:
      types: Resolved metadata of the unit.
      node: Candidate callee expression.
      targets: Fully qualified schema type names.

  Returns:
      The spelling variant when it matches, otherwise None.
  """
  if isinstance(node, cst.Attribute):
    form = TypeForm.SELECTOR
  elif isinstance(node, cst.Name):
    form = TypeForm.PLAIN
  else:
    return None

  if types.qualified_names(node).isdisjoint(targets):
    return None
  return form


def decode_bool(value: cst.BaseExpression) -> bool:
  """Returns True only for the literal ``True``."""
  return isinstance(value, cst.Name) and value.value == "True"


def decode_callback(value: cst.BaseExpression) -> bool:
  """Returns True when the value is a statically visible, non-None callable reference."""
  if isinstance(value, cst.Name):
    return value.value not in ("None", "True", "False")
  return isinstance(value, (cst.Attribute, cst.Lambda))


def decode_type_name(value: cst.BaseExpression) -> Optional[str]:
  """Returns the trailing identifier of a Name/Attribute value."""
  if isinstance(value, cst.Attribute):
    return value.attr.value
  if isinstance(value, cst.Name):
    return value.value
  return None


def decode_schema(types: TypeInfo, call: cst.Call, targets: Collection[str]) -> Optional[SchemaInfo]:
  """
  Decodes a call when it constructs a schema literal.

  Args:
      types: Resolved metadata of the unit.
      call: Candidate call expression.
      targets: Fully qualified schema type names.

  Returns:
      The SchemaInfo, or None when the call is not a schema literal.
  """
  form = is_schema_type(types, call.func, targets)
  if form is None:
    return None

  values = {}
  keys = set()
  for arg in call.args:
    # Positional and **expanded arguments are not statically decodable
    if arg.keyword is None:
      continue
    key = arg.keyword.value
    keys.add(key)
    if key in BOOL_FIELDS:
      values[key] = decode_bool(arg.value)
    elif key in CALLBACK_FIELDS:
      values[key] = decode_callback(arg.value)
    elif key == TYPE_FIELD:
      values["type_name"] = decode_type_name(arg.value)

  return SchemaInfo(
    node=call,
    type_node=call.func,
    type_form=form,
    fields=SchemaFields(**values),
    keys=frozenset(keys),
  )


def _run(pass_: Pass) -> List[SchemaInfo]:
  inspect = pass_.result_of[inspector.ANALYZER]
  targets = frozenset(pass_.config.schema_types)

  result: List[SchemaInfo] = []
  for node in inspect.preorder(cst.Call):
    info = decode_schema(pass_.types, node, targets)
    if info is not None:
      result.append(info)
  return result


ANALYZER = Analyzer(
  name="schemaschema",
  doc="find schema literals for later passes",
  run=_run,
  requires=(inspector.ANALYZER,),
  result_type=list,
)

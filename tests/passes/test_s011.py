"""
Tests for the S011 rule.

Verifies:
1.  Reporting when a schema is computed-only with a diff_suppress_func.
2.  Report positions: the type identifier for ``schema.Schema(...)``, the
    opening parenthesis for a bare ``Schema(...)``.
3.  Suppression through ``lintignore`` comments.
4.  Reported positions always fall inside the offending literal.
"""

import pytest

import schemalint
from schemalint.core.executor import Executor
from schemalint.passes import ALL_CHECKS, get_check, s011, schemaschema

MESSAGE = "S011: schema should not only enable computed and configure diff_suppress_func"


def analyze(unit):
  return Executor(ALL_CHECKS).analyze(unit)


def test_selector_literal_reports_at_type_identifier(make_unit, locate):
  unit = make_unit(
    """
    from tfsdk.helper import schema

    SCHEMA = {
      "name": schema.Schema(
        type=schema.TypeString,
        computed=True,
        diff_suppress_func=suppress_case,
      ),
    }
    """
  )

  diagnostics = analyze(unit)

  assert len(diagnostics) == 1
  d = diagnostics[0]
  assert d.rule == "S011"
  assert d.message == MESSAGE
  line, col = locate(unit.source, "schema.Schema")
  assert (d.line, d.column) == (line, col + len("schema."))


def test_plain_literal_reports_at_opening_paren(make_unit, locate):
  unit = make_unit(
    """
    from tfsdk.helper.schema import Schema

    field = Schema(computed=True, diff_suppress_func=suppress_case)
    """
  )

  diagnostics = analyze(unit)

  assert len(diagnostics) == 1
  assert (diagnostics[0].line, diagnostics[0].column) == locate(unit.source, "(computed")


@pytest.mark.parametrize(
  "args",
  [
    "computed=True, optional=True, diff_suppress_func=suppress_case",
    "computed=True, required=True, diff_suppress_func=suppress_case",
    "computed=True",
    "computed=True, diff_suppress_func=None",
    "optional=True, diff_suppress_func=suppress_case",
    "computed=FLAG, diff_suppress_func=suppress_case",
  ],
)
def test_valid_schemas_are_not_reported(make_unit, args):
  unit = make_unit(f"from tfsdk.helper import schema\n\nfield = schema.Schema({args})\n")

  assert analyze(unit) == []


@pytest.mark.parametrize("directive", ["# lintignore:S011", "# lintignore:*", "# lintignore:s011 intentional"])
def test_own_line_directive_suppresses(make_unit, directive):
  unit = make_unit(
    f"""
from tfsdk.helper import schema

SCHEMA = {{
  {directive}
  "name": schema.Schema(computed=True, diff_suppress_func=suppress_case),
  "other": schema.Schema(computed=True, diff_suppress_func=suppress_case),
}}
"""
  )

  diagnostics = analyze(unit)

  assert len(diagnostics) == 1
  assert diagnostics[0].line == 7


def test_trailing_directive_suppresses(make_unit):
  unit = make_unit(
    """
    from tfsdk.helper import schema

    field = schema.Schema(  # lintignore:S011
      computed=True,
      diff_suppress_func=suppress_case,
    )
    """
  )

  assert analyze(unit) == []


def test_directive_for_other_rule_does_not_suppress(make_unit):
  unit = make_unit(
    """
    from tfsdk.helper import schema

    # lintignore:S012
    field = schema.Schema(computed=True, diff_suppress_func=suppress_case)
    """
  )

  assert len(analyze(unit)) == 1


def test_report_lies_within_literal(make_unit):
  unit = make_unit(
    """
    from tfsdk.helper import schema
    from tfsdk.helper.schema import Schema

    a = schema.Schema(computed=True, diff_suppress_func=f)
    b = Schema (computed=True, diff_suppress_func=f)
    c = Schema(
      computed=True,
      diff_suppress_func=f,
    )
    """
  )
  schemas = Executor(ALL_CHECKS).run(schemaschema.ANALYZER, unit)

  diagnostics = analyze(unit)

  assert len(diagnostics) == len(schemas) == 3
  for info, diagnostic in zip(schemas, diagnostics):
    span = unit.types.position(info.node)
    start = (span.start.line, span.start.column + 1)
    end = (span.end.line, span.end.column + 1)
    assert start <= (diagnostic.line, diagnostic.column) <= end


def test_disabled_rule_reports_nothing(make_unit):
  unit = make_unit(
    """
    from tfsdk.helper import schema

    field = schema.Schema(computed=True, diff_suppress_func=suppress_case)
    """
  )

  assert schemalint.lint(unit.source) != []
  assert schemalint.lint(unit.source, config=schemalint.LintConfig(disabled_rules=["S011"])) == []


def test_lint_helper_uses_path():
  source = "from tfsdk.helper.schema import Schema\nx = Schema(computed=True, diff_suppress_func=f)\n"

  diagnostics = schemalint.lint(source, path="resource_thing.py")

  assert [d.location for d in diagnostics] == ["resource_thing.py:2:11"]


def test_registry_lookup():
  assert get_check(" s011 ") is s011.ANALYZER
  assert get_check("S999") is None


def test_trailing_directive_after_multiline_sibling(make_unit):
  unit = make_unit(
    """
    from tfsdk.helper import schema

    pair = (wrap(
      1), schema.Schema(computed=True, diff_suppress_func=f))  # lintignore:S011
    """
  )

  assert analyze(unit) == []


@pytest.mark.parametrize(
  "code",
  [
    "from tfsdk.helper.schema import Schema\n\nfields = [Schema\n  (computed=True, diff_suppress_func=f)]\n",
    "from tfsdk.helper.schema import Schema\n\nfields = [Schema  # why\n\n    (computed=True, diff_suppress_func=f)]\n",
    "from tfsdk.helper.schema import Schema\n\nfield = Schema \\\n  (computed=True, diff_suppress_func=f)\n",
  ],
)
def test_plain_literal_paren_on_next_line(make_unit, locate, code):
  unit = make_unit(code)

  diagnostics = analyze(unit)

  assert len(diagnostics) == 1
  assert (diagnostics[0].line, diagnostics[0].column) == locate(unit.source, "(computed")

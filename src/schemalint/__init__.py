"""
schemalint Package.

A rule-based static analyzer for infrastructure provider code. It inspects
the syntax tree and import-resolved names of provider modules to find schema
declarations whose flag and callback combination would fail provider
validation at runtime.

Usage
-----

.. code-block:: python

    import schemalint

    code = '''
    from tfsdk.helper import schema

    NAME = schema.Schema(computed=True, diff_suppress_func=suppress)
    '''
    for d in schemalint.lint(code):
        print(d.location, d.message)
    # <string>:4:15 S011: schema should not only enable computed and configure diff_suppress_func

Advanced Usage
^^^^^^^^^^^^^^

.. code-block:: python

    from schemalint import Executor, LintConfig, parse_unit
    from schemalint.passes import ALL_CHECKS, schemaschema

    executor = Executor(ALL_CHECKS, LintConfig(schema_types=["mysdk.Schema"]))
    unit = parse_unit(code, "provider.py")
    schemas = executor.run(schemaschema.ANALYZER, unit)
    diagnostics = executor.analyze(unit)
"""

from pathlib import Path
from typing import List, Optional, Union

from schemalint.config import LintConfig
from schemalint.core import (
  Analyzer,
  CompilationUnit,
  Diagnostic,
  Executor,
  UnitReport,
  load_unit,
  parse_unit,
)
from schemalint.passes import ALL_CHECKS

__version__ = "0.1.0"


def lint(
  code: str,
  path: Union[str, Path] = "<string>",
  config: Optional[LintConfig] = None,
) -> List[Diagnostic]:
  """
  Runs every enabled rule over a string of Python code.

  Args:
      code (str): The source code to analyze.
      path (str | Path): Path reported in diagnostics.
      config (LintConfig, optional): Configuration. Defaults to ``LintConfig()``.

  Returns:
      List[Diagnostic]: Findings ordered by position.

  Raises:
      UnitLoadError: If the code is not valid Python.
      AnalyzerError: If an analyzer fails.
  """
  executor = Executor(ALL_CHECKS, config)
  return executor.analyze(parse_unit(code, path))


__all__ = [
  "ALL_CHECKS",
  "Analyzer",
  "CompilationUnit",
  "Diagnostic",
  "Executor",
  "LintConfig",
  "UnitReport",
  "__version__",
  "lint",
  "load_unit",
  "parse_unit",
]

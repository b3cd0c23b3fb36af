"""
Pytest Configuration and Fixtures.

Includes:
- Syspath patching for local imports.
- Unit builders that parse dedented source into compilation units.
- Console isolation so CLI tests capture rich output in memory.
"""

import io
import sys
import textwrap
from pathlib import Path
from typing import Callable

import pytest

# Add src to path so we can import 'schemalint' without installing it
src_path = Path(__file__).parent.parent / "src"
sys.path.insert(0, str(src_path))

from schemalint.core.unit import CompilationUnit, parse_unit  # noqa: E402


def _locate(source: str, needle: str, occurrence: int = 0) -> tuple:
  """
  Finds the 1-based (line, column) of a substring in dedented source.

  Args:
      source: Source text (already dedented).
      needle: Substring to find.
      occurrence: Which match to return (0-based).

  Returns:
      Tuple (line, column), both 1-based.
  """
  seen = 0
  for lineno, text in enumerate(source.splitlines(), start=1):
    col = text.find(needle)
    while col != -1:
      if seen == occurrence:
        return lineno, col + 1
      seen += 1
      col = text.find(needle, col + 1)
  raise AssertionError(f"{needle!r} not found")


@pytest.fixture
def make_unit() -> Callable[..., CompilationUnit]:
  """
  Returns a factory that dedents code and parses it into a unit.
  """

  def _make(code: str, path: str = "provider.py") -> CompilationUnit:
    return parse_unit(textwrap.dedent(code), path)

  return _make


@pytest.fixture
def captured_console():
  """
  Redirects the shared rich console to an in-memory recorder for one test.
  """
  from rich.console import Console

  from schemalint.utils.console import reset_console, set_console

  recorder = Console(file=io.StringIO(), record=True, width=400, force_terminal=False)
  set_console(recorder)
  yield recorder
  reset_console()


@pytest.fixture
def locate() -> Callable[..., tuple]:
  """
  Returns the substring locator used to compute expected diagnostic positions.
  """
  return _locate
